"""Line-based command input for the terminal comment viewer.

Syntax, one command per line:

    reload
    comment <text>             anon <text>
    reply <id> <text>
    edit <id> <text>
    up <id>   down <id>   unvote <id>
    approve <id>   reject <id>
    sticky <id>   delete <id>   collapse <id>
    sort ta|td|sa|sd
    readonly
    dismiss
"""

from typing import Any
from uuid import UUID

from talkback.application.command import Command, parse_command
from talkback.domain.value import CommentSort, VoteDirection
from talkback.interface.error import CommandParseError

_VOTES = {"up": VoteDirection.UP, "down": VoteDirection.DOWN, "unvote": VoteDirection.NONE}


def parse_line(line: str) -> Command:
    """Parse a line of user input into a command.

    Args:
        line: Input line

    Returns:
        The command

    Raises:
        CommandParseError: If the line isn't a valid command
    """
    verb, _, rest = line.strip().partition(" ")
    verb = verb.lower()
    rest = rest.strip()

    data: dict[str, Any]
    if verb in ("reload", "readonly", "dismiss"):
        data = {
            "reload": {"type": "reload"},
            "readonly": {"type": "toggle_page_readonly"},
            "dismiss": {"type": "dismiss_message"},
        }[verb]
    elif verb in ("comment", "anon"):
        data = {"type": "create_comment", "markdown": rest, "anonymous": verb == "anon"}
    elif verb == "reply":
        comment_id, text = _split_id(rest)
        data = {"type": "create_comment", "parent_id": comment_id, "markdown": text}
    elif verb == "edit":
        comment_id, text = _split_id(rest)
        data = {"type": "edit_comment", "comment_id": comment_id, "markdown": text}
    elif verb in _VOTES:
        data = {"type": "vote_comment", "comment_id": _id(rest), "direction": _VOTES[verb]}
    elif verb in ("approve", "reject"):
        data = {
            "type": "moderate_comment",
            "comment_id": _id(rest),
            "approve": verb == "approve",
        }
    elif verb == "sticky":
        data = {"type": "toggle_sticky", "comment_id": _id(rest)}
    elif verb == "delete":
        data = {"type": "delete_comment", "comment_id": _id(rest)}
    elif verb == "collapse":
        data = {"type": "toggle_collapse", "comment_id": _id(rest)}
    elif verb == "sort":
        try:
            data = {"type": "change_sort", "sort": CommentSort(rest)}
        except ValueError:
            raise CommandParseError(f"Unknown sort: {rest!r}")
    else:
        raise CommandParseError(f"Unknown command: {verb!r}")

    return parse_command(data)


def _id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise CommandParseError(f"Invalid comment ID: {value!r}")


def _split_id(rest: str) -> tuple[UUID, str]:
    comment_id, _, text = rest.partition(" ")
    return _id(comment_id), text.strip()
