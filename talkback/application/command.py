"""User commands.

Every user interaction with the comment widget is a command value. Commands
form a tagged union on the `type` field, so they can be parsed from plain
data (e.g. JSON sent by a UI shell) and are dispatched through a single
handler.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from talkback.domain.value import CommentId, CommentSort, VoteDirection


class BaseCommand(BaseModel):
    """Base class for commands."""

    model_config = ConfigDict(frozen=True)


class ReloadCommand(BaseCommand):
    """Refetch the page and re-render all comments."""

    type: Literal["reload"] = "reload"


class CreateCommentCommand(BaseCommand):
    """Submit a new root comment, or a reply when parent_id is set."""

    type: Literal["create_comment"] = "create_comment"
    parent_id: Optional[CommentId] = None
    markdown: str
    anonymous: bool = False


class EditCommentCommand(BaseCommand):
    type: Literal["edit_comment"] = "edit_comment"
    comment_id: CommentId
    markdown: str


class VoteCommentCommand(BaseCommand):
    """Vote for a comment; NONE undoes a previous vote."""

    type: Literal["vote_comment"] = "vote_comment"
    comment_id: CommentId
    direction: VoteDirection


class ModerateCommentCommand(BaseCommand):
    type: Literal["moderate_comment"] = "moderate_comment"
    comment_id: CommentId
    approve: bool


class ToggleStickyCommand(BaseCommand):
    type: Literal["toggle_sticky"] = "toggle_sticky"
    comment_id: CommentId


class DeleteCommentCommand(BaseCommand):
    type: Literal["delete_comment"] = "delete_comment"
    comment_id: CommentId


class TogglePageReadonlyCommand(BaseCommand):
    type: Literal["toggle_page_readonly"] = "toggle_page_readonly"


class ChangeSortCommand(BaseCommand):
    type: Literal["change_sort"] = "change_sort"
    sort: CommentSort


class ToggleCollapseCommand(BaseCommand):
    """Collapse or expand the replies of a comment (session-local)."""

    type: Literal["toggle_collapse"] = "toggle_collapse"
    comment_id: CommentId


class DismissMessageCommand(BaseCommand):
    type: Literal["dismiss_message"] = "dismiss_message"


Command = Annotated[
    Union[
        ReloadCommand,
        CreateCommentCommand,
        EditCommentCommand,
        VoteCommentCommand,
        ModerateCommentCommand,
        ToggleStickyCommand,
        DeleteCommentCommand,
        TogglePageReadonlyCommand,
        ChangeSortCommand,
        ToggleCollapseCommand,
        DismissMessageCommand,
    ],
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: Any) -> Command:
    """Parse a command from plain data.

    Args:
        data: Mapping with a `type` key and the command fields

    Returns:
        The command instance

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are invalid
    """
    return _command_adapter.validate_python(data)
