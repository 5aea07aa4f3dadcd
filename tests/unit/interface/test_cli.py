"""Unit tests for command line parsing."""

from uuid import uuid4

import pytest

from talkback.application.command import (
    ChangeSortCommand,
    CreateCommentCommand,
    DismissMessageCommand,
    EditCommentCommand,
    ModerateCommentCommand,
    ReloadCommand,
    TogglePageReadonlyCommand,
    VoteCommentCommand,
)
from talkback.domain.value import CommentSort, VoteDirection
from talkback.interface.cli import parse_line
from talkback.interface.error import CommandParseError


class TestParseLine:
    """Tests for parse_line function."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("reload", ReloadCommand),
            ("  READONLY ", TogglePageReadonlyCommand),
            ("dismiss", DismissMessageCommand),
        ],
    )
    def test_simple_verbs(self, line, expected):
        assert isinstance(parse_line(line), expected)

    def test_comment_and_anonymous(self):
        comment = parse_line("comment Hello there")
        anon = parse_line("anon Psst")

        assert comment == CreateCommentCommand(markdown="Hello there")
        assert anon == CreateCommentCommand(markdown="Psst", anonymous=True)

    def test_reply_and_edit(self):
        comment_id = uuid4()

        reply = parse_line(f"reply {comment_id} Me too")
        edit = parse_line(f"edit {comment_id}  Fixed text ")

        assert reply == CreateCommentCommand(parent_id=comment_id, markdown="Me too")
        assert edit == EditCommentCommand(comment_id=comment_id, markdown="Fixed text")

    @pytest.mark.parametrize(
        "verb, direction",
        [("up", VoteDirection.UP), ("down", VoteDirection.DOWN), ("unvote", VoteDirection.NONE)],
    )
    def test_votes(self, verb, direction):
        comment_id = uuid4()

        command = parse_line(f"{verb} {comment_id}")

        assert command == VoteCommentCommand(comment_id=comment_id, direction=direction)

    def test_moderation(self):
        comment_id = uuid4()

        assert parse_line(f"reject {comment_id}") == ModerateCommentCommand(
            comment_id=comment_id, approve=False
        )

    def test_sort(self):
        assert parse_line("sort td") == ChangeSortCommand(sort=CommentSort.TIME_DESC)

    @pytest.mark.parametrize(
        "line",
        ["frobnicate", "sort xx", "up not-a-uuid", "reply", "delete 123"],
    )
    def test_invalid_lines(self, line):
        with pytest.raises(CommandParseError):
            parse_line(line)
