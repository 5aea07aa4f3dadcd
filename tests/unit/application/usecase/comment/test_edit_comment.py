"""Unit tests for EditCommentUseCase."""

import pytest

from talkback.adapter.api import CommentApiClient
from talkback.adapter.error import ApiError
from talkback.application.command import EditCommentCommand
from talkback.application.state import RenderRequest
from talkback.application.usecase.comment import EditCommentUseCase
from talkback.domain.error import ValidationError
from talkback.domain.repository import CommentRepository
from talkback.domain.value import VoteDirection
from tests.conftest import load_page, make_comment, make_principal
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestEditComment:
    """Tests for the edit flow."""

    @pytest.mark.asyncio
    async def test_edit_takes_server_text(self, unit_env):
        comment = make_comment(markdown="typo")
        await load_page(unit_env, comments=[comment], principal=make_principal())
        use_case = await unit_env.get(EditCommentUseCase)
        store = await unit_env.get(CommentRepository)

        result = await use_case.execute(
            EditCommentCommand(comment_id=comment.id, markdown="fixed")
        )

        assert result == RenderRequest.card(comment.id)
        updated = store.find_by_id(comment.id)
        assert updated.markdown == "fixed"
        assert updated.html == "<p>fixed</p>"

    @pytest.mark.asyncio
    async def test_edit_keeps_vote_direction(self, unit_env):
        """The server copy doesn't carry the viewer's vote."""
        comment = make_comment()
        await load_page(unit_env, comments=[comment], principal=make_principal())
        store = await unit_env.get(CommentRepository)
        store.replace_by_id(comment.id, {"direction": VoteDirection.UP})
        use_case = await unit_env.get(EditCommentUseCase)

        await use_case.execute(EditCommentCommand(comment_id=comment.id, markdown="new"))

        assert store.find_by_id(comment.id).direction == VoteDirection.UP

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected(self, unit_env):
        comment = make_comment()
        await load_page(unit_env, comments=[comment])
        use_case = await unit_env.get(EditCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(EditCommentCommand(comment_id=comment.id, markdown=""))

    @pytest.mark.asyncio
    async def test_failed_edit_keeps_old_text(self, unit_env):
        comment = make_comment(markdown="original")
        await load_page(unit_env, comments=[comment])
        use_case = await unit_env.get(EditCommentUseCase)
        store = await unit_env.get(CommentRepository)
        api = await unit_env.get(CommentApiClient)
        api.fail_next(ApiError(403, "Forbidden"))

        with pytest.raises(ApiError):
            await use_case.execute(EditCommentCommand(comment_id=comment.id, markdown="x"))

        assert store.find_by_id(comment.id).markdown == "original"
