"""Unit tests for domain models."""

from uuid import uuid4

from talkback.domain.model import Comment, Commenter, PageInfo, Principal
from talkback.domain.service import SortService
from talkback.domain.value import ANONYMOUS_ID, CommentSort, VoteDirection


class TestComment:
    """Tests for Comment model."""

    def test_parses_wire_format(self):
        """camelCase wire fields map to snake_case attributes."""
        comment_id, parent_id, user_id = uuid4(), uuid4(), uuid4()

        comment = Comment.model_validate(
            {
                "id": str(comment_id),
                "parentId": str(parent_id),
                "userCreated": str(user_id),
                "markdown": "Hi",
                "html": "<p>Hi</p>",
                "score": 3,
                "isSticky": False,
                "isApproved": True,
                "isPending": False,
                "isDeleted": False,
                "createdTime": "2024-05-01T10:00:00Z",
                "direction": -1,
            }
        )

        assert comment.id == comment_id
        assert comment.parent_id == parent_id
        assert comment.author_id == user_id
        assert comment.direction == VoteDirection.DOWN
        assert comment.is_root is False

    def test_empty_parent_id_is_root(self):
        """The backend may send an empty string for root comments."""
        comment = Comment.model_validate({"id": str(uuid4()), "parentId": ""})

        assert comment.parent_id is None
        assert comment.is_root is True

    def test_with_overrides_ignores_identity_and_unknown_fields(self):
        comment = Comment(id=uuid4(), parent_id=uuid4())

        updated = comment.with_overrides(
            {"id": uuid4(), "parent_id": None, "bogus": 1, "score": 2}
        )

        assert updated.id == comment.id
        assert updated.parent_id == comment.parent_id
        assert updated.score == 2

    def test_default_creation_time_sorts_with_wire_times(self):
        """A comment without createdTime still compares with timezone-aware ones."""
        undated = Comment(id=uuid4())
        dated = Comment.model_validate(
            {"id": str(uuid4()), "createdTime": "2024-05-01T10:00:00Z"}
        )

        ordered = SortService().sort([undated, dated], CommentSort.TIME_ASC)

        assert undated.created_at.tzinfo is not None
        assert [c.id for c in ordered] == [dated.id, undated.id]


class TestCommenter:
    def test_anonymous_display_name(self):
        assert Commenter(id=ANONYMOUS_ID, name="x").display_name == "Anonymous"

    def test_named_display_name(self):
        assert Commenter(id=uuid4(), name="Bob").display_name == "Bob"


class TestPrincipal:
    def test_moderation_capability(self):
        base = {"id": uuid4(), "name": "P"}

        assert Principal(**base).can_moderate is False
        assert Principal(**base, is_owner=True).can_moderate is True
        assert Principal(**base, is_superuser=True).can_moderate is True
        assert Principal(**base, is_moderator=True).can_moderate is True


class TestPageInfo:
    def test_readonly_from_domain_or_page(self):
        base = {"domainId": str(uuid4()), "pageId": str(uuid4())}

        assert PageInfo.model_validate(base).is_readonly is False
        assert PageInfo.model_validate({**base, "isDomainReadonly": True}).is_readonly
        assert PageInfo.model_validate({**base, "isPageReadonly": True}).is_readonly

    def test_default_sort(self):
        info = PageInfo.model_validate(
            {"domainId": str(uuid4()), "pageId": str(uuid4()), "defaultSort": "ta"}
        )

        assert info.default_sort == CommentSort.TIME_ASC
