"""Comment entity.

Comments form a tree on a page: each comment points to its parent by ID
(None for root comments). The tree itself is never materialized as object
references; it is reconstructed from the parent index kept by the store.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, field_validator

from talkback.domain.model.common import DomainModel
from talkback.domain.value import CommentId, UserId, VoteDirection

# Fields a reconciliation override may never touch
IMMUTABLE_FIELDS = frozenset({"id", "parent_id"})


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a page or a reply to another comment.

    State flags are not independent: a deleted comment renders as deleted
    regardless of is_pending/is_approved, and is_sticky only matters for root
    comments.
    """

    id: CommentId
    parent_id: Optional[CommentId] = None
    author_id: Optional[UserId] = Field(default=None, alias="userCreated")
    markdown: str = ""
    html: str = ""
    score: int = 0
    is_sticky: bool = False
    is_approved: bool = True
    is_pending: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdTime"
    )
    direction: VoteDirection = VoteDirection.NONE

    @field_validator("parent_id", "author_id", mode="before")
    @classmethod
    def empty_id_is_none(cls, v: Any) -> Any:
        """The backend may send an empty string instead of null."""
        return v or None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def with_overrides(self, overrides: dict[str, Any]) -> "Comment":
        """Return a copy with the given fields replaced.

        Unknown fields and the immutable identity fields (id, parent_id) are
        ignored.

        Args:
            overrides: Field values keyed by attribute name

        Returns:
            New comment instance
        """
        update = {
            k: v
            for k, v in overrides.items()
            if k in type(self).model_fields and k not in IMMUTABLE_FIELDS
        }
        return self.model_copy(update=update)
