"""In-memory comment repository."""

from typing import Any, Iterable, Optional

import logfire

from talkback.domain.model.comment import Comment
from talkback.domain.repository.comment import CommentRepository
from talkback.domain.value import CommentId


class InMemoryCommentRepository(CommentRepository):
    """Arena + index implementation of CommentRepository.

    - _comments: arena mapping comment ID to the current comment instance
    - _children: index mapping parent ID (None for roots) to child IDs in
      insertion order

    Comments never reference each other directly; replacing a comment only
    swaps the arena entry, so bucket order is preserved.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._children: dict[Optional[CommentId], list[CommentId]] = {}

    def __len__(self) -> int:
        return len(self._comments)

    def load(self, comments: Iterable[Comment]) -> None:
        """Replace the whole store with the given comments."""
        self._comments = {}
        self._children = {}
        for comment in comments:
            self.insert(comment)

    def bucket(self, parent_id: Optional[CommentId]) -> list[Comment]:
        """Return direct children of a parent, unsorted."""
        return [self._comments[cid] for cid in self._children.get(parent_id, [])]

    def insert(self, comment: Comment) -> bool:
        """Append a comment to its parent's bucket unless already known."""
        if comment.id in self._comments:
            logfire.debug("Duplicate comment ignored", comment_id=str(comment.id))
            return False

        self._comments[comment.id] = comment
        self._children.setdefault(comment.parent_id, []).append(comment.id)
        return True

    def replace_by_id(
        self, comment_id: CommentId, overrides: dict[str, Any]
    ) -> Optional[Comment]:
        """Replace a stored comment with a copy carrying the overrides."""
        original = self._comments.get(comment_id)
        if original is None:
            logfire.debug("Comment to replace not found", comment_id=str(comment_id))
            return None

        updated = original.with_overrides(overrides)
        self._comments[comment_id] = updated
        return updated

    def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    def parent_keys(self) -> list[Optional[CommentId]]:
        """Return all parent keys that have at least one child."""
        return list(self._children)
