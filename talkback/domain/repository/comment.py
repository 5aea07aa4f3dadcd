"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from talkback.domain.model.comment import Comment
from talkback.domain.value import CommentId


class CommentRepository(ABC):
    """Store of all comments known on the current page, grouped by parent.

    Defines the contract for the comment store. Methods are synchronous: the
    store is only ever mutated from within a single resumed task, so no
    locking is involved. Correctness under racing HTTP responses and live
    updates rests on duplicate suppression in insert() and on by-ID
    replacement in replace_by_id().
    """

    @abstractmethod
    def load(self, comments: Iterable[Comment]) -> None:
        """Replace the whole store with the given comments.

        Args:
            comments: Comments to group by their parent ID
        """
        pass

    @abstractmethod
    def bucket(self, parent_id: Optional[CommentId]) -> list[Comment]:
        """Return direct children of a parent, unsorted.

        Args:
            parent_id: Parent comment ID, or None for root comments

        Returns:
            Children in insertion order; an empty list for unknown parents
        """
        pass

    @abstractmethod
    def insert(self, comment: Comment) -> bool:
        """Append a comment to the bucket of its parent.

        Args:
            comment: The comment to add

        Returns:
            True if added, False if a comment with the same ID already exists
        """
        pass

    @abstractmethod
    def replace_by_id(
        self, comment_id: CommentId, overrides: dict[str, Any]
    ) -> Optional[Comment]:
        """Replace a comment with a copy carrying the given overrides.

        The parent ID never changes: a parent_id key in overrides is ignored.

        Args:
            comment_id: ID of the comment to replace
            overrides: Field values to merge into the stored comment

        Returns:
            The new comment, or None if no comment with that ID is stored
        """
        pass

    @abstractmethod
    def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    def parent_keys(self) -> list[Optional[CommentId]]:
        """Return all parent keys that have at least one child."""
        pass

    def contains(self, comment_id: CommentId) -> bool:
        """Whether a comment with the given ID is stored."""
        return self.find_by_id(comment_id) is not None

    def has_children(self, comment_id: CommentId) -> bool:
        """Whether the comment has at least one reply."""
        return bool(self.bucket(comment_id))
