"""Sort/group domain service."""

from functools import cmp_to_key
from typing import Callable, Iterable

from talkback.domain.error import UnknownSortError
from talkback.domain.model.comment import Comment
from talkback.domain.value import CommentSort

from .base import Service

Comparator = Callable[[Comment, Comment], int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


COMPARATORS: dict[CommentSort, Comparator] = {
    CommentSort.TIME_ASC: lambda a, b: _cmp(a.created_at, b.created_at),
    CommentSort.TIME_DESC: lambda a, b: _cmp(b.created_at, a.created_at),
    CommentSort.SCORE_ASC: lambda a, b: a.score - b.score,
    CommentSort.SCORE_DESC: lambda a, b: b.score - a.score,
}


def sticky_rank(comment: Comment) -> int:
    """Partition key: 0 for a live sticky root comment, 1 for everything else.

    A deleted sticky comment loses its priority and sorts like any other.
    """
    if comment.is_sticky and not comment.is_deleted and comment.is_root:
        return 0
    return 1


class SortService(Service):
    """Domain service ordering the comments of one bucket."""

    def comparator(self, sort: CommentSort | str) -> Comparator:
        """Return the full comparator for a sort: sticky first, then the sort.

        Args:
            sort: Comment sort identifier

        Returns:
            Comparator function returning <0, 0 or >0

        Raises:
            UnknownSortError: If the sort identifier is not recognised
        """
        try:
            by_sort = COMPARATORS[CommentSort(sort)]
        except ValueError:
            raise UnknownSortError(str(sort))

        def compare(a: Comment, b: Comment) -> int:
            i = sticky_rank(a) - sticky_rank(b)
            if i == 0:
                i = by_sort(a, b)
            return i

        return compare

    def sort(self, comments: Iterable[Comment], sort: CommentSort | str) -> list[Comment]:
        """Sort a bucket of comments.

        The sort is stable: comments comparing equal keep their bucket order,
        so sorting the same input twice yields the same output.

        Args:
            comments: Comments sharing a parent
            sort: Comment sort identifier

        Returns:
            New list in display order
        """
        return sorted(comments, key=cmp_to_key(self.comparator(sort)))
