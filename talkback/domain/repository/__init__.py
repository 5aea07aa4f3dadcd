"""Repository interfaces for the comment tree.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from talkback.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
