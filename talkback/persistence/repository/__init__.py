"""Repository implementations."""

from talkback.domain.repository import CommentRepository
from talkback.persistence.repository.inmemory import InMemoryCommentRepository

__all__ = [
    "CommentRepository",
    "InMemoryCommentRepository",
]
