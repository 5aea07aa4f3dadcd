"""In-memory repository implementations."""

from talkback.persistence.repository.inmemory.comment import InMemoryCommentRepository

__all__ = [
    "InMemoryCommentRepository",
]
