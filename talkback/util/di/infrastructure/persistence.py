"""Persistence infrastructure providers."""

from dishka import Scope, provide

from talkback.domain.repository import CommentRepository
from talkback.persistence.repository import InMemoryCommentRepository
from talkback.util.di.base import ProviderBase


class ProdPersistenceProvider(ProviderBase):
    """Comment store provider - concrete, no mocks needed.

    The store only lives in memory, so tests use the production provider.
    Each request scope (comment session) gets a fresh store.
    """

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment store."""
        return InMemoryCommentRepository()
