"""Domain layer DI providers."""

from dishka import Scope, provide

from talkback.domain.repository import CommentRepository
from talkback.domain.service import (
    CardService,
    ReconcilerService,
    SortService,
    TreeService,
)
from talkback.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Stateless services are APP-scoped. The reconciler is bound to a comment
    store and therefore REQUEST-scoped: one per comment session.
    """

    @provide(scope=Scope.APP)
    def get_sort_service(self) -> SortService:
        """Provide sort domain service."""
        return SortService()

    @provide(scope=Scope.APP)
    def get_card_service(self) -> CardService:
        """Provide card state domain service."""
        return CardService()

    @provide(scope=Scope.APP)
    def get_tree_service(
        self, sort_service: SortService, card_service: CardService
    ) -> TreeService:
        """Provide tree domain service."""
        return TreeService(sort_service=sort_service, card_service=card_service)

    @provide(scope=Scope.REQUEST)
    def get_reconciler_service(
        self, store: CommentRepository, card_service: CardService
    ) -> ReconcilerService:
        """Provide reconciler domain service."""
        return ReconcilerService(store=store, card_service=card_service)
