"""Live update providers."""

from dishka import Scope, provide

from talkback.adapter.live import LiveConnector, WebSocketConnector
from talkback.util.di.base import ProviderBase


class LiveProvider(ProviderBase):
    """Live update component base."""

    __mock_component__ = "live"


class ProdLiveProvider(LiveProvider):
    """Production live update provider using WebSockets."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_live_connector(self) -> LiveConnector:
        """Provide WebSocket connector."""
        return WebSocketConnector()
