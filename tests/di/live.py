"""Mock live update providers for testing."""

from dishka import Scope, provide

from talkback.adapter.live import LiveConnector, MockLiveConnector
from talkback.util.di.infrastructure.live import LiveProvider


class MockLiveProvider(LiveProvider):
    """Mock live provider handing out in-memory connections."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_live_connector(self) -> LiveConnector:
        """Provide mock live connector."""
        return MockLiveConnector()
