"""Mock API providers for testing."""

from dishka import Scope, provide

from talkback.adapter.api import CommentApiClient, MockCommentApiClient
from talkback.util.di.infrastructure.api import ApiProvider


class MockApiProvider(ApiProvider):
    """Mock API provider using the in-memory backend."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_api_client(self) -> CommentApiClient:
        """Provide mock comment API client."""
        return MockCommentApiClient()
