"""Comment backend API providers."""

from dishka import Scope, provide

from talkback.adapter.api import CommentApiClient, RealCommentApiClient
from talkback.config import APISettings
from talkback.util.di.base import ProviderBase
from talkback.util.error import ConfigurationError


class ApiProvider(ProviderBase):
    """API component base."""

    __mock_component__ = "api"


class ProdApiProvider(ApiProvider):
    """Production API provider talking to the backend over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_comment_api_client(self, api_settings: APISettings) -> CommentApiClient:
        """Provide comment API client.

        Raises:
            ConfigurationError: If the API base URL is not an http(s) URL
        """
        if not api_settings.base_url.startswith(("http://", "https://")):
            raise ConfigurationError("API__BASE_URL must be an http:// or https:// URL")

        return RealCommentApiClient(
            base_url=api_settings.base_url,
            timeout=api_settings.timeout,
        )
