"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from talkback.config import (
    APISettings,
    EmbedSettings,
    LiveUpdateSettings,
    Settings,
)
from talkback.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_api_settings(self, settings: Settings) -> APISettings:
        """Provide API settings."""
        return settings.api

    @provide(scope=Scope.APP)
    def provide_live_settings(self, settings: Settings) -> LiveUpdateSettings:
        """Provide live update settings."""
        return settings.live

    @provide(scope=Scope.APP)
    def provide_embed_settings(self, settings: Settings) -> EmbedSettings:
        """Provide embed widget settings."""
        return settings.embed
