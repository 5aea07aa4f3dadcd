"""Renderer providers."""

from dishka import Scope, provide

from talkback.interface.render import Renderer, TextRenderer
from talkback.util.di.base import ProviderBase


class RendererProvider(ProviderBase):
    """Renderer component base."""

    __mock_component__ = "renderer"


class ProdRendererProvider(RendererProvider):
    """Production renderer provider writing plain text to stdout."""

    __is_mock__ = False

    @provide(scope=Scope.REQUEST)
    def get_renderer(self) -> Renderer:
        """Provide text renderer."""
        return TextRenderer()
