"""Mock renderer providers for testing."""

from dishka import Scope, provide

from talkback.interface.render import RecordingRenderer, Renderer
from talkback.util.di.infrastructure.renderer import RendererProvider


class MockRendererProvider(RendererProvider):
    """Mock renderer provider recording every render call."""

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_renderer(self) -> Renderer:
        """Provide recording renderer."""
        return RecordingRenderer()
