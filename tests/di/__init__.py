"""Mock providers for testing."""

from .api import MockApiProvider
from .live import MockLiveProvider
from .renderer import MockRendererProvider
from .container import build_test_container

__all__ = [
    "MockApiProvider",
    "MockLiveProvider",
    "MockRendererProvider",
    "build_test_container",
]
