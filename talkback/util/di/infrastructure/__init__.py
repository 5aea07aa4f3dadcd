"""Infrastructure providers."""

# Import bases
from .api import ApiProvider
from .live import LiveProvider
from .persistence import ProdPersistenceProvider
from .renderer import RendererProvider

# Import implementations (needed for __subclasses__())
from .api import ProdApiProvider  # noqa: F401
from .live import ProdLiveProvider  # noqa: F401
from .renderer import ProdRendererProvider  # noqa: F401

__all__ = [
    "ApiProvider",
    "LiveProvider",
    "ProdApiProvider",
    "ProdLiveProvider",
    "ProdPersistenceProvider",
    "ProdRendererProvider",
    "RendererProvider",
]
