"""Page use cases."""

from .toggle_readonly import TogglePageReadonlyUseCase

__all__ = ["TogglePageReadonlyUseCase"]
