"""Live update use cases."""

from .apply_live_update import ApplyLiveUpdateUseCase

__all__ = ["ApplyLiveUpdateUseCase"]
