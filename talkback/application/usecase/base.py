"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from talkback.application.state import RenderRequest


class BaseUseCase(ABC):
    """Base use case for orchestrating the API client and domain services.

    Use cases apply a confirmed result to the store and tell the caller what
    has to be re-rendered.
    """

    @abstractmethod
    async def execute(self, request: Any) -> RenderRequest:
        pass
