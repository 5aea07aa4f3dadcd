"""Infrastructure layer errors."""

from typing import Optional


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ApiError(AdapterError):
    """Comment backend API error.

    Raised for non-2xx responses, undecodable response bodies and transport
    failures (status 0).
    """

    def __init__(self, status: int, message: str, details: Optional[str] = None):
        self.status = status
        self.message = message
        self.details = details
        super().__init__(f"API error {status}: {message}")


class LiveChannelError(AdapterError):
    """Live update channel error."""

    pass
