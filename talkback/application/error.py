"""Application layer errors."""


class ApplicationError(Exception):
    """Base application error."""

    pass


class SessionClosedError(ApplicationError):
    """Raised when a closed comment session is used."""

    pass
