"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class UnknownSortError(DomainError):
    """Raised when a comment sort identifier is not recognised."""

    def __init__(self, sort: str):
        self.sort = sort
        super().__init__(f"Unknown comment sort: {sort}")
