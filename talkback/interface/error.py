"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class CommandParseError(InterfaceError):
    """Raised when user input can't be turned into a command."""

    pass
