"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UsageError(InterfaceError):
    """Invalid command line usage."""

    pass
