"""Admin command exceptions."""


class AdminError(Exception):
    """Base class for admin command errors."""


class PermissionDeniedError(AdminError):
    """The caller is not flagged as an administrator."""


class InvalidArgumentsError(AdminError):
    """Raised when an admin command is missing arguments or has malformed ones."""

    def __init__(self, usage: str) -> None:
        self.usage = usage
        super().__init__(usage)
