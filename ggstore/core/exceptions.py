"""Infrastructure level exceptions shared by every module."""


class InfrastructureError(Exception):
    """Base class for retryable infrastructure failures."""


class StorageUnavailableError(InfrastructureError):
    """Raised when the database cannot be reached or is temporarily locked."""
