"""Payment domain specific exceptions."""

from typing import Sequence

from ggstore.core.exceptions import InfrastructureError


class PaymentError(Exception):
    """Base class for payment domain errors."""


class GatewayError(PaymentError, InfrastructureError):
    """Raised when a payment provider call fails or returns an unusable answer."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class UnknownProviderError(PaymentError):
    """Raised when a deposit names a provider that is not configured."""

    def __init__(self, provider: str, available: Sequence[str]) -> None:
        self.provider = provider
        self.available = list(available)
        super().__init__(f"Unknown payment provider {provider!r}")


class InvalidSignatureError(PaymentError):
    """Webhook signature missing or not matching the shared secret."""


class MalformedReferenceError(PaymentError):
    """Raised when a reference id does not start with a numeric user id."""

    def __init__(self, reference: object) -> None:
        self.reference = reference
        super().__init__(f"Malformed payment reference {reference!r}")


class MalformedNotificationError(PaymentError):
    """Webhook body could not be decoded into a provider notification."""
