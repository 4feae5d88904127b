"""Ledger domain specific exceptions."""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for ledger domain errors."""


class InvalidAmountError(LedgerError):
    """Raised when an amount cannot be parsed or is outside the accepted range."""

    def __init__(self, raw: str, reason: str = "invalid amount") -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"{reason}: {raw!r}")


class InsufficientBalanceError(LedgerError):
    """Raised when a debit would take the balance below zero."""

    def __init__(self, user_id: int, required: Decimal, available: Decimal) -> None:
        self.user_id = user_id
        self.required = required
        self.available = available
        super().__init__(f"User {user_id} needs {required} but has {available}")


class DuplicatePaymentError(LedgerError):
    """Raised when a provider payment has already been credited."""

    def __init__(self, payment_method: str, payment_id: str) -> None:
        self.payment_method = payment_method
        self.payment_id = payment_id
        super().__init__(f"Payment {payment_method}:{payment_id} already recorded")
