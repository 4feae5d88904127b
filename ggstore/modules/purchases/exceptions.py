"""Purchase flow exceptions."""

from decimal import Decimal


class PurchaseError(Exception):
    """Base class for purchase errors."""


class InvalidQuantityError(PurchaseError):
    """Raised when the requested quantity is not an integer in the allowed range."""

    def __init__(self, raw: object, maximum: int) -> None:
        self.raw = raw
        self.maximum = maximum
        super().__init__(f"Invalid quantity {raw!r} (allowed 1..{maximum})")


class FulfillmentError(PurchaseError):
    """Item generation failed after the debit; the debit was refunded."""

    def __init__(self, user_id: int, amount: Decimal, balance: Decimal) -> None:
        self.user_id = user_id
        self.amount = amount
        self.balance = balance
        super().__init__(f"Fulfillment failed for user {user_id}; refunded {amount}")


class CompensationFailedError(PurchaseError):
    """Item generation failed and the compensating refund could not be applied."""

    def __init__(self, user_id: int, amount: Decimal, debit_transaction_id: int) -> None:
        self.user_id = user_id
        self.amount = amount
        self.debit_transaction_id = debit_transaction_id
        super().__init__(
            f"Refund of {amount} for user {user_id} (debit tx {debit_transaction_id}) failed"
        )
