"""Ledger domain exports"""

from .exceptions import (
    DuplicatePaymentError,
    InsufficientBalanceError,
    InvalidAmountError,
    LedgerError,
)
from .models import BalanceUpdate, PaymentReference, TransactionKind, TransactionRecord
from .money import format_brl, parse_amount, to_money
from .service import BalanceService

__all__ = [
    "BalanceService",
    "BalanceUpdate",
    "DuplicatePaymentError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "LedgerError",
    "PaymentReference",
    "TransactionKind",
    "TransactionRecord",
    "format_brl",
    "parse_amount",
    "to_money",
]
