"""Domain models for ledger operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    PURCHASE = "purchase"
    REFUND = "refund"
    ADMIN_ADJUSTMENT = "admin_adjustment"


@dataclass(frozen=True, slots=True)
class PaymentReference:
    """Provider correlation attached to gateway deposits."""

    payment_id: str
    payment_method: str


@dataclass(slots=True)
class TransactionRecord:
    id: int
    user_id: int
    kind: TransactionKind
    amount: Decimal
    description: Optional[str]
    created_at: datetime
    payment_id: Optional[str] = None
    payment_method: Optional[str] = None


@dataclass(slots=True)
class BalanceUpdate:
    user_id: int
    balance: Decimal
    transaction: TransactionRecord
