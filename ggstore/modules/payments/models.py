"""Domain models for deposits and webhook reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from ggstore.modules.ledger import BalanceUpdate


@dataclass(slots=True)
class PaymentIntent:
    """What a gateway returns for a freshly created charge."""

    provider: str
    reference_id: str
    provider_order_id: Optional[str]
    pay_code: Optional[str]
    qr_image: Optional[bytes] = None
    # Text to encode locally when the provider sends no image.
    qr_content: Optional[str] = None
    pix_key: Optional[str] = None


@dataclass(slots=True)
class DepositInstructions:
    provider: str
    reference_id: str
    provider_order_id: Optional[str]
    amount: Decimal
    pay_code: Optional[str]
    qr_png: bytes
    pix_key: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PaymentNotification:
    """One confirmed payment extracted from a provider callback."""

    reference_id: str
    amount: Decimal
    payment_id: str
    payment_method: str


class ReconciliationStatus(str, Enum):
    CREDITED = "credited"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"


@dataclass(slots=True)
class ReconciliationResult:
    provider: str
    status: ReconciliationStatus
    credits: list[BalanceUpdate] = field(default_factory=list)
    duplicates: int = 0
