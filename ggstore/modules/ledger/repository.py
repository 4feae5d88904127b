"""Repository protocol for ledger operations."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .models import TransactionKind, TransactionRecord


class LedgerRepository(Protocol):
    async def get_balance(self, user_id: int) -> Decimal | None:
        ...

    async def increment_balance(
        self,
        user_id: int,
        amount: Decimal,
        *,
        require_funds: bool = False,
    ) -> Decimal | None:
        ...

    async def add_transaction(
        self,
        *,
        user_id: int,
        kind: TransactionKind,
        amount: Decimal,
        description: str | None,
        payment_id: str | None = None,
        payment_method: str | None = None,
    ) -> TransactionRecord:
        ...

    async def find_by_payment(self, payment_method: str, payment_id: str) -> TransactionRecord | None:
        ...

    async def list_transactions(
        self,
        *,
        user_id: Optional[int] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[TransactionRecord]:
        ...

    async def count_transactions(self, *, since: Optional[datetime] = None) -> int:
        ...

    async def sum_amounts(self, user_id: int) -> Decimal:
        ...
