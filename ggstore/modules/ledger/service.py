"""Balance service: the only code path that mutates a user's balance."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ggstore.infrastructure.database import Database
from ggstore.modules.users.exceptions import UserNotFoundError

from .exceptions import DuplicatePaymentError, InsufficientBalanceError
from .models import BalanceUpdate, PaymentReference, TransactionKind, TransactionRecord
from .money import Number, to_money
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


def _sql_repository(session: AsyncSession) -> LedgerRepository:
    # Imported lazily to avoid a circular import with the repository layer.
    from ggstore.infrastructure.database.repositories.ledger_repository import SqlLedgerRepository

    return SqlLedgerRepository(session)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(slots=True)
class BalanceService:
    database: Database
    repository_factory: Callable[[AsyncSession], LedgerRepository] = _sql_repository

    async def apply_transaction(
        self,
        user_id: int,
        amount: Number,
        kind: TransactionKind | str,
        description: str = "",
        payment_ref: PaymentReference | None = None,
        *,
        require_funds: bool = False,
    ) -> BalanceUpdate:
        """Add ``amount`` to the balance and append the matching transaction.

        Both writes happen in one database transaction. The returned balance is
        the value read back from storage by the increment itself, so updates
        made concurrently by other tasks are reflected.
        """
        amount = to_money(amount)
        kind = TransactionKind(kind)

        try:
            async with self.database.session() as session:
                repository = self.repository_factory(session)
                if payment_ref is not None:
                    existing = await repository.find_by_payment(
                        payment_ref.payment_method, payment_ref.payment_id
                    )
                    if existing is not None:
                        raise DuplicatePaymentError(payment_ref.payment_method, payment_ref.payment_id)

                balance = await repository.increment_balance(user_id, amount, require_funds=require_funds)
                if balance is None:
                    available = await repository.get_balance(user_id)
                    if available is None:
                        raise UserNotFoundError(user_id)
                    raise InsufficientBalanceError(user_id, -amount, available)

                record = await repository.add_transaction(
                    user_id=user_id,
                    kind=kind,
                    amount=amount,
                    description=description[:255] if description else None,
                    payment_id=payment_ref.payment_id if payment_ref else None,
                    payment_method=payment_ref.payment_method if payment_ref else None,
                )
        except IntegrityError as exc:
            if payment_ref is not None:
                raise DuplicatePaymentError(payment_ref.payment_method, payment_ref.payment_id) from exc
            raise

        logger.info(
            "Applied %s of %s to user %s (tx %s); balance now %s",
            kind.value,
            amount,
            user_id,
            record.id,
            balance,
        )
        return BalanceUpdate(user_id=user_id, balance=to_money(balance), transaction=record)

    async def get_balance(self, user_id: int) -> Decimal:
        async with self.database.session() as session:
            balance = await self.repository_factory(session).get_balance(user_id)
        if balance is None:
            raise UserNotFoundError(user_id)
        return balance

    async def list_transactions(
        self,
        *,
        user_id: Optional[int] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[TransactionRecord]:
        async with self.database.session() as session:
            return await self.repository_factory(session).list_transactions(
                user_id=user_id,
                since=_as_utc(since),
                until=_as_utc(until),
                limit=limit,
                newest_first=newest_first,
            )

    async def count_transactions(self, *, since: Optional[datetime] = None) -> int:
        async with self.database.session() as session:
            return await self.repository_factory(session).count_transactions(since=_as_utc(since))

    async def ledger_sum(self, user_id: int) -> Decimal:
        """Sum of every transaction amount recorded for the user."""
        async with self.database.session() as session:
            return await self.repository_factory(session).sum_amounts(user_id)
