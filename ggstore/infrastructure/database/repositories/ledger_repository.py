"""SQLAlchemy implementation for the ledger repository"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ggstore.infrastructure.database.models import Transaction, User
from ggstore.modules.ledger.models import TransactionKind, TransactionRecord
from ggstore.modules.ledger.money import to_money


class SqlLedgerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_balance(self, user_id: int) -> Decimal | None:
        balance = await self.session.scalar(select(User.balance).where(User.id == user_id))
        return to_money(balance) if balance is not None else None

    async def increment_balance(
        self,
        user_id: int,
        amount: Decimal,
        *,
        require_funds: bool = False,
    ) -> Decimal | None:
        """Atomic ``balance = balance + amount``; returns None when no row matched."""
        # SQLite keeps NUMERIC as REAL; rounding keeps sums on whole cents.
        new_balance = func.round(User.balance + amount, 2)
        stmt = update(User).where(User.id == user_id)
        if require_funds:
            stmt = stmt.where(new_balance >= 0)
        stmt = (
            stmt.values(balance=new_balance)
            .execution_options(synchronize_session="fetch")
            .returning(User.balance)
        )
        result = await self.session.execute(stmt)
        balance = result.scalar_one_or_none()
        return to_money(balance) if balance is not None else None

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
        tx = Transaction(
            user_id=user_id,
            kind=kind.value,
            amount=amount,
            description=description,
            payment_id=payment_id,
            payment_method=payment_method,
        )
        self.session.add(tx)
        await self.session.flush()
        return self._to_record(tx)

    async def find_by_payment(self, payment_method: str, payment_id: str) -> TransactionRecord | None:
        stmt = select(Transaction).where(
            Transaction.payment_method == payment_method,
            Transaction.payment_id == payment_id,
        )
        result = await self.session.execute(stmt)
        row = result.scalars().first()
        return self._to_record(row) if row is not None else None

    async def list_transactions(
        self,
        *,
        user_id: Optional[int] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        limit: Optional[int] = None,
        newest_first: bool = False,
    ) -> Sequence[TransactionRecord]:
        stmt = select(Transaction)
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        if since is not None:
            stmt = stmt.where(Transaction.created_at >= since)
        if until is not None:
            stmt = stmt.where(Transaction.created_at < until)
        order = desc if newest_first else asc
        stmt = stmt.order_by(order(Transaction.created_at), order(Transaction.id))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_record(row) for row in result.scalars().all()]

    async def count_transactions(self, *, since: Optional[datetime] = None) -> int:
        stmt = select(func.count(Transaction.id))
        if since is not None:
            stmt = stmt.where(Transaction.created_at >= since)
        return int(await self.session.scalar(stmt) or 0)

    async def sum_amounts(self, user_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Transaction.amount), 0)).where(Transaction.user_id == user_id)
        return to_money(await self.session.scalar(stmt) or 0)

    @staticmethod
    def _to_record(model: Transaction) -> TransactionRecord:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return TransactionRecord(
            id=model.id,
            user_id=model.user_id,
            kind=TransactionKind(model.kind),
            amount=to_money(model.amount),
            description=model.description,
            created_at=created_at,
            payment_id=model.payment_id,
            payment_method=model.payment_method,
        )
