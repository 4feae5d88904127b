"""Admin adjustment and reporting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional

from ggstore.modules.ledger import BalanceService, BalanceUpdate, InvalidAmountError, TransactionKind, to_money
from ggstore.modules.ledger.money import Number
from ggstore.modules.users import User, UserService

from .exceptions import PermissionDeniedError
from .models import AdminReport, DailyTransactions

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_midnight(now: datetime, utc_offset_hours: int) -> datetime:
    """Start of ``now``'s calendar day at the given fixed UTC offset, as UTC."""
    zone = timezone(timedelta(hours=utc_offset_hours))
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(zone)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


@dataclass(slots=True)
class AdminService:
    users: UserService
    balances: BalanceService
    utc_offset_hours: int = -3
    recent_window_hours: int = 24
    clock: Callable[[], datetime] = _utcnow

    async def require_admin(self, admin_id: int) -> User:
        user = await self.users.get_user(admin_id)
        if user is None or not user.is_admin:
            logger.warning("Admin command refused for user %s", admin_id)
            raise PermissionDeniedError()
        return user

    async def set_balance(self, admin_id: int, target_id: int, delta: Number) -> BalanceUpdate:
        """Apply a signed adjustment to ``target_id``'s balance.

        The adjustment may take the balance below zero; it is recorded like
        any other transaction so the ledger stays consistent.
        """
        await self.require_admin(admin_id)
        amount = to_money(delta)
        if amount == Decimal("0"):
            raise InvalidAmountError(str(delta), "adjustment must be non-zero")
        await self.users.require_user(target_id)

        update = await self.balances.apply_transaction(
            target_id,
            amount,
            TransactionKind.ADMIN_ADJUSTMENT,
            f"Ajuste de saldo por admin {admin_id}",
        )
        logger.warning(
            "Admin %s adjusted balance of user %s by %s (now %s)",
            admin_id,
            target_id,
            amount,
            update.balance,
        )
        return update

    async def report(self, admin_id: int) -> AdminReport:
        await self.require_admin(admin_id)
        now = self.clock()
        users = await self.users.list_by_balance()
        summary = await self.users.summarize()
        recent = await self.balances.count_transactions(
            since=now - timedelta(hours=self.recent_window_hours)
        )
        return AdminReport(
            users=users,
            summary=summary,
            recent_transactions=recent,
            window_hours=self.recent_window_hours,
            generated_at=now,
        )

    async def today_transactions(self, admin_id: int, now: Optional[datetime] = None) -> DailyTransactions:
        await self.require_admin(admin_id)
        since = local_midnight(now or self.clock(), self.utc_offset_hours)
        transactions = await self.balances.list_transactions(since=since)
        return DailyTransactions(since=since, transactions=transactions)
