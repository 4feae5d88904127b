"""Purchase flow: debit, then fulfil, compensating on failure."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from decimal import Decimal

from ggstore.modules.catalog import Catalog, CatalogEntry
from ggstore.modules.ledger import (
    BalanceService,
    BalanceUpdate,
    InsufficientBalanceError,
    TransactionKind,
    to_money,
)
from ggstore.modules.users import UserService

from .exceptions import CompensationFailedError, FulfillmentError, InvalidQuantityError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PurchaseResult:
    item_type: str
    label: str
    quantity: int
    total: Decimal
    items: list[str]
    balance: Decimal
    transaction_id: int


@dataclass(slots=True)
class PurchaseService:
    balances: BalanceService
    users: UserService
    catalog: Catalog
    enforce_sufficiency: bool = True
    max_quantity: int = 50
    rng: random.Random = field(default_factory=random.Random)

    def parse_quantity(self, raw: object) -> int:
        if isinstance(raw, bool):
            raise InvalidQuantityError(raw, self.max_quantity)
        try:
            quantity = int(str(raw).strip()) if not isinstance(raw, int) else raw
        except ValueError as exc:
            raise InvalidQuantityError(raw, self.max_quantity) from exc
        if not 1 <= quantity <= self.max_quantity:
            raise InvalidQuantityError(raw, self.max_quantity)
        return quantity

    async def purchase(self, user_id: int, item_type: str, quantity: object) -> PurchaseResult:
        entry = self.catalog.resolve(item_type)
        count = self.parse_quantity(quantity)
        user = await self.users.require_user(user_id)
        total = to_money(entry.unit_price * count)

        if user.balance < total:
            if self.enforce_sufficiency:
                raise InsufficientBalanceError(user_id, total, user.balance)
            logger.warning(
                "Balance check disabled: user %s buying %s for %s with balance %s",
                user_id,
                entry.tag,
                total,
                user.balance,
            )

        debit = await self.balances.apply_transaction(
            user_id,
            -total,
            TransactionKind.PURCHASE,
            f"Compra de {count} {entry.label}(s)",
            require_funds=self.enforce_sufficiency,
        )

        try:
            items = [entry.generate(self.rng) for _ in range(count)]
        except Exception as exc:
            logger.exception("Generating %s x%s failed for user %s", entry.tag, count, user_id)
            refund = await self._compensate(user_id, total, entry, debit)
            raise FulfillmentError(user_id, total, refund.balance) from exc

        return PurchaseResult(
            item_type=entry.tag,
            label=entry.label,
            quantity=count,
            total=total,
            items=items,
            balance=debit.balance,
            transaction_id=debit.transaction.id,
        )

    async def _compensate(
        self,
        user_id: int,
        total: Decimal,
        entry: CatalogEntry,
        debit: BalanceUpdate,
    ) -> BalanceUpdate:
        try:
            refund = await self.balances.apply_transaction(
                user_id,
                total,
                TransactionKind.REFUND,
                f"Estorno automático da compra #{debit.transaction.id} ({entry.label})",
            )
        except Exception as exc:
            logger.critical(
                "Compensating refund FAILED: user %s debit tx %s amount %s must be refunded manually",
                user_id,
                debit.transaction.id,
                total,
            )
            raise CompensationFailedError(user_id, total, debit.transaction.id) from exc

        logger.warning(
            "Refunded %s to user %s for failed purchase tx %s (refund tx %s)",
            total,
            user_id,
            debit.transaction.id,
            refund.transaction.id,
        )
        return refund
