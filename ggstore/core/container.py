"""Dependency container wiring infrastructure and services for one process."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

import httpx

from ggstore.core.config import Settings, get_settings
from ggstore.infrastructure.database import Database
from ggstore.modules.admin import AdminService
from ggstore.modules.catalog import Catalog, default_catalog
from ggstore.modules.checker import RandomStatusChecker, StatusChecker
from ggstore.modules.ledger import BalanceService
from ggstore.modules.payments import (
    DepositService,
    PagSeguroGateway,
    PaymentGateway,
    WebhookService,
    WegateGateway,
)
from ggstore.modules.purchases import PurchaseService
from ggstore.modules.users import UserService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    database: Database
    http_client: httpx.AsyncClient
    catalog: Catalog
    gateways: dict[str, PaymentGateway]
    users: UserService
    balances: BalanceService
    purchases: PurchaseService
    deposits: DepositService
    webhooks: WebhookService
    admin: AdminService
    checker: StatusChecker

    @classmethod
    def build(
        cls,
        settings: Optional[Settings] = None,
        *,
        database: Optional[Database] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        checker: Optional[StatusChecker] = None,
        rng: Optional[random.Random] = None,
    ) -> "ApplicationContainer":
        settings = settings or get_settings()
        database = database or Database.from_settings(settings.database, debug=settings.debug)
        http_client = http_client or httpx.AsyncClient()
        catalog = default_catalog()

        gateways: dict[str, PaymentGateway] = {
            WegateGateway.name: WegateGateway(settings.wegate, http_client),
            PagSeguroGateway.name: PagSeguroGateway(settings.pagseguro, http_client),
        }
        users = UserService(database)
        balances = BalanceService(database)

        return cls(
            settings=settings,
            database=database,
            http_client=http_client,
            catalog=catalog,
            gateways=gateways,
            users=users,
            balances=balances,
            purchases=PurchaseService(
                balances,
                users,
                catalog,
                enforce_sufficiency=settings.ledger.enforce_sufficiency,
                max_quantity=settings.ledger.max_purchase_quantity,
                rng=rng or random.SystemRandom(),
            ),
            deposits=DepositService(
                users,
                gateways,
                settings.payments.default_provider,
                min_amount=settings.ledger.min_deposit,
                max_amount=settings.ledger.max_deposit,
            ),
            webhooks=WebhookService(balances, gateways),
            admin=AdminService(
                users,
                balances,
                utc_offset_hours=settings.reporting.utc_offset_hours,
                recent_window_hours=settings.reporting.recent_window_hours,
            ),
            checker=checker
            or RandomStatusChecker(settings.checker.min_delay, settings.checker.max_delay),
        )

    async def start(self, *, create_schema: bool = True) -> None:
        self.database.open()
        if create_schema:
            await self.database.create_all()
        if not self.settings.ledger.enforce_sufficiency:
            logger.warning("Balance sufficiency check is DISABLED; purchases may overdraw balances")
        logger.info(
            "Container started (database %s)",
            self.database.engine.url.render_as_string(hide_password=True),
        )

    async def close(self) -> None:
        await self.http_client.aclose()
        await self.database.close()
        logger.info("Container closed")


__all__ = ["ApplicationContainer"]
