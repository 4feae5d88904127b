"""Deposit intents: ask a gateway for PIX instructions, never touch the balance."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Mapping, Optional

from ggstore.modules.ledger import InvalidAmountError, format_brl, parse_amount, to_money
from ggstore.modules.ledger.money import Number
from ggstore.modules.users import UserService

from .exceptions import UnknownProviderError
from .gateways import PaymentGateway
from .models import DepositInstructions
from .qr import render_qr_png
from .references import build_reference

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepositService:
    users: UserService
    gateways: Mapping[str, PaymentGateway]
    default_provider: str
    min_amount: Decimal = Decimal("1.00")
    max_amount: Decimal = Decimal("5000.00")
    reference_factory: Callable[[int], str] = field(default=build_reference)

    def validate_amount(self, raw: Number) -> Decimal:
        amount = parse_amount(raw) if isinstance(raw, str) else to_money(raw)
        if amount <= 0:
            raise InvalidAmountError(str(raw), "amount must be positive")
        if amount < self.min_amount or amount > self.max_amount:
            raise InvalidAmountError(
                str(raw),
                f"amount must be between {format_brl(self.min_amount)} and {format_brl(self.max_amount)}",
            )
        return amount

    def resolve_gateway(self, provider: Optional[str] = None) -> PaymentGateway:
        name = (provider or self.default_provider).strip().lower()
        gateway = self.gateways.get(name)
        if gateway is None:
            raise UnknownProviderError(name, sorted(self.gateways))
        return gateway

    async def create_intent(
        self,
        user_id: int,
        amount: Number,
        provider: Optional[str] = None,
        username: Optional[str] = None,
    ) -> DepositInstructions:
        value = self.validate_amount(amount)
        gateway = self.resolve_gateway(provider)
        user = await self.users.require_user(user_id)

        reference_id = self.reference_factory(user_id)
        intent = await gateway.create_intent(value, user_id, username or user.username, reference_id)

        qr_png = intent.qr_image
        if qr_png is None:
            qr_png = render_qr_png(intent.qr_content or intent.pay_code or "")

        logger.info(
            "Created %s deposit intent %s for user %s (%s)",
            gateway.name,
            reference_id,
            user_id,
            value,
        )
        return DepositInstructions(
            provider=gateway.name,
            reference_id=reference_id,
            provider_order_id=intent.provider_order_id,
            amount=value,
            pay_code=intent.pay_code,
            qr_png=qr_png,
            pix_key=intent.pix_key,
        )
