"""PagSeguro/PagBank orders adapter (PIX QR codes, card charges in notifications)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, ClassVar, Mapping, Optional

import httpx
from pydantic import ValidationError

from ggstore.core.config import PagSeguroSettings
from ggstore.modules.ledger import to_money
from ggstore.schemas import PagSeguroOrderNotification

from ..exceptions import GatewayError, MalformedNotificationError
from ..models import PaymentIntent, PaymentNotification

logger = logging.getLogger(__name__)

PAID_STATUS = "PAID"
METHOD_TAGS = {
    "PIX": "pix_pagseguro",
    "CREDIT_CARD": "card_pagseguro",
    "DEBIT_CARD": "card_pagseguro",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_cents(amount: Decimal) -> int:
    return int(to_money(amount) * 100)


@dataclass(slots=True)
class PagSeguroGateway:
    settings: PagSeguroSettings
    client: httpx.AsyncClient
    clock: Callable[[], datetime] = _utcnow

    name: ClassVar[str] = "pagseguro"

    @property
    def webhook_secret(self) -> str:
        return self.settings.webhook_secret

    @property
    def signature_header(self) -> str:
        return self.settings.signature_header

    def _order_payload(
        self,
        amount: Decimal,
        user_id: int,
        username: Optional[str],
        reference_id: str,
    ) -> dict[str, Any]:
        cents = to_cents(amount)
        expires = self.clock() + timedelta(minutes=self.settings.qr_code_expiration_minutes)
        payload: dict[str, Any] = {
            "reference_id": reference_id,
            "customer": {
                "name": username or f"Usuário {user_id}",
                "email": f"{user_id}@telegram.invalid",
            },
            "items": [
                {
                    "reference_id": "deposito",
                    "name": "Depósito de saldo",
                    "quantity": 1,
                    "unit_amount": cents,
                }
            ],
            "qr_codes": [
                {
                    "amount": {"value": cents},
                    "expiration_date": expires.isoformat(timespec="seconds"),
                }
            ],
        }
        if self.settings.notification_url:
            payload["notification_urls"] = [self.settings.notification_url]
        return payload

    async def create_intent(
        self,
        amount: Decimal,
        user_id: int,
        username: Optional[str],
        reference_id: str,
    ) -> PaymentIntent:
        if not self.settings.token or not self.settings.api_url:
            raise GatewayError(self.name, "PagSeguro token is not configured")

        try:
            response = await self.client.post(
                f"{self.settings.api_url.rstrip('/')}/orders",
                json=self._order_payload(amount, user_id, username, reference_id),
                headers={"Authorization": f"Bearer {self.settings.token}"},
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "PagSeguro rejected order %s: HTTP %s %s",
                reference_id,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise GatewayError(self.name, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("PagSeguro request for order %s failed: %s", reference_id, exc)
            raise GatewayError(self.name, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise GatewayError(self.name, "response is not valid JSON") from exc

        if not isinstance(data, dict):
            raise GatewayError(self.name, "unexpected response shape")
        qr_codes = data.get("qr_codes") or []
        if not qr_codes or not isinstance(qr_codes[0], dict) or not qr_codes[0].get("text"):
            raise GatewayError(self.name, "order created without a PIX QR code")

        text = qr_codes[0]["text"]
        return PaymentIntent(
            provider=self.name,
            reference_id=reference_id,
            provider_order_id=data.get("id"),
            pay_code=text,
            qr_content=text,
        )

    def parse_notification(self, payload: Mapping[str, Any]) -> list[PaymentNotification]:
        try:
            order = PagSeguroOrderNotification.model_validate(payload)
        except ValidationError as exc:
            raise MalformedNotificationError(str(exc)) from exc

        paid = [charge for charge in order.charges if charge.status.upper() == PAID_STATUS]
        if not paid:
            logger.info("Ignoring PagSeguro order %s without paid charges", order.id)
            return []
        if not order.reference_id:
            raise MalformedNotificationError(f"order {order.id} has no reference_id")

        notifications = []
        for charge in paid:
            method = (charge.payment_method.type if charge.payment_method else None) or "PIX"
            if charge.amount.value <= 0:
                raise MalformedNotificationError(f"charge {charge.id} has a non-positive amount")
            notifications.append(
                PaymentNotification(
                    reference_id=order.reference_id,
                    amount=to_money(Decimal(charge.amount.value) / 100),
                    payment_id=charge.id,
                    payment_method=METHOD_TAGS.get(method.upper(), "pix_pagseguro"),
                )
            )
        return notifications
