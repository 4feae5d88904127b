"""Wegate PIX adapter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Mapping, Optional

import httpx
from pydantic import ValidationError

from ggstore.core.config import WegateSettings
from ggstore.modules.ledger import InvalidAmountError, to_money
from ggstore.schemas import WegateNotification

from ..exceptions import GatewayError, MalformedNotificationError
from ..models import PaymentIntent, PaymentNotification
from ..qr import decode_data_uri

logger = logging.getLogger(__name__)

CONFIRMED_EVENT = "pix.payment.confirmed"
COMPLETED_STATUS = "completed"


@dataclass(slots=True)
class WegateGateway:
    settings: WegateSettings
    client: httpx.AsyncClient

    name: ClassVar[str] = "wegate"
    method_tag: ClassVar[str] = "pix_wegate"

    @property
    def webhook_secret(self) -> str:
        return self.settings.webhook_secret

    @property
    def signature_header(self) -> str:
        return self.settings.signature_header

    async def create_intent(
        self,
        amount: Decimal,
        user_id: int,
        username: Optional[str],
        reference_id: str,
    ) -> PaymentIntent:
        if not self.settings.api_key or not self.settings.api_url:
            raise GatewayError(self.name, "Wegate API credentials are not configured")

        payload = {
            "value": f"{amount:.2f}",
            "description": f"Depósito para o usuário {username or user_id}",
            "reference_id": reference_id,
        }
        try:
            response = await self.client.post(
                f"{self.settings.api_url.rstrip('/')}/generate",
                json=payload,
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Wegate rejected intent %s: HTTP %s %s",
                reference_id,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise GatewayError(self.name, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Wegate request for intent %s failed: %s", reference_id, exc)
            raise GatewayError(self.name, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise GatewayError(self.name, "response is not valid JSON") from exc

        if not isinstance(data, dict):
            raise GatewayError(self.name, "unexpected response shape")
        if data.get("success") is False:
            raise GatewayError(self.name, str(data.get("error") or "request refused"))

        qr_data = data.get("qrcode_data") or data.get("qr_code_image_base64_data")
        pay_code = data.get("pix_code")
        if not qr_data and not pay_code:
            raise GatewayError(self.name, "response carries neither QR data nor PIX code")

        image = decode_data_uri(qr_data)
        return PaymentIntent(
            provider=self.name,
            reference_id=reference_id,
            provider_order_id=_optional_str(data.get("id") or data.get("transaction_id")),
            pay_code=pay_code,
            qr_image=image,
            qr_content=None if image else (qr_data or pay_code),
            pix_key=self.settings.pix_key or None,
        )

    def parse_notification(self, payload: Mapping[str, Any]) -> list[PaymentNotification]:
        try:
            notification = WegateNotification.model_validate(payload)
        except ValidationError as exc:
            raise MalformedNotificationError(str(exc)) from exc

        if notification.event != CONFIRMED_EVENT or notification.status != COMPLETED_STATUS:
            logger.info(
                "Ignoring Wegate event %s with status %s",
                notification.event,
                notification.status,
            )
            return []

        if not notification.reference_id or notification.amount is None:
            raise MalformedNotificationError("reference_id and amount are required")
        try:
            amount = to_money(notification.amount)
        except InvalidAmountError as exc:
            raise MalformedNotificationError(str(exc)) from exc
        if amount <= 0:
            raise MalformedNotificationError(f"non-positive amount {amount}")

        payment_id = _optional_str(notification.id or notification.transaction_id)
        return [
            PaymentNotification(
                reference_id=notification.reference_id,
                amount=amount,
                payment_id=payment_id or notification.reference_id,
                payment_method=self.method_tag,
            )
        ]


def _optional_str(value: object) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
