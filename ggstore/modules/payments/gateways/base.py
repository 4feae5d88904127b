"""Gateway adapter contract shared by every payment provider."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol

from ..models import PaymentIntent, PaymentNotification


class PaymentGateway(Protocol):
    name: str

    @property
    def webhook_secret(self) -> str:
        ...

    @property
    def signature_header(self) -> str:
        ...

    async def create_intent(
        self,
        amount: Decimal,
        user_id: int,
        username: Optional[str],
        reference_id: str,
    ) -> PaymentIntent:
        """Create a charge at the provider; raise ``GatewayError`` on any failure."""

    def parse_notification(self, payload: Mapping[str, Any]) -> list[PaymentNotification]:
        """Return the confirmed payments carried by a webhook body (possibly none)."""
