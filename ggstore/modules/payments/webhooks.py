"""Webhook reconciliation: authenticate, decode and credit confirmed payments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Protocol

from ggstore.core.crypto import verify_signature
from ggstore.modules.ledger import (
    BalanceService,
    BalanceUpdate,
    DuplicatePaymentError,
    PaymentReference,
    TransactionKind,
)

from .exceptions import InvalidSignatureError, UnknownProviderError
from .gateways import PaymentGateway
from .models import PaymentNotification, ReconciliationResult, ReconciliationStatus
from .payloads import decode_payload
from .references import parse_reference

logger = logging.getLogger(__name__)


class DepositNotifier(Protocol):
    async def notify_deposit(self, user_id: int, amount: Decimal, balance: Decimal) -> None:
        ...


def describe_deposit(notification: PaymentNotification) -> str:
    if notification.payment_method.startswith("card"):
        return f"Pagamento com cartão confirmado (Ref: {notification.reference_id})"
    return f"Depósito PIX confirmado (Ref: {notification.reference_id})"


@dataclass(slots=True)
class WebhookService:
    balances: BalanceService
    gateways: Mapping[str, PaymentGateway]
    notifier: Optional[DepositNotifier] = None

    def gateway(self, provider: str) -> PaymentGateway:
        gateway = self.gateways.get(provider)
        if gateway is None:
            raise UnknownProviderError(provider, sorted(self.gateways))
        return gateway

    def verify(self, gateway: PaymentGateway, body: bytes, headers: Mapping[str, str]) -> None:
        secret = gateway.webhook_secret
        if not secret:
            logger.warning("No webhook secret configured for %s; signature check skipped", gateway.name)
            return
        signature = headers.get(gateway.signature_header)
        if not verify_signature(body, signature, secret):
            logger.warning(
                "Rejected %s webhook: %s signature",
                gateway.name,
                "invalid" if signature else "missing",
            )
            raise InvalidSignatureError(f"{gateway.name} webhook signature mismatch")

    async def reconcile(
        self,
        provider: str,
        body: bytes,
        headers: Mapping[str, str],
        content_type: Optional[str] = None,
    ) -> ReconciliationResult:
        """Credit every confirmed payment carried by the raw request ``body``.

        Ordering matters: the signature is checked before the body is
        interpreted, and references are decoded before anything is written.
        A notification that was already credited is acknowledged as a
        duplicate without touching the balance.

        Each payment is credited in its own unit of work. If a later charge
        in a multi-charge order fails, the earlier ones stay committed; the
        provider redelivers the order and those come back as duplicates.
        """
        gateway = self.gateway(provider)
        self.verify(gateway, body, headers)

        notifications = gateway.parse_notification(decode_payload(body, content_type))
        result = ReconciliationResult(provider=gateway.name, status=ReconciliationStatus.IGNORED)
        if not notifications:
            return result

        targets = [(parse_reference(item.reference_id), item) for item in notifications]
        for user_id, notification in targets:
            update = await self._credit(user_id, notification)
            if update is None:
                result.duplicates += 1
            else:
                result.credits.append(update)

        if result.credits:
            result.status = ReconciliationStatus.CREDITED
        elif result.duplicates:
            result.status = ReconciliationStatus.DUPLICATE
        return result

    async def _credit(self, user_id: int, notification: PaymentNotification) -> Optional[BalanceUpdate]:
        try:
            update = await self.balances.apply_transaction(
                user_id,
                notification.amount,
                TransactionKind.DEPOSIT,
                describe_deposit(notification),
                PaymentReference(notification.payment_id, notification.payment_method),
            )
        except DuplicatePaymentError:
            logger.info(
                "Payment %s:%s already credited; acknowledging duplicate",
                notification.payment_method,
                notification.payment_id,
            )
            return None

        logger.info(
            "Credited %s to user %s from %s payment %s",
            notification.amount,
            user_id,
            notification.payment_method,
            notification.payment_id,
        )
        await self._notify(update, notification)
        return update

    async def _notify(self, update: BalanceUpdate, notification: PaymentNotification) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.notify_deposit(update.user_id, notification.amount, update.balance)
        except Exception:
            # The credit is already committed; a failed chat message must not undo the ack.
            logger.exception("Could not notify user %s about payment %s", update.user_id, notification.payment_id)
