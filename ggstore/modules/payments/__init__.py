"""Payments domain exports"""

from .deposits import DepositService
from .exceptions import (
    GatewayError,
    InvalidSignatureError,
    MalformedNotificationError,
    MalformedReferenceError,
    PaymentError,
    UnknownProviderError,
)
from .gateways import PagSeguroGateway, PaymentGateway, WegateGateway
from .models import (
    DepositInstructions,
    PaymentIntent,
    PaymentNotification,
    ReconciliationResult,
    ReconciliationStatus,
)
from .payloads import decode_payload
from .references import build_reference, parse_reference
from .webhooks import DepositNotifier, WebhookService

__all__ = [
    "DepositInstructions",
    "DepositNotifier",
    "DepositService",
    "GatewayError",
    "InvalidSignatureError",
    "MalformedNotificationError",
    "MalformedReferenceError",
    "PagSeguroGateway",
    "PaymentError",
    "PaymentGateway",
    "PaymentIntent",
    "PaymentNotification",
    "ReconciliationResult",
    "ReconciliationStatus",
    "UnknownProviderError",
    "WebhookService",
    "WegateGateway",
    "build_reference",
    "decode_payload",
    "parse_reference",
]
