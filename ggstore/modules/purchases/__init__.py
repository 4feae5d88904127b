"""Purchase flow exports"""

from .exceptions import (
    CompensationFailedError,
    FulfillmentError,
    InvalidQuantityError,
    PurchaseError,
)
from .service import PurchaseResult, PurchaseService

__all__ = [
    "CompensationFailedError",
    "FulfillmentError",
    "InvalidQuantityError",
    "PurchaseError",
    "PurchaseResult",
    "PurchaseService",
]
