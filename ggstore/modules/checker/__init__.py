"""Card status checker exports"""

from .checker import (
    CardStatus,
    CheckResult,
    RandomStatusChecker,
    StatusChecker,
    normalize_card,
)
from .exceptions import CheckerError, InvalidCardInputError

__all__ = [
    "CardStatus",
    "CheckResult",
    "CheckerError",
    "InvalidCardInputError",
    "RandomStatusChecker",
    "StatusChecker",
    "normalize_card",
]
