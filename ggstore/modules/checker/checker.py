"""Card status checking capability.

``RandomStatusChecker`` is a placeholder: it waits a random delay and answers
with a random status. It never contacts any card network.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from ggstore.modules.catalog import luhn_is_valid

from .exceptions import InvalidCardInputError

logger = logging.getLogger(__name__)


class CardStatus(str, Enum):
    LIVE = "LIVE"
    DIE = "DIE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class CheckResult:
    card: str
    status: CardStatus
    detail: str
    luhn_valid: bool


class StatusChecker(Protocol):
    async def check(self, card: str) -> CheckResult:
        ...


def normalize_card(raw: str) -> str:
    """Strip spaces, dashes and an optional ``|mm|yyyy|cvv`` tail."""
    number = (raw or "").split("|", 1)[0].replace(" ", "").replace("-", "")
    if not number.isascii() or not number.isdigit() or not 12 <= len(number) <= 19:
        raise InvalidCardInputError(raw)
    return number


@dataclass(slots=True)
class RandomStatusChecker:
    min_delay: float = 0.5
    max_delay: float = 2.0
    rng: random.Random = field(default_factory=random.Random)

    async def check(self, card: str) -> CheckResult:
        number = normalize_card(card)
        valid = luhn_is_valid(number)
        await asyncio.sleep(self.rng.uniform(self.min_delay, max(self.min_delay, self.max_delay)))

        if not valid:
            status, detail = CardStatus.DIE, "Número não passa na verificação de Luhn"
        else:
            status = self.rng.choice(list(CardStatus))
            detail = "Resultado simulado"
        logger.info("Checked card ending %s: %s", number[-4:], status.value)
        return CheckResult(card=number, status=status, detail=detail, luhn_valid=valid)
