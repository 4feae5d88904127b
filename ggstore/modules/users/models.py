"""Domain models for bot users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

DEFAULT_USERNAME = "Não informado"
# Largest id the BIGINT primary key can hold.
MAX_USER_ID = 2**63 - 1


@dataclass(slots=True)
class User:
    id: int
    username: str
    balance: Decimal
    is_admin: bool = False
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class UserSummary:
    """Aggregates over every stored user."""

    user_count: int
    admin_count: int
    total_balance: Decimal
