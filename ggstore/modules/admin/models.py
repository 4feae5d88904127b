"""Report models for admin commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ggstore.modules.ledger import TransactionRecord
from ggstore.modules.users import User, UserSummary


@dataclass(slots=True)
class AdminReport:
    users: Sequence[User]
    summary: UserSummary
    recent_transactions: int
    window_hours: int
    generated_at: datetime


@dataclass(slots=True)
class DailyTransactions:
    since: datetime
    transactions: Sequence[TransactionRecord]
