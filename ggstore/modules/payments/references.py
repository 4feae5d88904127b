"""Deposit reference ids: ``<user_id>-<epoch milliseconds>``."""

from __future__ import annotations

import time
from typing import Optional

from ggstore.modules.users import MAX_USER_ID

from .exceptions import MalformedReferenceError


def build_reference(user_id: int, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{user_id}-{now_ms}"


def parse_reference(reference: object) -> int:
    """Return the user id encoded in a deposit reference."""
    if not isinstance(reference, str):
        raise MalformedReferenceError(reference)
    head = reference.strip().split("-", 1)[0]
    # str.isdigit accepts superscripts and other non-ASCII digits.
    if not head or not head.isascii() or not head.isdigit():
        raise MalformedReferenceError(reference)
    user_id = int(head)
    if user_id > MAX_USER_ID:
        raise MalformedReferenceError(reference)
    return user_id
