"""Decimal helpers for amounts expressed in currency units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from .exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Normalise any numeric value to a Decimal rounded to cents."""
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise InvalidAmountError(str(value))
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmountError(str(value)) from exc


def parse_amount(raw: str) -> Decimal:
    """Parse user input such as ``10``, ``10.5`` or ``10,50``.

    At most two decimal places are accepted; anything else is rejected rather
    than silently rounded.
    """
    text = (raw or "").strip().upper().removeprefix("R$").strip().replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidAmountError(raw) from exc
    if not value.is_finite() or value.as_tuple().exponent < -2:
        raise InvalidAmountError(raw)
    return to_money(value)


def format_brl(amount: Decimal) -> str:
    text = f"{to_money(amount):,.2f}"
    return "R$ " + text.replace(",", "X").replace(".", ",").replace("X", ".")
