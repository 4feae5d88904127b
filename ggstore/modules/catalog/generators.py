"""Synthetic test artifact generators.

Values are random but always follow a fixed format. Card numbers carry a
valid Luhn check digit so they pass client-side validation in sandboxes; they
are not real cards.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True, slots=True)
class CardBrand:
    name: str
    prefixes: tuple[str, ...]
    length: int
    cvv_length: int


CARD_BRANDS: tuple[CardBrand, ...] = (
    CardBrand("Visa", ("4",), 16, 3),
    CardBrand("MasterCard", ("5",), 16, 3),
    CardBrand("Amex", ("34", "37"), 15, 4),
    CardBrand("Discover", ("6011",), 16, 3),
)


def _digits(rng: random.Random, count: int) -> str:
    return "".join(str(rng.randrange(10)) for _ in range(count))


def luhn_check_digit(partial: str) -> str:
    """Check digit that makes ``partial + digit`` pass the Luhn test."""
    total = 0
    # Rightmost digit of the partial number is doubled once the check digit is appended.
    for index, char in enumerate(reversed(partial)):
        digit = int(char)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return str((10 - total % 10) % 10)


def luhn_is_valid(number: str) -> bool:
    if not number.isdigit() or len(number) < 2:
        return False
    return luhn_check_digit(number[:-1]) == number[-1]


def generate_gg(rng: Optional[random.Random] = None) -> str:
    """GG line in the ``NNNNNNNNNNNNNNNN|NN|NNNN|NNN`` format."""
    rng = rng or random.Random()
    return "|".join((_digits(rng, 16), _digits(rng, 2), _digits(rng, 4), _digits(rng, 3)))


def generate_card_number(brand: CardBrand, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    prefix = rng.choice(brand.prefixes)
    partial = prefix + _digits(rng, brand.length - len(prefix) - 1)
    return partial + luhn_check_digit(partial)


def generate_test_card(rng: Optional[random.Random] = None, today: Optional[date] = None) -> str:
    rng = rng or random.Random()
    today = today or date.today()
    brand = rng.choice(CARD_BRANDS)
    number = generate_card_number(brand, rng)
    exp_month = rng.randint(1, 12)
    exp_year = today.year + rng.randint(1, 5)
    low = 10 ** (brand.cvv_length - 1)
    cvv = rng.randint(low, low * 10 - 1)
    return (
        f"Tipo: {brand.name}, Número: {number}, Validade: {exp_month:02d}/{exp_year}, "
        f"CVV: {cvv} (APENAS PARA TESTES - NÃO É UM CARTÃO REAL)"
    )
