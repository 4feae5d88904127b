import random
import re
from datetime import date
from decimal import Decimal

import pytest

from ggstore.modules.catalog import (
    UnknownItemTypeError,
    default_catalog,
    generate_gg,
    generate_test_card,
    luhn_check_digit,
    luhn_is_valid,
)

GG_PATTERN = re.compile(r"^\d{16}\|\d{2}\|\d{4}\|\d{3}$")
CARD_NUMBER = re.compile(r"Número: (\d+)")


def test_luhn_known_values():
    assert luhn_is_valid("79927398713")
    assert luhn_is_valid("4111111111111111")
    assert not luhn_is_valid("4111111111111112")
    assert luhn_check_digit("7992739871") == "3"


def test_generate_gg_format():
    rng = random.Random(7)
    for _ in range(20):
        assert GG_PATTERN.match(generate_gg(rng))


def test_generated_cards_pass_luhn():
    rng = random.Random(42)
    for _ in range(50):
        text = generate_test_card(rng, today=date(2026, 1, 1))
        number = CARD_NUMBER.search(text).group(1)
        assert luhn_is_valid(number)
        assert "APENAS PARA TESTES" in text


def test_catalog_resolves_tags_and_aliases():
    catalog = default_catalog()

    assert catalog.resolve("GG").unit_price == Decimal("5.00")
    assert catalog.resolve("card").unit_price == Decimal("10.00")
    assert catalog.resolve("Cartão").tag == "card"


def test_catalog_rejects_unknown_type():
    with pytest.raises(UnknownItemTypeError) as excinfo:
        default_catalog().resolve("bitcoin")

    assert excinfo.value.available == ("card", "gg")
