from decimal import Decimal

import pytest

from ggstore.modules.ledger import InvalidAmountError, format_brl, parse_amount, to_money


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10", Decimal("10.00")),
        ("10,5", Decimal("10.50")),
        ("10.50", Decimal("10.50")),
        ("R$ 7,25", Decimal("7.25")),
        ("-3", Decimal("-3.00")),
    ],
)
def test_parse_amount_accepts_both_separators(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.234", "nan", "inf", "10,,5"])
def test_parse_amount_rejects_garbage(raw):
    with pytest.raises(InvalidAmountError):
        parse_amount(raw)


def test_to_money_uses_float_repr():
    assert to_money(0.1 + 0.2) == Decimal("0.30")
    assert to_money(2.675) == Decimal("2.68")


def test_format_brl_uses_brazilian_separators():
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(Decimal("0")) == "R$ 0,00"
