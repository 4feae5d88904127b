import random

import pytest

from ggstore.modules.checker import CardStatus, InvalidCardInputError, RandomStatusChecker, normalize_card


def test_normalize_card_strips_separators_and_tail():
    assert normalize_card("4111 1111-1111 1111|12|2030|123") == "4111111111111111"


@pytest.mark.parametrize("raw", ["", "abcd", "1234", "4111x11111111111"])
def test_normalize_card_rejects_garbage(raw):
    with pytest.raises(InvalidCardInputError):
        normalize_card(raw)


async def test_luhn_invalid_card_is_dead():
    checker = RandomStatusChecker(0, 0, random.Random(1))

    result = await checker.check("4111111111111112")

    assert result.status is CardStatus.DIE
    assert result.luhn_valid is False


async def test_valid_card_gets_a_status():
    checker = RandomStatusChecker(0, 0, random.Random(1))

    result = await checker.check("4111111111111111")

    assert result.luhn_valid is True
    assert result.status in set(CardStatus)
