"""Balance service behaviour against a real SQLite file."""

import asyncio
from decimal import Decimal

import pytest

from ggstore.modules.ledger import (
    BalanceService,
    DuplicatePaymentError,
    InsufficientBalanceError,
    PaymentReference,
    TransactionKind,
)
from ggstore.modules.users import UserNotFoundError, UserService


@pytest.fixture
def balances(database) -> BalanceService:
    return BalanceService(database)


@pytest.fixture
def users(database) -> UserService:
    return UserService(database)


async def test_apply_transaction_records_and_returns_balance(users, balances):
    await users.ensure_user(1, "alice")

    update = await balances.apply_transaction(1, "50", TransactionKind.DEPOSIT, "PIX")

    assert update.balance == Decimal("50.00")
    assert update.transaction.kind is TransactionKind.DEPOSIT
    assert update.transaction.amount == Decimal("50.00")
    assert await balances.get_balance(1) == Decimal("50.00")


async def test_balance_matches_ledger_sum_after_mixed_operations(users, balances):
    await users.ensure_user(1, "alice")
    amounts = ["10.10", "0.20", "-3.30", "7", "-14.00", "0.01"]

    for amount in amounts:
        await balances.apply_transaction(1, amount, TransactionKind.ADMIN_ADJUSTMENT)

    assert await balances.get_balance(1) == Decimal("0.01")
    assert await balances.ledger_sum(1) == await balances.get_balance(1)


async def test_concurrent_credits_are_not_lost(users, balances):
    await users.ensure_user(1, "alice")

    await asyncio.gather(
        balances.apply_transaction(1, 10, TransactionKind.DEPOSIT),
        balances.apply_transaction(1, 5, TransactionKind.DEPOSIT),
    )

    assert await balances.get_balance(1) == Decimal("15.00")
    assert len(await balances.list_transactions(user_id=1)) == 2


async def test_many_concurrent_updates_match_ledger_sum(users, balances):
    await users.ensure_user(1, "alice")
    await balances.apply_transaction(1, 100, TransactionKind.DEPOSIT)

    amounts = [Decimal("2.50"), Decimal("-1.25")] * 10
    await asyncio.gather(
        *(balances.apply_transaction(1, amount, TransactionKind.ADMIN_ADJUSTMENT) for amount in amounts)
    )

    assert await balances.get_balance(1) == Decimal("112.50")
    assert await balances.ledger_sum(1) == Decimal("112.50")


async def test_required_funds_reject_without_writing(users, balances):
    await users.ensure_user(1, "alice")
    await balances.apply_transaction(1, 20, TransactionKind.DEPOSIT)

    with pytest.raises(InsufficientBalanceError) as excinfo:
        await balances.apply_transaction(1, -30, TransactionKind.PURCHASE, require_funds=True)

    assert excinfo.value.available == Decimal("20.00")
    assert excinfo.value.required == Decimal("30.00")
    assert await balances.get_balance(1) == Decimal("20.00")
    assert len(await balances.list_transactions(user_id=1)) == 1


async def test_exact_balance_debit_is_allowed(users, balances):
    await users.ensure_user(1, "alice")
    await balances.apply_transaction(1, "0.70", TransactionKind.DEPOSIT)
    await balances.apply_transaction(1, "0.10", TransactionKind.DEPOSIT)

    update = await balances.apply_transaction(1, "-0.80", TransactionKind.PURCHASE, require_funds=True)

    assert update.balance == Decimal("0.00")


async def test_concurrent_debits_never_overdraw(users, balances):
    await users.ensure_user(1, "alice")
    await balances.apply_transaction(1, 30, TransactionKind.DEPOSIT)

    results = await asyncio.gather(
        *(balances.apply_transaction(1, -10, TransactionKind.PURCHASE, require_funds=True) for _ in range(5)),
        return_exceptions=True,
    )

    rejected = [r for r in results if isinstance(r, InsufficientBalanceError)]
    assert len(rejected) == 2
    assert await balances.get_balance(1) == Decimal("0.00")
    assert await balances.ledger_sum(1) == Decimal("0.00")


async def test_unknown_user_is_rejected(balances):
    with pytest.raises(UserNotFoundError):
        await balances.apply_transaction(404, 10, TransactionKind.DEPOSIT)

    assert await balances.count_transactions() == 0


async def test_payment_reference_is_applied_once(users, balances):
    await users.ensure_user(1, "alice")
    ref = PaymentReference("wg-123", "pix_wegate")

    await balances.apply_transaction(1, 25, TransactionKind.DEPOSIT, "PIX", ref)
    with pytest.raises(DuplicatePaymentError):
        await balances.apply_transaction(1, 25, TransactionKind.DEPOSIT, "PIX", ref)

    assert await balances.get_balance(1) == Decimal("25.00")


async def test_same_payment_id_from_other_method_is_distinct(users, balances):
    await users.ensure_user(1, "alice")

    await balances.apply_transaction(1, 5, TransactionKind.DEPOSIT, payment_ref=PaymentReference("42", "pix_wegate"))
    await balances.apply_transaction(1, 5, TransactionKind.DEPOSIT, payment_ref=PaymentReference("42", "pix_pagseguro"))

    assert await balances.get_balance(1) == Decimal("10.00")


async def test_concurrent_duplicate_payments_credit_once(users, balances):
    await users.ensure_user(1, "alice")
    ref = PaymentReference("wg-race", "pix_wegate")

    results = await asyncio.gather(
        *(balances.apply_transaction(1, 40, TransactionKind.DEPOSIT, payment_ref=ref) for _ in range(3)),
        return_exceptions=True,
    )

    assert sum(isinstance(r, DuplicatePaymentError) for r in results) == 2
    assert await balances.get_balance(1) == Decimal("40.00")


async def test_history_is_newest_first_and_limited(users, balances):
    await users.ensure_user(1, "alice")
    for amount in (1, 2, 3, 4):
        await balances.apply_transaction(1, amount, TransactionKind.DEPOSIT)

    records = await balances.list_transactions(user_id=1, limit=3, newest_first=True)

    assert [r.amount for r in records] == [Decimal("4.00"), Decimal("3.00"), Decimal("2.00")]
    assert all(r.created_at.tzinfo is not None for r in records)
