from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ggstore.modules.admin import PermissionDeniedError, local_midnight
from ggstore.modules.ledger import InvalidAmountError, TransactionKind
from ggstore.modules.users import UserNotFoundError


async def test_non_admin_cannot_adjust(container, make_user):
    await make_user(1)
    await make_user(2, "10")

    with pytest.raises(PermissionDeniedError):
        await container.admin.set_balance(1, 2, "100")

    assert await container.balances.get_balance(2) == Decimal("10.00")
    assert await container.balances.count_transactions() == 1


async def test_unregistered_caller_is_denied(container, make_user):
    await make_user(2)

    with pytest.raises(PermissionDeniedError):
        await container.admin.report(999)


async def test_admin_adjustment_accepts_signed_delta(container, make_user):
    await make_user(1, admin=True)
    await make_user(2, "10")

    credit = await container.admin.set_balance(1, 2, "100")
    debit = await container.admin.set_balance(1, 2, Decimal("-150"))

    assert credit.balance == Decimal("110.00")
    assert debit.balance == Decimal("-40.00")
    assert debit.transaction.kind is TransactionKind.ADMIN_ADJUSTMENT
    assert debit.transaction.description == "Ajuste de saldo por admin 1"
    assert await container.balances.ledger_sum(2) == Decimal("-40.00")


async def test_zero_adjustment_is_rejected(container, make_user):
    await make_user(1, admin=True)
    await make_user(2)

    with pytest.raises(InvalidAmountError):
        await container.admin.set_balance(1, 2, "0")


async def test_adjusting_unknown_user(container, make_user):
    await make_user(1, admin=True)

    with pytest.raises(UserNotFoundError):
        await container.admin.set_balance(1, 404, "5")


async def test_report_lists_users_by_balance(container, make_user):
    await make_user(1, admin=True)
    await make_user(2, "30")
    await make_user(3, "70")

    report = await container.admin.report(1)

    assert [user.id for user in report.users] == [3, 2, 1]
    assert report.summary.user_count == 3
    assert report.summary.admin_count == 1
    assert report.summary.total_balance == Decimal("100.00")
    assert report.recent_transactions == 2


async def test_today_transactions_since_local_midnight(container, make_user):
    await make_user(1, admin=True)
    await make_user(2, "30")

    daily = await container.admin.today_transactions(1)

    assert len(daily.transactions) == 1
    assert daily.transactions[0].user_id == 2
    assert daily.since <= datetime.now(timezone.utc)


async def test_today_excludes_transactions_before_midnight(container, make_user):
    await make_user(1, admin=True)
    await make_user(2, "30")

    tomorrow = datetime.now(timezone.utc) + timedelta(days=1, hours=4)
    daily = await container.admin.today_transactions(1, now=tomorrow)

    assert daily.transactions == []


def test_local_midnight_uses_fixed_offset():
    # 02:00 UTC is still the previous day in UTC-3.
    now = datetime(2026, 3, 10, 2, 0, tzinfo=timezone.utc)

    assert local_midnight(now, -3) == datetime(2026, 3, 9, 3, 0, tzinfo=timezone.utc)
    assert local_midnight(now, 0) == datetime(2026, 3, 10, 0, 0, tzinfo=timezone.utc)
