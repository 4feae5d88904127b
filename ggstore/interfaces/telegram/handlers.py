"""Command handlers. Each one resolves services from the container in ``bot_data``.

Domain errors propagate to the application error handler, which turns them
into replies (see ``errors.on_error``).
"""

from __future__ import annotations

import logging
from typing import Sequence

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ggstore.core.container import ApplicationContainer
from ggstore.modules.admin import InvalidArgumentsError
from ggstore.modules.ledger import InvalidAmountError, parse_amount
from ggstore.modules.users import MAX_USER_ID, UserNotFoundError

from . import messages

logger = logging.getLogger(__name__)

CONTAINER_KEY = "container"


def get_container(context: ContextTypes.DEFAULT_TYPE) -> ApplicationContainer:
    return context.bot_data[CONTAINER_KEY]


def _display_name(update: Update) -> str | None:
    user = update.effective_user
    return user.username or user.first_name


async def _reply(update: Update, text: str) -> None:
    await update.effective_message.reply_text(text, parse_mode=ParseMode.HTML)


async def _reply_chunks(update: Update, chunks: Sequence[str]) -> None:
    for chunk in chunks:
        await _reply(update, chunk)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    user, _ = await container.users.ensure_user(update.effective_user.id, _display_name(update))
    await _reply(update, messages.welcome(_display_name(update) or user.username, user.balance))


async def register(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    _, created = await container.users.ensure_user(update.effective_user.id, _display_name(update))
    await _reply(update, messages.registered(created))


async def show_balance(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    user = await container.users.require_user(update.effective_user.id)
    await _reply(update, messages.balance(user.balance))


async def deposit(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    args = context.args or []
    if not args or len(args) > 2:
        raise InvalidArgumentsError(messages.USAGE_DEPOSIT)

    provider = args[1] if len(args) > 1 else None
    try:
        instructions = await container.deposits.create_intent(
            update.effective_user.id,
            args[0],
            provider,
            _display_name(update),
        )
    except InvalidAmountError as exc:
        ledger = container.settings.ledger
        raise InvalidArgumentsError(messages.deposit_range(ledger.min_deposit, ledger.max_deposit)) from exc

    await update.effective_message.reply_photo(
        photo=instructions.qr_png,
        caption=messages.deposit_caption(instructions),
        parse_mode=ParseMode.HTML,
    )
    if instructions.pay_code:
        await _reply(update, messages.deposit_code(instructions))


async def buy(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    args = context.args or []
    if len(args) != 2:
        raise InvalidArgumentsError(messages.USAGE_PURCHASE)

    result = await container.purchases.purchase(update.effective_user.id, args[0], args[1])
    await _reply_chunks(update, messages.purchase(result))


async def history(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    user = await container.users.require_user(update.effective_user.id)
    reporting = container.settings.reporting
    records = await container.balances.list_transactions(
        user_id=user.id,
        limit=reporting.history_limit,
        newest_first=True,
    )
    await _reply_chunks(update, messages.history(records, reporting.utc_offset_hours))


async def check_card(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    args = context.args or []
    if not args:
        raise InvalidArgumentsError(messages.USAGE_CHECK)

    await _reply(update, "Verificando...")
    result = await container.checker.check("".join(args))
    await _reply(update, messages.check_result(result))


async def set_balance(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    admin_id = update.effective_user.id
    await container.admin.require_admin(admin_id)

    args = context.args or []
    if len(args) != 2:
        raise InvalidArgumentsError(messages.USAGE_SET_BALANCE)
    try:
        target_id = int(args[0])
        delta = parse_amount(args[1])
    except (ValueError, InvalidAmountError) as exc:
        raise InvalidArgumentsError(messages.USAGE_SET_BALANCE) from exc
    if not 0 < target_id <= MAX_USER_ID:
        raise InvalidArgumentsError(messages.USAGE_SET_BALANCE)

    try:
        result = await container.admin.set_balance(admin_id, target_id, delta)
    except UserNotFoundError:
        await _reply(update, messages.user_not_found(target_id))
        return

    target = await container.users.require_user(target_id)
    await _reply(update, messages.balance_adjusted(target.username, target_id, result.balance))


async def report(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    data = await container.admin.report(update.effective_user.id)
    await _reply_chunks(update, messages.report(data, container.settings.reporting.utc_offset_hours))


async def today(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    container = get_container(context)
    data = await container.admin.today_transactions(update.effective_user.id)
    await _reply_chunks(update, messages.daily(data, container.settings.reporting.utc_offset_hours))


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _reply(update, messages.HELP_TEXT)
