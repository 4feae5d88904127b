"""Deposit confirmations pushed to users through the bot."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from telegram import Bot
from telegram.constants import ParseMode

from . import messages


@dataclass(slots=True)
class TelegramDepositNotifier:
    bot: Bot

    async def notify_deposit(self, user_id: int, amount: Decimal, balance: Decimal) -> None:
        # Private chats share the user's id.
        await self.bot.send_message(
            chat_id=user_id,
            text=messages.deposit_credited(amount, balance),
            parse_mode=ParseMode.HTML,
        )
