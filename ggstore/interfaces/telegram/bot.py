"""python-telegram-bot application wiring."""

from __future__ import annotations

import logging
from typing import Optional

from telegram.ext import Application, ApplicationBuilder, CommandHandler

from ggstore.core.container import ApplicationContainer

from . import handlers
from .errors import on_error
from .notifier import TelegramDepositNotifier

logger = logging.getLogger(__name__)

COMMANDS = {
    "start": handlers.start,
    "registrar": handlers.register,
    "saldo": handlers.show_balance,
    "depositar": handlers.deposit,
    "comprar": handlers.buy,
    "historico": handlers.history,
    "chk": handlers.check_card,
    "setsaldo": handlers.set_balance,
    "relatorio": handlers.report,
    "hoje": handlers.today,
    "ajuda": handlers.help_command,
    "help": handlers.help_command,
}


def build_application(container: ApplicationContainer, token: Optional[str] = None) -> Application:
    application = ApplicationBuilder().token(token or container.settings.telegram.bot_token).build()
    application.bot_data[handlers.CONTAINER_KEY] = container
    for name, callback in COMMANDS.items():
        application.add_handler(CommandHandler(name, callback, block=False))
    application.add_error_handler(on_error)
    return application


async def start_bot(application: Application, *, drop_pending_updates: bool = True) -> None:
    container: ApplicationContainer = application.bot_data[handlers.CONTAINER_KEY]
    await application.initialize()
    container.webhooks.notifier = TelegramDepositNotifier(application.bot)
    await application.start()
    await application.updater.start_polling(drop_pending_updates=drop_pending_updates)
    logger.info("Telegram bot polling as @%s", application.bot.username)


async def stop_bot(application: Application) -> None:
    container: ApplicationContainer = application.bot_data[handlers.CONTAINER_KEY]
    container.webhooks.notifier = None
    if application.updater is not None and application.updater.running:
        await application.updater.stop()
    if application.running:
        await application.stop()
    await application.shutdown()
    logger.info("Telegram bot stopped")


__all__ = ["COMMANDS", "build_application", "start_bot", "stop_bot"]
