"""Translate domain exceptions into user replies."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ggstore.modules.admin import InvalidArgumentsError, PermissionDeniedError
from ggstore.modules.catalog import UnknownItemTypeError
from ggstore.modules.checker import InvalidCardInputError
from ggstore.modules.ledger import InsufficientBalanceError, InvalidAmountError, format_brl
from ggstore.modules.payments import GatewayError, UnknownProviderError
from ggstore.modules.purchases import CompensationFailedError, FulfillmentError, InvalidQuantityError
from ggstore.modules.users import UserNotFoundError

from . import messages

logger = logging.getLogger(__name__)


def _unknown_item(exc: UnknownItemTypeError) -> str:
    options = " ou ".join(f'"{tag}"' for tag in exc.available)
    return f"Tipo de item inválido. Escolha {options}."


def _insufficient(exc: InsufficientBalanceError) -> str:
    return (
        f"Saldo insuficiente! Você precisa de {format_brl(exc.required)}, "
        f"mas tem apenas {format_brl(exc.available)}."
    )


def _fulfillment(exc: FulfillmentError) -> str:
    return (
        f"Não foi possível gerar seus itens. O valor de {format_brl(exc.amount)} foi estornado. "
        f"Saldo atual: {format_brl(exc.balance)}."
    )


def _compensation(exc: CompensationFailedError) -> str:
    return (
        "Não foi possível gerar seus itens e o estorno automático falhou. "
        f"Contate o suporte informando a transação #{exc.debit_transaction_id}."
    )


ERROR_MESSAGES: dict[type[Exception], Callable[[Exception], str]] = {
    UserNotFoundError: lambda exc: messages.NOT_REGISTERED,
    PermissionDeniedError: lambda exc: messages.PERMISSION_DENIED,
    InvalidArgumentsError: lambda exc: exc.usage,
    InvalidAmountError: lambda exc: "Valor inválido. Use um número positivo com até duas casas decimais.",
    InvalidQuantityError: lambda exc: (
        f"Quantidade inválida. Use um número entre 1 e {exc.maximum}. Ex: /comprar gg 1"
    ),
    UnknownItemTypeError: _unknown_item,
    InsufficientBalanceError: _insufficient,
    UnknownProviderError: lambda exc: (
        f"Provedor de pagamento desconhecido. Use: {', '.join(exc.available)}."
    ),
    GatewayError: lambda exc: messages.DEPOSIT_FAILED,
    InvalidCardInputError: lambda exc: f"Número de cartão inválido.\n{messages.USAGE_CHECK}",
    FulfillmentError: _fulfillment,
    CompensationFailedError: _compensation,
}


def describe_error(exc: BaseException) -> Optional[str]:
    """User-facing text for a known error, ``None`` for anything unexpected."""
    for cls in type(exc).__mro__:
        formatter = ERROR_MESSAGES.get(cls)
        if formatter is not None:
            return formatter(exc)
    return None


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """PTB error handler: reply with a specific or generic message and log."""
    error = context.error
    text = describe_error(error) if error is not None else None

    if text is None:
        logger.error("Unhandled error while processing update %s", update, exc_info=error)
        text = messages.GENERIC_ERROR
    elif isinstance(error, (GatewayError, CompensationFailedError)):
        logger.error("Command failed: %s", error, exc_info=error)
    else:
        logger.info("Command rejected: %s", error)

    if isinstance(update, Update) and update.effective_message is not None:
        await update.effective_message.reply_text(text, parse_mode=ParseMode.HTML)
