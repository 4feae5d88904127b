"""Portuguese reply texts (HTML parse mode) and Telegram size limits."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from html import escape
from typing import Iterable, Sequence

from ggstore.modules.admin import AdminReport, DailyTransactions
from ggstore.modules.checker import CardStatus, CheckResult
from ggstore.modules.ledger import TransactionKind, TransactionRecord, format_brl
from ggstore.modules.payments import DepositInstructions
from ggstore.modules.purchases import PurchaseResult

MESSAGE_LIMIT = 4096
CAPTION_LIMIT = 1024

KIND_LABELS = {
    TransactionKind.DEPOSIT: "Depósito",
    TransactionKind.PURCHASE: "Compra",
    TransactionKind.REFUND: "Estorno",
    TransactionKind.ADMIN_ADJUSTMENT: "Ajuste admin",
}

STATUS_ICONS = {
    CardStatus.LIVE: "✅",
    CardStatus.DIE: "❌",
    CardStatus.UNKNOWN: "❔",
}

HELP_TEXT = "\n".join(
    [
        "<b>Comandos disponíveis</b>",
        "/start - boas-vindas e saldo",
        "/registrar - criar sua conta",
        "/saldo - consultar saldo",
        "/depositar &lt;valor&gt; [wegate|pagseguro] - gerar PIX para depósito",
        "/comprar &lt;gg|card&gt; &lt;quantidade&gt; - comprar itens",
        "/historico - últimas transações",
        "/chk &lt;numero&gt; - verificar um cartão (simulado)",
        "/ajuda - esta mensagem",
        "",
        "<b>Administração</b>",
        "/setsaldo &lt;id&gt; &lt;valor&gt; - ajustar saldo",
        "/relatorio - relatório de usuários",
        "/hoje - transações de hoje",
    ]
)

NOT_REGISTERED = "Você ainda não está registrado. Use /registrar para criar uma conta."
PERMISSION_DENIED = "Acesso negado. Você não tem permissão de administrador para usar este comando."
GENERIC_ERROR = "Ocorreu um erro inesperado. Por favor, tente novamente mais tarde."
DEPOSIT_FAILED = (
    "Ocorreu um erro ao processar seu depósito. Por favor, tente novamente mais tarde "
    "ou entre em contato com o suporte."
)

USAGE_DEPOSIT = "Uso: /depositar &lt;valor&gt; [wegate|pagseguro]. Ex: /depositar 10"
USAGE_PURCHASE = "Uso: /comprar &lt;gg|card&gt; &lt;quantidade&gt;. Ex: /comprar gg 1"
USAGE_CHECK = "Uso: /chk &lt;numero do cartão&gt;"
USAGE_SET_BALANCE = "Uso: /setsaldo &lt;ID_do_usuário&gt; &lt;valor&gt;. Ex: /setsaldo 123456789 100"


def chunk_lines(lines: Iterable[str], limit: int = MESSAGE_LIMIT) -> list[str]:
    """Join lines into messages no longer than ``limit`` characters."""
    chunks: list[str] = []
    current = ""
    for line in lines:
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def _local(moment: datetime, utc_offset_hours: int) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    local = moment.astimezone(timezone(timedelta(hours=utc_offset_hours)))
    return local.strftime("%d/%m/%Y %H:%M")


def _signed(amount: Decimal) -> str:
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_brl(abs(amount))}"


def welcome(name: str, balance: Decimal) -> str:
    return (
        f"Olá, {escape(name)}! Bem-vindo ao bot de GGs e cartões de teste. "
        f"Seu saldo atual é: <b>{format_brl(balance)}</b>."
    )


def registered(created: bool) -> str:
    if created:
        return f"Você foi registrado com sucesso! Seu saldo inicial é {format_brl(Decimal('0'))}."
    return "Você já está registrado!"


def balance(amount: Decimal) -> str:
    return f"Seu saldo atual: <b>{format_brl(amount)}</b>"


def deposit_range(minimum: Decimal, maximum: Decimal) -> str:
    return (
        f"Valor inválido. Informe um valor entre {format_brl(minimum)} e {format_brl(maximum)}, "
        "com até duas casas decimais. Ex: /depositar 10"
    )


def deposit_caption(instructions: DepositInstructions) -> str:
    lines = [f"Para depositar <b>{format_brl(instructions.amount)}</b>, pague o PIX pelo QR Code acima."]
    if instructions.pix_key:
        lines += ["", f"<b>Chave PIX:</b> <code>{escape(instructions.pix_key)}</code>"]
    lines += [
        "",
        f"<i>Referência: {escape(instructions.reference_id)}</i>",
        "<i>O saldo será creditado automaticamente após a confirmação do pagamento.</i>",
    ]
    return "\n".join(lines)


def deposit_code(instructions: DepositInstructions) -> str:
    return f"<b>Código PIX Copia e Cola:</b>\n<code>{escape(instructions.pay_code or '')}</code>"


def deposit_credited(amount: Decimal, new_balance: Decimal) -> str:
    return (
        f"✅ Pagamento confirmado! {format_brl(amount)} foram creditados.\n"
        f"Saldo atual: <b>{format_brl(new_balance)}</b>"
    )


def purchase(result: PurchaseResult) -> list[str]:
    header = (
        f"Compra de {result.quantity} {escape(result.label)}(s) realizada com sucesso! "
        f"Total: {format_brl(result.total)}. Saldo restante: <b>{format_brl(result.balance)}</b>.\n\n"
        f"Seus {escape(result.label)}(s):"
    )
    wrapper = len("<pre></pre>")
    bodies = chunk_lines((escape(item) for item in result.items), MESSAGE_LIMIT - wrapper)
    return [header] + [f"<pre>{body}</pre>" for body in bodies]


def history(records: Sequence[TransactionRecord], utc_offset_hours: int) -> list[str]:
    if not records:
        return ["Você ainda não possui transações."]
    lines = ["<b>Suas últimas transações</b>"]
    for record in records:
        lines.append(
            f"{_local(record.created_at, utc_offset_hours)} | "
            f"{KIND_LABELS.get(record.kind, record.kind)} | {_signed(record.amount)}"
            + (f"\n  {escape(record.description)}" if record.description else "")
        )
    return chunk_lines(lines)


def check_result(result: CheckResult) -> str:
    luhn = "válido" if result.luhn_valid else "inválido"
    return (
        f"{STATUS_ICONS[result.status]} <b>{result.status.value}</b> | "
        f"<code>{escape(result.card)}</code>\n"
        f"Luhn: {luhn}. {escape(result.detail)}"
    )


def balance_adjusted(username: str, user_id: int, new_balance: Decimal) -> str:
    return (
        f"Saldo de {escape(username)} ({user_id}) ajustado. "
        f"Novo saldo: <b>{format_brl(new_balance)}</b>."
    )


def user_not_found(user_id: object) -> str:
    return f"Usuário com ID {escape(str(user_id))} não encontrado."


def report(data: AdminReport, utc_offset_hours: int) -> list[str]:
    summary = data.summary
    lines = [
        f"<b>Relatório</b> ({_local(data.generated_at, utc_offset_hours)})",
        f"Usuários: {summary.user_count} (admins: {summary.admin_count})",
        f"Saldo total: {format_brl(summary.total_balance)}",
        f"Transações nas últimas {data.window_hours}h: {data.recent_transactions}",
        "",
        "<b>Usuários por saldo</b>",
    ]
    for user in data.users:
        flag = " [admin]" if user.is_admin else ""
        lines.append(f"{user.id} | {escape(user.username)}{flag} | {format_brl(user.balance)}")
    return chunk_lines(lines)


def daily(data: DailyTransactions, utc_offset_hours: int) -> list[str]:
    lines = [f"<b>Transações desde {_local(data.since, utc_offset_hours)}</b>"]
    if not data.transactions:
        lines.append("Nenhuma transação hoje.")
    total = Decimal("0")
    for record in data.transactions:
        total += record.amount
        lines.append(
            f"#{record.id} {_local(record.created_at, utc_offset_hours)} | usuário {record.user_id} | "
            f"{KIND_LABELS.get(record.kind, record.kind)} | {_signed(record.amount)}"
        )
    if data.transactions:
        lines.append(f"Total: {len(data.transactions)} transações, saldo líquido {_signed(total)}")
    return chunk_lines(lines)
