"""GG store: Telegram bot and payment webhooks over a shared balance ledger."""

__version__ = "1.0.0"
