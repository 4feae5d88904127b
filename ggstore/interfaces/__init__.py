"""Entry points: HTTP webhooks and the Telegram bot."""
