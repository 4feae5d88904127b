"""Telegram chat interface."""

from .bot import build_application, start_bot, stop_bot

__all__ = ["build_application", "start_bot", "stop_bot"]
