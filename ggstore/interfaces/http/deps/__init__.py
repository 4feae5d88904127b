"""Reusable FastAPI dependencies."""

from .container import get_container, get_webhook_service

__all__ = [
    "get_container",
    "get_webhook_service",
]
