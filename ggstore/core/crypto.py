"""Utilities for signing and verifying webhook payloads."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def sign_payload(body: bytes, secret: str) -> str:
    """Return the hex HMAC-SHA256 of the raw request body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Constant-time comparison of a received signature against the expected one."""
    if not signature:
        return False
    received = signature.strip()
    if received.lower().startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX):]
    expected = sign_payload(body, secret)
    return hmac.compare_digest(expected, received.lower())


__all__ = ["sign_payload", "verify_signature"]
