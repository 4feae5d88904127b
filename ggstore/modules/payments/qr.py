"""QR code rendering for PIX copy-paste codes."""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional

import qrcode

DATA_URI_PREFIX = "data:image"


def render_qr_png(content: str) -> bytes:
    qr = qrcode.QRCode(box_size=10, border=4)
    qr.add_data(content)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def decode_data_uri(value: Optional[str]) -> Optional[bytes]:
    """Decode ``data:image/...;base64,...`` into raw bytes, ``None`` for anything else."""
    if not value or not value.startswith(DATA_URI_PREFIX) or "," not in value:
        return None
    encoded = value.split(",", 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None
