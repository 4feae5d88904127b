"""Decode raw webhook bodies (JSON or urlencoded form) into plain mappings."""

from __future__ import annotations

import json
from typing import Any, Optional
from urllib.parse import parse_qsl

from .exceptions import MalformedNotificationError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def decode_payload(body: bytes, content_type: Optional[str] = None) -> dict[str, Any]:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedNotificationError("body is not UTF-8") from exc

    if content_type and content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE:
        return dict(parse_qsl(text, keep_blank_values=True))

    try:
        data = json.loads(text)
    except ValueError as exc:
        raise MalformedNotificationError("body is not valid JSON") from exc
    if not isinstance(data, dict):
        raise MalformedNotificationError("JSON body must be an object")
    return data
