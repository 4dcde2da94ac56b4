"""Decoding of secret field values from their base64 transport encoding."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping

from kds.models import DECODE_FAILED_MARKER


def _as_text(raw: object) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw if isinstance(raw, str) else str(raw)


def decode_value(raw: object) -> tuple[str, bool]:
    """Decode one base64 value to text.

    Returns (text, ok). When the value is not valid base64, or does not
    decode to UTF-8 text, the raw value is returned as text with ok=False.
    Values that are neither str nor bytes fail the same way.
    """
    if raw is None:
        return "", True
    try:
        decoded = base64.b64decode(raw, validate=True)
        return decoded.decode("utf-8"), True
    except (binascii.Error, TypeError, ValueError):
        return _as_text(raw), False


def decode_fields(raw_fields: Mapping[str, object] | None) -> dict[str, str]:
    """Decode every field of a secret.

    A field that fails to decode is kept as its raw value followed by the
    decode-failure marker; it never fails the whole record.
    """
    data: dict[str, str] = {}
    for key, raw in (raw_fields or {}).items():
        text, ok = decode_value(raw)
        data[key] = text if ok else f"{text} {DECODE_FAILED_MARKER}"
    return data


__all__ = [
    "decode_fields",
    "decode_value",
]
