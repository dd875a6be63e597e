"""Strict URL-safe base64 decoding for Gmail body data."""
from __future__ import annotations

import base64
import binascii
import re

from oldnews.ingestion.common.errors import DecodeError

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def decode_body(data: str, *, message_id: str | None = None) -> bytes:
    """Decode URL-safe base64 text into raw bytes.

    Anything outside the URL-safe alphabet (``+``, ``/`` and whitespace
    included), a length that is not a multiple of four, or a padding the codec
    rejects raises :class:`DecodeError`.
    """
    if not data:
        return b""
    if not _URLSAFE_ALPHABET.fullmatch(data):
        raise DecodeError("characters outside the URL-safe base64 alphabet", message_id)
    if len(data) % 4:
        raise DecodeError(f"length {len(data)} is not a multiple of 4", message_id)
    try:
        return base64.b64decode(data, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(str(exc), message_id) from exc
