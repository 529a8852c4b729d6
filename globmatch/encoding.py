"""Byte string to code point conversion."""

from __future__ import annotations

import locale
from typing import Optional


def preferred_encoding() -> str:
    """Return the encoding of the active locale (e.g. 'UTF-8')."""

    return locale.getpreferredencoding(False) or "utf-8"


def decode_codepoints(data: bytes, encoding: Optional[str] = None) -> list[int]:
    """Decode `data` and return its code points.

    Raises UnicodeDecodeError if `data` is not valid in the encoding, and
    LookupError if the encoding is unknown.
    """

    text = data.decode(encoding or preferred_encoding(), errors="strict")
    return [ord(c) for c in text]


def raw_codepoints(data: bytes) -> list[int]:
    """Treat every byte as one code unit, without any validation."""

    return list(data)
