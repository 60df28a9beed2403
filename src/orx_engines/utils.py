"""Text and URL helpers shared by engines."""

from __future__ import annotations

import re
import unicodedata
from html import unescape
from urllib.parse import urlsplit

_REGEX_STRIP_TAGS = re.compile("<.*?>")


def normalize_text(raw: str | None) -> str:
    """Strip HTML tags, unescape entities, normalize Unicode, collapse whitespace."""
    if not raw:
        return ""

    text = _REGEX_STRIP_TAGS.sub("", raw)
    text = unescape(text)
    text = unicodedata.normalize("NFC", text)
    text = " ".join(text.split())

    c_to_none = {
        ord(ch): None for ch in set(text) if unicodedata.category(ch)[0] == "C"
    }
    if c_to_none:
        text = text.translate(c_to_none)

    return text


def is_http_url(value: str) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in {"http", "https"} and bool(parts.hostname)


def decode_body(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw
