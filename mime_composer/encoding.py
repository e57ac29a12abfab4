"""Header-value encoding shared by subjects and address lists."""

from __future__ import annotations

import base64
import re
from collections.abc import Iterator

_WHITESPACE_RE = re.compile(r"\s{2,}|[\r\n]")
# 40 base64 characters; with the wrapper and a header name a folded line stays under 76
_WORD_OCTETS = 30
_FOLD = "\r\n "


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs (and any CR/LF) to one space and strip."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def _utf8_chunks(value: str) -> Iterator[bytes]:
    chunk = b""
    for char in value:
        octets = char.encode("utf-8")
        if chunk and len(chunk) + len(octets) > _WORD_OCTETS:
            yield chunk
            chunk = b""
        chunk += octets
    if chunk:
        yield chunk


def encode_header_field(value: str) -> str:
    """Encode *value* for use in a header.

    Non-ASCII values become ``=?UTF-8?B?...?=`` encoded-words; a leading or
    trailing double quote is kept outside of them.  Values longer than
    30 UTF-8 octets are split on character boundaries into several
    encoded-words joined by folding whitespace, which readers concatenate
    back without a space.  ASCII values only get their whitespace
    normalized and are never folded.
    """
    value = value.strip()
    if value.isascii():
        return normalize_whitespace(value)

    leading = trailing = ""
    if value.startswith('"'):
        leading, value = '"', value[1:]
    if value.endswith('"'):
        trailing, value = '"', value[:-1]
    words = [f"=?UTF-8?B?{base64.b64encode(chunk).decode('ascii')}?=" for chunk in _utf8_chunks(value)]
    return f"{leading}{_FOLD.join(words)}{trailing}"
