"""Address Extractor plus per-address header encoding for address lists."""

from __future__ import annotations

import re
from collections.abc import Callable

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email

from .encoding import encode_header_field, normalize_whitespace

AddressValidator = Callable[[str], bool]

_CANDIDATE_RE = re.compile(r"\S+@\S+")
_NAME_ADDR_RE = re.compile(r"^(?P<display>.*?)\s*<(?P<addr>[^<>]*)>$", re.DOTALL)
_SEPARATORS = ",;"
_PLACEHOLDER_TLD = "example"


def is_email_address(value: str) -> bool:
    """Syntax-only check; no DNS lookups and no public-deliverability policy.

    Dotless hosts and special-use domains such as ``.local`` or ``.test``
    are accepted: those domains are checked as plain host names under a
    placeholder top-level domain.
    """
    local, at, domain = value.rpartition("@")
    if at and domain.rsplit(".", 1)[-1].lower() in SPECIAL_USE_DOMAIN_NAMES:
        value = f"{local}@{domain}.{_PLACEHOLDER_TLD}"
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def find_addresses(value: str, validator: AddressValidator = is_email_address) -> list[str]:
    """Return the valid addresses in a raw header value, in order.

    Display names are ignored; tokens that start with a quote are taken to
    be a fragment of a quoted display name and skipped.
    """
    found: list[str] = []
    for candidate in _CANDIDATE_RE.findall(value or ""):
        candidate = candidate.strip(_SEPARATORS)
        if not candidate or candidate[0] in "\"'":
            continue
        candidate = candidate.strip("<>'\"")
        if validator(candidate):
            found.append(candidate)
    return found


def split_address_list(value: str) -> list[str]:
    """Split on commas/semicolons outside quoted strings and angle brackets."""
    entries: list[str] = []
    current: list[str] = []
    in_quote = escaped = False
    depth = 0
    for char in value:
        if escaped:
            escaped = False
        elif char == "\\" and in_quote:
            escaped = True
        elif char == '"':
            in_quote = not in_quote
        elif not in_quote and char == "<":
            depth += 1
        elif not in_quote and char == ">" and depth:
            depth -= 1
        elif not in_quote and not depth and char in _SEPARATORS:
            entries.append("".join(current))
            current = []
            continue
        current.append(char)
    entries.append("".join(current))
    return [entry.strip() for entry in entries if entry.strip()]


def _encode_entry(entry: str) -> str:
    if entry.isascii():
        return normalize_whitespace(entry)
    match = _NAME_ADDR_RE.match(entry)
    if match is None or not match.group("display").strip():
        return encode_header_field(entry)
    # an encoded-word may not sit inside a quoted-string
    display = match.group("display").strip().strip('"')
    return f"{encode_header_field(display)} <{match.group('addr').strip()}>"


def encode_address_list(value: str) -> str:
    """Encode an address-list header value one address at a time.

    Only entries holding non-ASCII text are touched, and for
    ``display <addr>`` entries only the display name is encoded.
    """
    value = value.strip(_SEPARATORS + " ")
    if value.isascii():
        return normalize_whitespace(value)
    return ", ".join(_encode_entry(entry) for entry in split_address_list(value))
