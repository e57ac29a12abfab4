"""Header Assembler: ordered header set and the headers known up front."""

from __future__ import annotations

import email.utils
import html
from collections.abc import Iterator
from datetime import datetime

from .addresses import encode_address_list
from .config import ComposerConfig
from .encoding import encode_header_field, normalize_whitespace
from .models import Message
from .tokens import TokenSource


class HeaderSet:
    """Ordered mapping of header name to value.

    Names are case-sensitive and unique; setting an existing name replaces
    its value in place.  Empty values are kept but skipped by :meth:`items`.
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def __setitem__(self, name: str, value: str) -> None:
        self._values[name] = value

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name, default)

    def copy(self) -> HeaderSet:
        clone = HeaderSet()
        clone._values = dict(self._values)
        return clone

    def items(self) -> list[tuple[str, str]]:
        """Emittable ``(name, value)`` pairs in insertion order."""
        return [(name, value) for name, value in self._values.items() if value.strip()]


def make_message_id(tokens: TokenSource, hostname: str, length: int = 32) -> str:
    return f"<{tokens(length)}@{hostname}>"


def format_date(now: datetime) -> str:
    """RFC 2822 date; naive datetimes are taken as local time."""
    if now.tzinfo is None:
        now = now.astimezone()
    return email.utils.format_datetime(now)


def format_from(message: Message) -> str:
    if message.from_name:
        return f'"{message.from_name}" <{message.from_address}>'
    return message.from_address


def build_headers(
    message: Message,
    config: ComposerConfig,
    tokens: TokenSource,
    now: datetime,
) -> HeaderSet:
    """Assemble the visible headers known at construction time.

    ``Bcc`` is never part of the set.  Content headers are added at render.
    """
    headers = HeaderSet()
    headers["X-Mailer"] = config.x_mailer
    headers["MIME-Version"] = "1.0"
    if message.cc:
        headers["Cc"] = encode_address_list(message.cc)
    if message.in_reply_to_id:
        headers["In-Reply-To"] = normalize_whitespace(message.in_reply_to_id)
    headers["From"] = encode_address_list(format_from(message))
    headers["Reply-To"] = encode_address_list(message.reply_to or message.from_address)
    headers["To"] = encode_address_list(message.to)
    headers["Subject"] = encode_header_field(html.unescape(message.subject))
    headers["Date"] = format_date(now)
    headers["Message-Id"] = make_message_id(tokens, config.hostname, config.message_id_length)
    return headers
