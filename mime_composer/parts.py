"""Typed MIME part tree and its serializer.

A message body is either a single :class:`LeafPart` or a
:class:`MultipartPart` whose children are parts themselves.  Nesting
(``multipart/alternative`` inside ``multipart/mixed``) is a property of the
tree; :func:`serialize_body` walks it and emits the boundary delimiters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

CRLF = b"\r\n"


@dataclass(frozen=True)
class LeafPart:
    """A content part: headers plus already transfer-encoded payload."""

    content_type: str
    transfer_encoding: str
    payload: bytes
    extra_headers: tuple[tuple[str, str], ...] = field(default=())

    def headers(self) -> list[tuple[str, str]]:
        return [
            ("Content-Type", self.content_type),
            *self.extra_headers,
            ("Content-Transfer-Encoding", self.transfer_encoding),
        ]


@dataclass(frozen=True)
class MultipartPart:
    """A container part delimiting its children with *boundary*."""

    subtype: str
    boundary: str
    parts: tuple[MimePart, ...]

    @property
    def content_type(self) -> str:
        return f'multipart/{self.subtype}; boundary="{self.boundary}"'

    def headers(self) -> list[tuple[str, str]]:
        return [("Content-Type", self.content_type)]


MimePart = Union[LeafPart, MultipartPart]


def serialize_headers(headers: list[tuple[str, str]]) -> bytes:
    return b"".join(f"{name}: {value}".encode("utf-8") + CRLF for name, value in headers)


def serialize_body(part: MimePart) -> bytes:
    """Serialize the content of *part*, without its own headers."""
    if isinstance(part, LeafPart):
        return part.payload

    delimiter = b"--" + part.boundary.encode("ascii")
    chunks: list[bytes] = []
    for child in part.parts:
        chunks.append(delimiter + CRLF + serialize_part(child) + CRLF)
    chunks.append(delimiter + b"--" + CRLF)
    return b"".join(chunks)


def serialize_part(part: MimePart) -> bytes:
    """Serialize *part* as it appears inside a multipart body."""
    return serialize_headers(part.headers()) + CRLF + serialize_body(part)
