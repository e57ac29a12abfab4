"""Data models for messages, attachments and render results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """The logical message handed to a composer.

    Address fields are pre-formatted address-list strings; display names
    are allowed (``"Jane Doe" <jane@example.com>, bob@example.com``).
    """

    model_config = ConfigDict(frozen=True)

    to: str = Field(description="Visible primary recipients")
    from_address: str = Field(description="Sender address")
    subject: str = Field(default="", description="Raw subject, may hold HTML entities")
    body: str = Field(default="", description="Raw body text, HTML when is_html is set")
    is_html: bool = Field(default=False, description="Body is HTML and needs a text alternative")
    cc: str = Field(default="", description="Visible carbon-copy recipients")
    bcc: str = Field(default="", description="Envelope-only recipients, never emitted as a header")
    from_name: str = Field(default="", description="Optional sender display name")
    reply_to: str = Field(default="", description="Reply-To address, defaults to from_address")
    in_reply_to_id: str = Field(default="", description="Message-Id this message replies to")


class Attachment(BaseModel):
    """A file to attach, read lazily when the message is rendered."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(description="Source path of the attachment bytes")
    name: str = Field(description="Display name used in the MIME headers")
    type: str = Field(default="application/octet-stream", description="MIME content type")
    no_encoding: bool = Field(
        default=False,
        description="Emit the bytes as-is with 7bit transfer encoding instead of base64",
    )


class AttachmentStatus(str, Enum):
    """What happened to an attachment during rendering."""

    INCLUDED = "included"
    UNREADABLE = "unreadable"
    EMPTY = "empty"
    UNDECRYPTABLE = "undecryptable"


@dataclass(frozen=True)
class AttachmentResult:
    """Outcome of loading one attachment descriptor."""

    attachment: Attachment
    status: AttachmentStatus
    detail: str = ""

    @property
    def included(self) -> bool:
        return self.status is AttachmentStatus.INCLUDED


@dataclass(frozen=True)
class RenderedMessage:
    """Frozen result of :meth:`MessageComposer.render`."""

    headers: tuple[tuple[str, str], ...]
    body: bytes
    attachments: tuple[AttachmentResult, ...] = ()
    recipients: tuple[str, ...] = ()
    content_type: str = ""

    def header(self, name: str) -> str | None:
        """Return the value of header *name* (case-insensitive), if emitted."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    def header_bytes(self) -> bytes:
        lines = "".join(f"{key}: {value}\r\n" for key, value in self.headers)
        return lines.encode("utf-8")

    def as_bytes(self) -> bytes:
        """Header block, blank line, body: ready for a transport send."""
        return self.header_bytes() + b"\r\n" + self.body

    @property
    def included(self) -> list[Attachment]:
        return [r.attachment for r in self.attachments if r.included]

    @property
    def omitted(self) -> list[AttachmentResult]:
        return [r for r in self.attachments if not r.included]
