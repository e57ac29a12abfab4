"""The Message Composer: a mutable builder that renders to a frozen message.

Usage::

    composer = MessageComposer(Message(to="a@example.com", from_address="b@example.com"))
    composer.add_attachments([Attachment(filename="/tmp/r.pdf", name="r.pdf", type="application/pdf")])
    raw = composer.render().as_bytes()

Rendering happens once; later calls return the same :class:`RenderedMessage`
and any further mutation raises :class:`ComposerFinalizedError`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

import structlog

from .addresses import AddressValidator, find_addresses, is_email_address
from .attachments import FileReader, encode_attachments, read_file
from .body import build_body
from .config import ComposerConfig
from .crypto import Decryptor
from .errors import ComposerFinalizedError
from .headers import HeaderSet, build_headers
from .html_text import html_to_text as default_html_to_text
from .models import Attachment, Message, RenderedMessage
from .parts import LeafPart, serialize_body
from .tokens import TokenSource, random_token

logger = structlog.get_logger()


class MessageComposer:
    """Compose one MIME message.

    Every collaborator is injectable so tests can substitute deterministic
    fakes: *token_source* (boundaries, Message-Id), *html_to_text*,
    *address_validator*, *file_reader*, *decrypt* and *clock*.
    """

    def __init__(
        self,
        message: Message,
        *,
        config: ComposerConfig | None = None,
        token_source: TokenSource = random_token,
        html_to_text: Callable[[str], str] = default_html_to_text,
        address_validator: AddressValidator = is_email_address,
        file_reader: FileReader = read_file,
        decrypt: Decryptor | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._message = message
        self._config = config or ComposerConfig()
        self._tokens = token_source
        self._html_to_text = html_to_text
        self._validator = address_validator
        self._reader = file_reader
        self._decrypt = decrypt
        now = clock() if clock is not None else datetime.now().astimezone()

        self._headers = build_headers(message, self._config, token_source, now)
        self._bcc: list[str] = [message.bcc] if message.bcc else []
        self._attachments: list[Attachment] = []
        self._rendered: RenderedMessage | None = None

    # ------------------------------------------------------------------
    # Configuration stage
    # ------------------------------------------------------------------

    @property
    def message(self) -> Message:
        return self._message

    @property
    def headers(self) -> HeaderSet:
        """A copy of the headers assembled so far."""
        return self._headers.copy()

    @property
    def attachments(self) -> list[Attachment]:
        return list(self._attachments)

    @property
    def rendered(self) -> bool:
        return self._rendered is not None

    def add_attachment(self, attachment: Attachment) -> None:
        self._ensure_open("add attachments")
        self._attachments.append(attachment)

    def add_attachments(self, attachments: Iterable[Attachment]) -> None:
        self._ensure_open("add attachments")
        self._attachments.extend(attachments)

    def set_auto_bcc(self, address: str) -> None:
        """Blind-copy *address* and flag the message with ``X-Auto-Bcc``."""
        self._ensure_open("set auto-bcc")
        self._bcc.append(address)
        self._headers["X-Auto-Bcc"] = self._config.auto_bcc_marker

    def recipient_addresses(self) -> list[str]:
        """Envelope recipients: every valid address in To, Cc and Bcc."""
        found: list[str] = []
        for value in (self._message.to, self._message.cc, *self._bcc):
            found.extend(find_addresses(value, self._validator))
        return found

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self) -> RenderedMessage:
        """Encode the message; the first result is returned on every call."""
        if self._rendered is not None:
            return self._rendered

        config = self._config
        results, attachment_parts = encode_attachments(
            self._attachments,
            reader=self._reader,
            decrypt=self._decrypt,
            line_length=config.line_length,
        )
        root = build_body(
            self._message.body,
            is_html=self._message.is_html,
            attachments=attachment_parts,
            tokens=self._tokens,
            html_to_text=self._html_to_text,
            boundary_length=config.boundary_length,
            alternative_boundary_length=config.alternative_boundary_length,
            line_length=config.line_length,
        )

        headers = self._headers.copy()
        headers["Content-Type"] = root.content_type
        if isinstance(root, LeafPart):
            headers["Content-Transfer-Encoding"] = root.transfer_encoding

        self._rendered = RenderedMessage(
            headers=tuple(headers.items()),
            body=serialize_body(root),
            attachments=tuple(results),
            recipients=tuple(self.recipient_addresses()),
            content_type=root.content_type,
        )
        logger.debug(
            "message_rendered",
            content_type=root.content_type.split(";", 1)[0],
            size=len(self._rendered.body),
            attachments=len(attachment_parts),
            omitted=len(self._rendered.omitted),
            recipients=len(self._rendered.recipients),
        )
        return self._rendered

    def as_bytes(self) -> bytes:
        return self.render().as_bytes()

    def _ensure_open(self, operation: str) -> None:
        if self._rendered is not None:
            raise ComposerFinalizedError(operation)
