"""Attachment Encoder: load attachment bytes and turn them into MIME parts."""

from __future__ import annotations

import email.base64mime
import email.utils
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog

from .crypto import AttachmentDecryptError, Decryptor
from .encoding import encode_header_field, normalize_whitespace
from .models import Attachment, AttachmentResult, AttachmentStatus
from .parts import LeafPart

logger = structlog.get_logger()

FileReader = Callable[[str], bytes]

_UNSAFE_NAME_CHARS = str.maketrans({'"': "'", "\\": None})


def read_file(filename: str) -> bytes:
    return Path(filename).read_bytes()


def attachment_header_fields(attachment: Attachment) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Content-Type and extra part headers naming *attachment*.

    The display name is flattened to one line without double quotes or
    backslashes. Non-ASCII names use RFC 2231 ``name*``/``filename*``
    parameters and an encoded-word description so part headers stay 7-bit.
    """
    name = normalize_whitespace(attachment.name).translate(_UNSAFE_NAME_CHARS)
    if name.isascii():
        name_param, filename_param = f'name="{name}"', f'filename="{name}"'
    else:
        encoded = email.utils.encode_rfc2231(name, "utf-8")
        name_param, filename_param = f"name*={encoded}", f"filename*={encoded}"
    content_type = f"{normalize_whitespace(attachment.type)}; {name_param}"
    extra = (
        ("Content-Description", encode_header_field(name)),
        ("Content-Disposition", f"attachment; {filename_param}"),
    )
    return content_type, extra


def encode_attachment(attachment: Attachment, content: bytes, line_length: int = 76) -> LeafPart:
    """Build the MIME part for one loaded attachment."""
    content_type, extra = attachment_header_fields(attachment)
    if attachment.no_encoding:
        return LeafPart(
            content_type=content_type,
            transfer_encoding="7bit",
            payload=content,
            extra_headers=extra,
        )
    encoded = email.base64mime.body_encode(content, maxlinelen=line_length, eol="\r\n")
    return LeafPart(
        content_type=content_type,
        transfer_encoding="base64",
        payload=encoded.encode("ascii"),
        extra_headers=extra,
    )


def load_attachment(
    attachment: Attachment,
    reader: FileReader = read_file,
    decrypt: Decryptor | None = None,
) -> tuple[AttachmentResult, bytes | None]:
    """Read (and decrypt) one attachment without ever raising for bad input.

    Returns the outcome and, when included, the plaintext bytes.
    """
    try:
        content = reader(attachment.filename)
    except OSError as exc:
        return AttachmentResult(attachment, AttachmentStatus.UNREADABLE, str(exc)), None

    if content and decrypt is not None:
        try:
            content = decrypt(content)
        except AttachmentDecryptError as exc:
            return AttachmentResult(attachment, AttachmentStatus.UNDECRYPTABLE, str(exc)), None

    if not content:
        return AttachmentResult(attachment, AttachmentStatus.EMPTY, "no content"), None
    return AttachmentResult(attachment, AttachmentStatus.INCLUDED), content


def encode_attachments(
    attachments: Iterable[Attachment],
    reader: FileReader = read_file,
    decrypt: Decryptor | None = None,
    line_length: int = 76,
) -> tuple[list[AttachmentResult], list[LeafPart]]:
    """Load every attachment, returning all outcomes and the parts to emit."""
    results: list[AttachmentResult] = []
    parts: list[LeafPart] = []
    for attachment in attachments:
        result, content = load_attachment(attachment, reader, decrypt)
        results.append(result)
        if content is None:
            logger.warning(
                "attachment_omitted",
                filename=attachment.filename,
                name=attachment.name,
                reason=result.status.value,
                detail=result.detail,
            )
            continue
        parts.append(encode_attachment(attachment, content, line_length))
    return results, parts
