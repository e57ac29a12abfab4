"""mime-composer: build RFC 5322 MIME messages ready for a mail transport."""

from .addresses import encode_address_list, find_addresses, is_email_address, split_address_list
from .attachments import encode_attachment, encode_attachments, load_attachment
from .body import build_body, format_message_text, qp_encode
from .composer import MessageComposer
from .config import ComposerConfig
from .crypto import AttachmentDecryptError, FernetDecryptor, build_decryptor
from .encoding import encode_header_field
from .errors import ComposerError, ComposerFinalizedError
from .headers import HeaderSet
from .html_text import html_to_text
from .logging import setup_logging
from .models import (
    Attachment,
    AttachmentResult,
    AttachmentStatus,
    Message,
    RenderedMessage,
)
from .parts import LeafPart, MultipartPart, serialize_body, serialize_part
from .tokens import random_token, unique_boundary

__all__ = [
    "Attachment",
    "AttachmentDecryptError",
    "AttachmentResult",
    "AttachmentStatus",
    "ComposerConfig",
    "ComposerError",
    "ComposerFinalizedError",
    "FernetDecryptor",
    "HeaderSet",
    "LeafPart",
    "Message",
    "MessageComposer",
    "MultipartPart",
    "RenderedMessage",
    "build_body",
    "build_decryptor",
    "encode_address_list",
    "encode_attachment",
    "encode_attachments",
    "encode_header_field",
    "find_addresses",
    "format_message_text",
    "html_to_text",
    "is_email_address",
    "load_attachment",
    "qp_encode",
    "random_token",
    "serialize_body",
    "serialize_part",
    "setup_logging",
    "split_address_list",
    "unique_boundary",
]
