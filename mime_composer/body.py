"""Body Formatter: text normalization, quoted-printable and MIME structure.

=====  ===========  ==================================================
HTML   attachments  structure
=====  ===========  ==================================================
no     no           single ``text/plain`` part
no     yes          ``multipart/mixed``: text, attachments
yes    no           ``multipart/alternative``: text, html
yes    yes          ``multipart/mixed``: alternative(text, html), attachments
=====  ===========  ==================================================
"""

from __future__ import annotations

import email.quoprimime
import html
from collections.abc import Callable, Sequence

from .parts import LeafPart, MimePart, MultipartPart, serialize_part
from .tokens import TokenSource, unique_boundary

TEXT_CONTENT_TYPE = "text/plain; charset=UTF-8; format=flowed"
HTML_CONTENT_TYPE = "text/html; charset=UTF-8"
QUOTED_PRINTABLE = "quoted-printable"


def format_message_text(body: str) -> str:
    """Strip *body*, terminate every line with CRLF and dot-stuff lone dots."""
    lines = body.strip().replace("\r\n", "\n").split("\n")
    normalized: list[str] = []
    for line in lines:
        line = line.strip("\r\n")
        normalized.append(".." if line == "." else line)
    return "".join(line + "\r\n" for line in normalized)


def qp_encode(text: str, line_length: int = 76) -> bytes:
    """Quoted-printable encode the UTF-8 bytes of *text* with CRLF line ends."""
    # quoprimime works on code points 0-255, one per byte
    octets = text.encode("utf-8").decode("latin-1")
    return email.quoprimime.body_encode(octets, maxlinelen=line_length, eol="\r\n").encode("ascii")


def replace_invalid_code_points(text: str) -> str:
    """Replace anything that cannot be encoded as UTF-8 (lone surrogates)."""
    return text.encode("utf-8", errors="replace").decode("utf-8")


def canonicalize_text(body: str) -> str:
    """Decode HTML entities and replace anything that is not valid UTF-8."""
    return replace_invalid_code_points(html.unescape(body.strip()))


def text_part(text: str, line_length: int = 76) -> LeafPart:
    return LeafPart(
        content_type=TEXT_CONTENT_TYPE,
        transfer_encoding=QUOTED_PRINTABLE,
        payload=qp_encode(format_message_text(text), line_length),
    )


def html_part(markup: str, line_length: int = 76) -> LeafPart:
    return LeafPart(
        content_type=HTML_CONTENT_TYPE,
        transfer_encoding=QUOTED_PRINTABLE,
        payload=qp_encode(format_message_text(markup), line_length),
    )


def multipart(
    subtype: str,
    parts: Sequence[MimePart],
    tokens: TokenSource,
    boundary_length: int,
) -> MultipartPart:
    """Wrap *parts*, drawing a boundary that none of them contains."""
    boundary = unique_boundary(tokens, boundary_length, (serialize_part(p) for p in parts))
    return MultipartPart(subtype=subtype, boundary=boundary, parts=tuple(parts))


def build_body(
    body: str,
    *,
    is_html: bool,
    attachments: Sequence[LeafPart],
    tokens: TokenSource,
    html_to_text: Callable[[str], str],
    boundary_length: int = 48,
    alternative_boundary_length: int = 32,
    line_length: int = 76,
) -> MimePart:
    """Decide the MIME structure of a message body and build its tree.

    *attachments* holds only parts that were actually loaded; an empty
    sequence yields the attachment-less structure.
    """
    if not is_html:
        content: MimePart = text_part(canonicalize_text(body), line_length)
    else:
        alternatives = [
            # already entity-decoded by the converter
            text_part(replace_invalid_code_points(html_to_text(body)), line_length),
            html_part(body, line_length),
        ]
        length = alternative_boundary_length if attachments else boundary_length
        content = multipart("alternative", alternatives, tokens, length)

    if not attachments:
        return content
    return multipart("mixed", [content, *attachments], tokens, boundary_length)
