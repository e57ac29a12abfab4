"""Tests for mime_composer.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mime_composer.models import (
    Attachment,
    AttachmentResult,
    AttachmentStatus,
    Message,
    RenderedMessage,
)


class TestMessage:
    def test_defaults(self):
        message = Message(to="a@x.com", from_address="b@x.com")
        assert message.cc == ""
        assert message.bcc == ""
        assert message.is_html is False
        assert message.reply_to == ""

    def test_frozen(self):
        message = Message(to="a@x.com", from_address="b@x.com")
        with pytest.raises(ValidationError):
            message.subject = "changed"

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            Message(to="a@x.com")


class TestAttachment:
    def test_defaults(self):
        attachment = Attachment(filename="/tmp/a", name="a")
        assert attachment.type == "application/octet-stream"
        assert attachment.no_encoding is False


class TestRenderedMessage:
    @pytest.fixture
    def rendered(self) -> RenderedMessage:
        kept = Attachment(filename="/a", name="a")
        dropped = Attachment(filename="/b", name="b")
        return RenderedMessage(
            headers=(("To", "a@x.com"), ("Subject", "Hi")),
            body=b"Hello\r\n",
            attachments=(
                AttachmentResult(kept, AttachmentStatus.INCLUDED),
                AttachmentResult(dropped, AttachmentStatus.UNREADABLE, "missing"),
            ),
            recipients=("a@x.com",),
        )

    def test_as_bytes(self, rendered: RenderedMessage):
        assert rendered.as_bytes() == b"To: a@x.com\r\nSubject: Hi\r\n\r\nHello\r\n"

    def test_header_lookup_is_case_insensitive(self, rendered: RenderedMessage):
        assert rendered.header("subject") == "Hi"
        assert rendered.header("Cc") is None

    def test_included_and_omitted(self, rendered: RenderedMessage):
        assert [a.name for a in rendered.included] == ["a"]
        assert [r.detail for r in rendered.omitted] == ["missing"]

    def test_frozen(self, rendered: RenderedMessage):
        with pytest.raises(AttributeError):
            rendered.body = b""
