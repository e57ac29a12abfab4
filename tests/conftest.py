"""Shared test fixtures for the mime_composer test suite."""

from __future__ import annotations

import email
import email.policy
import email.quoprimime
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from email.message import EmailMessage
from pathlib import Path

import pytest
import structlog

from mime_composer.composer import MessageComposer
from mime_composer.config import ComposerConfig
from mime_composer.models import Attachment, Message


class SequentialTokens:
    """Deterministic token source: ``tok`` followed by a zero-padded counter."""

    def __init__(self) -> None:
        self.issued: list[str] = []

    def __call__(self, length: int) -> str:
        token = "tok" + str(len(self.issued) + 1).rjust(length - 3, "0")
        self.issued.append(token)
        return token

    @staticmethod
    def predict(index: int, length: int) -> str:
        return "tok" + str(index).rjust(length - 3, "0")


FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def config() -> ComposerConfig:
    return ComposerConfig(
        hostname="mail.test.local",
        x_mailer="mime-composer-test",
        auto_bcc_marker="test-suite",
    )


@pytest.fixture
def tokens() -> SequentialTokens:
    return SequentialTokens()


@pytest.fixture
def make_composer(
    config: ComposerConfig, tokens: SequentialTokens
) -> Callable[..., MessageComposer]:
    """Build a composer with deterministic tokens and clock."""

    def _make(message: Message | None = None, **kwargs) -> MessageComposer:
        options = {"config": config, "token_source": tokens, "clock": lambda: FIXED_NOW}
        options.update(kwargs)
        return MessageComposer(message or plain_message(), **options)

    return _make


def plain_message(**overrides) -> Message:
    fields = {
        "to": "a@x.com",
        "from_address": "b@x.com",
        "subject": "Hello",
        "body": "Line1\nLine2",
    }
    fields.update(overrides)
    return Message(**fields)


@pytest.fixture
def message_factory() -> Callable[..., Message]:
    return plain_message


@pytest.fixture
def pdf_attachment(tmp_path: Path) -> Attachment:
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.4 fake pdf content")
    return Attachment(filename=str(path), name="report.pdf", type="application/pdf")


@pytest.fixture
def missing_attachment(tmp_path: Path) -> Attachment:
    return Attachment(
        filename=str(tmp_path / "does-not-exist.bin"),
        name="missing.bin",
        type="application/octet-stream",
    )


@pytest.fixture
def parse() -> Callable[[bytes], EmailMessage]:
    def _parse(raw: bytes) -> EmailMessage:
        return email.message_from_bytes(raw, policy=email.policy.default)

    return _parse


@pytest.fixture
def qp_decode() -> Callable[[bytes], str]:
    """Decode quoted-printable bytes keeping CRLF line ends."""

    def _decode(payload: bytes) -> str:
        octets = email.quoprimime.decode(payload.decode("ascii"), eol="\r\n")
        return octets.encode("latin-1").decode("utf-8")

    return _decode


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo setup_logging() so handlers never outlive a test's captured streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
