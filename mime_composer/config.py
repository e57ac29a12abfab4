"""Composer configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars
(``COMPOSER_X_MAILER``, ``COMPOSER_HOSTNAME``, ...).
"""

from __future__ import annotations

import socket

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class ComposerConfig(BaseSettings):
    """Settings shared by every :class:`~mime_composer.composer.MessageComposer`."""

    model_config = {"env_prefix": "COMPOSER_"}

    x_mailer: str = Field(
        default="mime-composer",
        description="Value of the X-Mailer header",
    )
    auto_bcc_marker: str = Field(
        default="mime-composer",
        description="Value of the X-Auto-Bcc diagnostic header set by auto-BCC",
    )
    hostname: str = Field(
        default_factory=socket.gethostname,
        description="Host name used as the right-hand side of Message-Id",
    )
    boundary_length: int = Field(
        default=48,
        ge=16,
        le=70,
        description="Length of the outer multipart boundary token",
    )
    alternative_boundary_length: int = Field(
        default=32,
        ge=16,
        le=70,
        description="Length of the nested multipart/alternative boundary token",
    )
    message_id_length: int = Field(
        default=32,
        ge=16,
        description="Length of the random left-hand side of Message-Id",
    )
    line_length: int = Field(
        default=76,
        ge=4,
        le=998,
        description="Maximum encoded line length for quoted-printable and base64",
    )
    attachment_key: SecretStr | None = Field(
        default=None,
        description="Fernet key for attachments staged in encrypted storage",
    )
    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(default=True, description="Emit JSON log lines")
