"""Decryption of attachments staged in encrypted temporary storage."""

from __future__ import annotations

from collections.abc import Callable

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from .config import ComposerConfig
from .errors import ComposerError

Decryptor = Callable[[bytes], bytes]


class AttachmentDecryptError(ComposerError):
    """Raised by a decryptor when staged attachment bytes cannot be decrypted."""


class FernetDecryptor:
    """Fernet decryption; several keys may be given to support rotation."""

    def __init__(self, keys: list[bytes | str]) -> None:
        if not keys:
            raise ValueError("at least one Fernet key is required")
        fernet_keys = [Fernet(k if isinstance(k, bytes) else k.encode()) for k in keys]
        self._multi = MultiFernet(fernet_keys)

    @classmethod
    def generate_key(cls) -> bytes:
        return Fernet.generate_key()

    def encrypt(self, plaintext: bytes) -> bytes:
        return self._multi.encrypt(plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        try:
            return self._multi.decrypt(ciphertext)
        except InvalidToken as exc:
            raise AttachmentDecryptError("attachment is not a valid Fernet token") from exc

    __call__ = decrypt


def build_decryptor(config: ComposerConfig) -> Decryptor | None:
    """Return a decryptor for ``config.attachment_key``, or None when unset."""
    if config.attachment_key is None:
        return None
    return FernetDecryptor([config.attachment_key.get_secret_value()])
