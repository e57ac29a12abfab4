"""Random tokens for boundaries and Message-Ids."""

from __future__ import annotations

import base64
import secrets
from collections.abc import Callable, Iterable

TokenSource = Callable[[int], str]
"""Callable returning a random token of the requested length."""

_STRIP = str.maketrans("", "", "=/+")


def random_token(length: int) -> str:
    """Return *length* random alphanumeric characters.

    Drawn from :mod:`secrets`, so it is safe to call from any thread.
    """
    token = ""
    while len(token) < length:
        raw = base64.b64encode(secrets.token_bytes(length)).decode("ascii")
        token += raw.translate(_STRIP)
    return token[:length]


def unique_boundary(
    source: TokenSource,
    length: int,
    contents: Iterable[bytes],
    *,
    max_attempts: int = 16,
) -> str:
    """Draw a boundary whose delimiter does not occur in any of *contents*.

    Raises
    ------
    RuntimeError
        If *max_attempts* consecutive tokens collide, which points at a
        broken token source rather than bad luck.
    """
    blobs = list(contents)
    for _ in range(max_attempts):
        token = source(length)
        delimiter = b"--" + token.encode("ascii")
        if not any(delimiter in blob for blob in blobs):
            return token
    raise RuntimeError(f"token source produced {max_attempts} colliding boundaries")
