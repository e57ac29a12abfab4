"""Exceptions raised by the composer."""

from __future__ import annotations


class ComposerError(Exception):
    """Base class for all mime_composer errors."""


class ComposerFinalizedError(ComposerError):
    """Raised when a composer is mutated after :meth:`render` froze it."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"cannot {operation}: message has already been rendered")
        self.operation = operation
