"""
Error hierarchy.

Every failure raised by an operation is a ``NaturalistError``. Errors are
never retried or swallowed; operations attach their name and target URL via
``error_context`` so callers can tell which call failed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class NaturalistError(Exception):
    """Base class for all client errors."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.url = url

    def add_context(self, operation: str | None = None, url: str | None = None) -> None:
        """Fill in operation/url if not already known."""
        if self.operation is None:
            self.operation = operation
        if self.url is None:
            self.url = url

    def __str__(self) -> str:
        parts = []
        if self.operation:
            parts.append(self.operation)
        if self.url:
            parts.append(self.url)
        prefix = " ".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message


class TransportError(NaturalistError):
    """Network or connection failure."""


class UnexpectedStatusError(NaturalistError):
    """Response status did not match the operation's expected success code."""

    def __init__(
        self,
        status: int,
        expected: int,
        *,
        body: str = "",
        operation: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            f"unexpected status {int(status)} (expected {int(expected)})",
            operation=operation,
            url=url,
        )
        self.status = int(status)
        self.expected = int(expected)
        self.body = body


class DecodeError(NaturalistError):
    """Response body could not be decoded into the expected shape."""


class EncodeError(NaturalistError):
    """Request options could not be serialized."""


class ParseError(NaturalistError):
    """Free-text observed-on string could not be interpreted as a date/time."""

    def __init__(self, text: str, message: str | None = None) -> None:
        super().__init__(message or f"cannot parse observed-on string {text!r}")
        self.text = text


@contextmanager
def error_context(operation: str, url: str) -> Iterator[None]:
    """Attach ``operation`` and ``url`` to any client error raised inside."""
    try:
        yield
    except NaturalistError as exc:
        exc.add_context(operation=operation, url=url)
        raise
