"""Exception hierarchy for dontpanic."""

from __future__ import annotations

from typing import Any


class DontPanicError(Exception):
    """Base exception for all dontpanic errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class PanicError(DontPanicError):
    """A recovered panic whose payload was not itself an exception.

    The message is the payload formatted as text; the original object is kept
    on ``payload`` for callers that need more than the message.
    """

    def __init__(self, payload: Any) -> None:
        try:
            message = f"{payload}"
        except Exception as exc:
            message = f"<unprintable {type(payload).__name__}: {exc!r}>"
        super().__init__(message)
        self.payload = payload


class ArgumentCountError(DontPanicError, TypeError):
    """A variadic-style call received more arguments than it accepts."""

    def __init__(self, name: str, *, expected: str, found: int) -> None:
        super().__init__(f"{name}: expected {expected}; found {found}")
        self.expected = expected
        self.found = found


class ChannelClosedError(DontPanicError):
    """Send or close on a channel that is already closed."""


class ConfigurationError(DontPanicError):
    """Configuration validation or resolution failed."""


class Panic(Exception):  # noqa: N818 - a signal, not an error value
    """Abnormal-termination signal raised by :func:`dontpanic.panic`.

    Carries an arbitrary payload. The fault interceptor unwraps it; it is never
    handed back to callers of guarded operations.
    """

    def __init__(self, payload: Any) -> None:
        super().__init__(payload)
        self.payload = payload
