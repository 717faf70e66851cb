"""Guarded results: the ``(value, error)`` pair every guarded operation returns.

``Guarded`` unpacks like a plain 2-tuple so call sites read naturally::

    value, err = divide(10, 0)
    if err is not None:
        ...

``Success``/``Failure`` are offered for callers that prefer matching on a
sum type instead of checking ``err``.
"""

from __future__ import annotations

import dataclasses
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """A successful guarded call."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure:
    """A failed guarded call, containing the error."""

    error: Exception


Result = Success[T] | Failure


class Guarded(NamedTuple, Generic[T]):
    """Outcome of one guarded call.

    Exactly one side is meaningful: on success ``error`` is None, on failure
    ``value`` holds the operation's zero value.
    """

    value: T
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the captured error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_result(self) -> Result[T]:
        if self.error is not None:
            return Failure(self.error)
        return Success(self.value)
