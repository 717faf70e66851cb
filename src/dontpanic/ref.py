"""Indirect reference cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(eq=False, slots=True)
class Ref(Generic[T]):
    """A mutable cell holding one value, shared by everyone holding the Ref.

    Identity matters, not contents: two Refs to equal values are different
    references, so equality is left as identity.
    """

    value: T

    @classmethod
    def to(cls, value: T) -> Ref[T]:
        return cls(value)

    def set(self, value: T) -> None:
        self.value = value
