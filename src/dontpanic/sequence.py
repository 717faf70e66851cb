"""Length/capacity views over a shared backing list.

``Slice`` gives Python sequences the semantics guarded operations rely on:
indexes never wrap, every view has a capacity, and re-slicing follows the
``0 <= i <= j <= k <= cap`` rule while sharing storage with the original.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

E = TypeVar("E")


def zero_value(tp: type | None) -> Any:
    """Return the zero value of *tp*, or None when it has no no-arg form."""
    if tp is None:
        return None
    try:
        return tp()
    except TypeError:
        return None


class Slice(Generic[E]):
    """A window ``[offset, offset + len)`` onto a backing list with capacity.

    Views produced by :meth:`reslice` share the backing list, so writes through
    one view are visible through every other view of the same storage.
    """

    __slots__ = ("_backing", "_cap", "_len", "_offset")

    def __init__(
        self,
        backing: list[E] | None = None,
        offset: int = 0,
        length: int | None = None,
        capacity: int | None = None,
    ) -> None:
        size = 0 if backing is None else len(backing)
        length = size - offset if length is None else length
        capacity = size - offset if capacity is None else capacity
        if not 0 <= offset <= size or not 0 <= length <= capacity <= size - offset:
            raise ValueError(
                f"invalid view: offset={offset} len={length} cap={capacity} backing={size}"
            )
        self._backing = backing
        self._offset = offset
        self._len = length
        self._cap = capacity

    # --- Constructors ---

    @classmethod
    def nil(cls) -> Slice[E]:
        """Return the absent slice: no storage, length and capacity zero."""
        return cls()

    @classmethod
    def of(cls, items: Iterable[E]) -> Slice[E]:
        """Copy *items* into a new slice with capacity equal to its length."""
        return cls(list(items))

    @classmethod
    def view(cls, items: Sequence[E]) -> Slice[E]:
        """Wrap *items* as a slice; lists are shared, other sequences copied."""
        if isinstance(items, Slice):
            return items
        if isinstance(items, list):
            return cls(items)
        return cls(list(items))

    @classmethod
    def make(cls, elem_type: type[E] | None, length: int, capacity: int | None = None) -> Slice[E]:
        """Allocate a slice of zero values.

        Raises:
            ValueError: ``length`` is negative or larger than ``capacity``.
        """
        length = operator.index(length)
        if length < 0:
            raise ValueError(f"makeslice: len out of range [{length}]")
        capacity = length if capacity is None else operator.index(capacity)
        if capacity < length:
            raise ValueError(f"makeslice: cap out of range [{capacity}] with len {length}")
        backing = [zero_value(elem_type) for _ in range(capacity)]
        return cls(backing, 0, length, capacity)

    # --- Introspection ---

    @property
    def is_nil(self) -> bool:
        return self._backing is None

    @property
    def cap(self) -> int:
        return self._cap

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[E]:
        backing = self._backing or []
        for i in range(self._offset, self._offset + self._len):
            yield backing[i]

    def to_list(self) -> list[E]:
        return list(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Slice):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_nil:
            return "Slice(nil)"
        return f"Slice({self.to_list()!r}, cap={self._cap})"

    # --- Element access ---

    def _position(self, i: int) -> int:
        i = operator.index(i)
        if not 0 <= i < self._len:
            raise IndexError(f"index out of range [{i}] with length {self._len}")
        return self._offset + i

    @overload
    def __getitem__(self, i: int) -> E: ...

    @overload
    def __getitem__(self, i: slice) -> Slice[E]: ...

    def __getitem__(self, i: int | slice) -> E | Slice[E]:
        if isinstance(i, slice):
            if i.step is not None:
                raise ValueError("slice step is not supported")
            return self.reslice(i.start, i.stop)
        return self._backing[self._position(i)]  # type: ignore[index]

    def __setitem__(self, i: int, value: E) -> None:
        self._backing[self._position(i)] = value  # type: ignore[index]

    # --- Views ---

    def reslice(self, i: int | None = None, j: int | None = None, k: int | None = None) -> Slice[E]:
        """Return the view ``[i:j]`` with capacity ``k - i``.

        ``i`` defaults to 0, ``j`` to ``len`` and ``k`` to ``cap``; ``j`` may
        extend past ``len`` up to the capacity.

        Raises:
            IndexError: bounds violate ``0 <= i <= j <= k <= cap``.
        """
        low = 0 if i is None else operator.index(i)
        high = self._len if j is None else operator.index(j)
        limit = self._cap if k is None else operator.index(k)
        if not 0 <= limit <= self._cap:
            raise IndexError(f"slice bounds out of range [::{limit}] with capacity {self._cap}")
        if not 0 <= high <= limit:
            raise IndexError(f"slice bounds out of range [:{high}:{limit}]")
        if not 0 <= low <= high:
            raise IndexError(f"slice bounds out of range [{low}:{high}]")
        if self._backing is None:
            return type(self)()
        return type(self)(self._backing, self._offset + low, high - low, limit - low)

    def append(self, *values: E) -> Slice[E]:
        """Return a slice extended by *values*.

        Writes in place while the capacity allows, so other views of the same
        storage observe the new elements; otherwise copies into new storage.
        """
        needed = self._len + len(values)
        if self._backing is not None and needed <= self._cap:
            start = self._offset + self._len
            self._backing[start : start + len(values)] = values
            return type(self)(self._backing, self._offset, needed, self._cap)
        capacity = max(needed, 2 * self._cap)
        backing: list[Any] = [*self, *values]
        backing.extend(None for _ in range(capacity - needed))
        return type(self)(backing, 0, needed, capacity)
