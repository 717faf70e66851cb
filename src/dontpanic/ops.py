"""Guarded operations.

Each function performs one risky primitive under :func:`recover` and reports
the outcome as a value instead of raising::

    value, err = sequence_read([10, 20, 30], 5)
    # value is None, err is IndexError("index out of range [5] with length 3")

On failure the value is the operation's zero value: the zero of the operand
type for arithmetic, ``0`` for string indexing, ``None`` for everything else
unless the caller passes ``default=``.

Indexes never wrap. A negative index is out of range, exactly like an index
past the end.
"""

from __future__ import annotations

import numbers
import operator
from typing import TYPE_CHECKING, Any, TypeVar
import weakref

from dontpanic.errors import ArgumentCountError
from dontpanic.recover import recover
from dontpanic.result import Guarded
from dontpanic.sequence import Slice, zero_value

if TYPE_CHECKING:
    from collections.abc import MutableMapping, Sequence

    from dontpanic.channel import Channel
    from dontpanic.ref import Ref

T = TypeVar("T")
E = TypeVar("E")
K = TypeVar("K")
V = TypeVar("V")

_NIL_DEREFERENCE = "invalid memory address or nil pointer dereference"


# --- Primitives (raise on fault) ---


def _load(ref: Ref[T] | weakref.ref[Any] | None) -> T:
    if ref is None:
        raise ReferenceError(_NIL_DEREFERENCE)
    if isinstance(ref, weakref.ref):
        target = ref()
        if target is None:
            raise ReferenceError("weakly-referenced object no longer exists")
        return target
    return ref.value


def _quotient(x: Any, y: Any) -> Any:
    """Divide, truncating toward zero when both operands are integers."""
    if isinstance(x, numbers.Integral) and isinstance(y, numbers.Integral):
        q = abs(x) // abs(y)
        return q if (x < 0) == (y < 0) else -q
    return x / y


def _remainder(x: Any, y: Any) -> Any:
    """Integer remainder with the sign of the dividend."""
    if not (isinstance(x, numbers.Integral) and isinstance(y, numbers.Integral)):
        raise TypeError(
            f"modulo requires integer operands, got {type(x).__name__} and {type(y).__name__}"
        )
    return x - y * _quotient(x, y)


def _position(i: int, length: int) -> int:
    i = operator.index(i)
    if not 0 <= i < length:
        raise IndexError(f"index out of range [{i}] with length {length}")
    return i


def _read(seq: Sequence[E], i: int) -> E:
    i = operator.index(i)
    if isinstance(seq, Slice):
        return seq[i]
    return seq[_position(i, len(seq))]


def _write(seq: Sequence[E], i: int, value: E) -> None:
    i = operator.index(i)
    if isinstance(seq, Slice):
        seq[i] = value
        return
    seq[_position(i, len(seq))] = value  # type: ignore[index]


def _code_units(text: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"string_index requires str or bytes, got {type(text).__name__}")


# --- Guarded operations ---


def dereference(ref: Ref[T] | weakref.ref[Any] | None, *, default: T | None = None) -> Guarded[T | None]:
    """Return the value behind *ref* (a ``Ref`` or a ``weakref.ref``).

    Fails when *ref* is None or a weak reference whose target is gone.
    """
    with recover(scope="dereference") as caught:
        return Guarded(_load(ref))
    return Guarded(default, caught.err)


def divide(x: Any, y: Any) -> Guarded[Any]:
    """Return ``x / y``; integer operands divide with truncation toward zero.

    Fails when *y* is zero.
    """
    with recover(scope="divide") as caught:
        return Guarded(_quotient(x, y))
    return Guarded(zero_value(type(x)), caught.err)


def modulo(x: int, y: int) -> Guarded[int]:
    """Return the remainder of ``x / y`` (sign follows *x*).

    Fails when *y* is zero or an operand is not an integer.
    """
    with recover(scope="modulo") as caught:
        return Guarded(_remainder(x, y))
    return Guarded(zero_value(type(x)), caught.err)


def channel_send(ch: Channel[T] | None, value: T, *, timeout: float | None = None) -> Exception | None:
    """Send *value* on *ch*; fails when the channel is closed or absent."""
    with recover(scope="channel_send") as caught:
        ch.send(value, timeout=timeout)  # type: ignore[union-attr]
    return caught.err


def channel_close(ch: Channel[Any] | None) -> Exception | None:
    """Close *ch*; fails when the channel is absent or already closed."""
    with recover(scope="channel_close") as caught:
        ch.close()  # type: ignore[union-attr]
    return caught.err


def map_write(m: MutableMapping[K, V] | None, key: K, value: V) -> Exception | None:
    """Set ``m[key] = value``; fails when *m* is absent or read-only."""
    with recover(scope="map_write") as caught:
        m[key] = value  # type: ignore[index]
    return caught.err


def make_sequence(elem_type: type[E] | None, *size: int) -> Guarded[Slice[E] | None]:
    """Allocate a slice of zero values.

    Supports an absent slice::

        make_sequence(int)

    length ``n``::

        make_sequence(int, n)

    or length ``n`` with capacity ``m``::

        make_sequence(int, n, m)

    Fails when the length is negative or larger than the capacity.
    """
    if len(size) > 2:
        return Guarded(None, ArgumentCountError("size", expected="0-2 arguments", found=len(size)))
    with recover(scope="make_sequence") as caught:
        if not size:
            return Guarded(Slice.nil())
        return Guarded(Slice.make(elem_type, *size))
    return Guarded(None, caught.err)


def sequence_write(seq: Sequence[E] | None, i: int, value: E) -> Exception | None:
    """Set ``seq[i] = value``; fails when *i* is out of range."""
    with recover(scope="sequence_write") as caught:
        _write(seq, i, value)  # type: ignore[arg-type]
    return caught.err


def sequence_read(seq: Sequence[E] | None, i: int, *, default: E | None = None) -> Guarded[E | None]:
    """Return ``seq[i]``; fails when *i* is out of range."""
    with recover(scope="sequence_read") as caught:
        return Guarded(_read(seq, i))  # type: ignore[arg-type]
    return Guarded(default, caught.err)


def subsequence(seq: Sequence[E] | None, *bounds: int) -> Guarded[Slice[E] | None]:
    """Return a view of *seq* sharing its storage.

    Supports ``s[:]``::

        subsequence(s)

    ``s[i:]``, ``s[i:j]`` and ``s[i:j:k]`` where ``k`` bounds the capacity::

        subsequence(s, i)
        subsequence(s, i, j)
        subsequence(s, i, j, k)

    Lists are viewed in place; other sequences are copied first. Fails when a
    bound is out of range.
    """
    if len(bounds) > 3:
        return Guarded(None, ArgumentCountError("bounds", expected="0-3 indexes", found=len(bounds)))
    with recover(scope="subsequence") as caught:
        return Guarded(Slice.view(seq).reslice(*bounds))  # type: ignore[arg-type]
    return Guarded(None, caught.err)


def string_index(text: str | bytes | bytearray | memoryview, i: int) -> Guarded[int]:
    """Return byte *i* of *text* (UTF-8 encoded when *text* is ``str``)."""
    with recover(scope="string_index") as caught:
        data = _code_units(text)
        return Guarded(data[_position(i, len(data))])
    return Guarded(0, caught.err)
