"""Closable FIFO channel shared between threads.

A ``Channel`` behaves like a queue that can be closed exactly once:

- ``send`` blocks while a bounded channel is full and fails with
  ``ChannelClosedError`` once the channel is closed, including when the close
  happens while the sender is waiting.
- ``recv`` keeps returning buffered values after close, then reports
  ``(None, False)``.
- ``close`` on an already-closed channel fails with ``ChannelClosedError``.
"""

from __future__ import annotations

from collections import deque
import logging
import threading
import time
from typing import TYPE_CHECKING, Generic, TypeVar

from dontpanic.errors import ChannelClosedError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Channel(Generic[T]):
    """Thread-safe FIFO channel; ``maxsize <= 0`` means unbounded."""

    def __init__(self, maxsize: int = 0) -> None:
        self.maxsize = maxsize
        self._items: deque[T] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        with self._lock:
            state = "closed" if self._closed else "open"
            size = len(self._items)
        return f"Channel(maxsize={self.maxsize}, len={size}, {state})"

    def _full(self) -> bool:
        return 0 < self.maxsize <= len(self._items)

    def send(self, value: T, timeout: float | None = None) -> None:
        """Append *value*, waiting for room on a full bounded channel."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._not_full:
            while True:
                if self._closed:
                    raise ChannelClosedError("send on closed channel")
                if not self._full():
                    break
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise TimeoutError("send timed out on full channel")
                self._not_full.wait(remaining)
            self._items.append(value)
            self._not_empty.notify()

    def recv(self, timeout: float | None = None) -> tuple[T | None, bool]:
        """Return ``(value, True)``, or ``(None, False)`` once closed and drained."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._not_empty:
            while not self._items:
                if self._closed:
                    return None, False
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise TimeoutError("recv timed out on empty channel")
                self._not_empty.wait(remaining)
            value = self._items.popleft()
            self._not_full.notify()
            return value, True

    def close(self) -> None:
        """Close the channel and wake every blocked sender and receiver."""
        with self._lock:
            if self._closed:
                raise ChannelClosedError("close of closed channel")
            self._closed = True
            buffered = len(self._items)
            self._not_empty.notify_all()
            self._not_full.notify_all()
        logger.debug("Channel closed with %d buffered item(s)", buffered)

    def __iter__(self) -> Iterator[T]:
        while True:
            value, ok = self.recv()
            if not ok:
                return
            yield value  # type: ignore[misc]
