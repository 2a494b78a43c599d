"""Single-producer single-consumer channel that keeps only the latest value."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_FRESH_BIT = 0b100
_INDEX_MASK = 0b011


class Swap(Generic[T]):
    """Triple buffer: the producer writes ``pending`` and flushes; the
    consumer refreshes and reads ``received``."""

    def __init__(self, init: Callable[[], T]) -> None:
        self._slots: list[T] = [init(), init(), init()]
        self._send = 0
        self._shared = 1
        self._recv = 2
        self._lock = threading.Lock()

    @property
    def pending(self) -> T:
        """The value that will be sent next. Producer only."""
        return self._slots[self._send]

    @pending.setter
    def pending(self, value: T) -> None:
        self._slots[self._send] = value

    def flush(self) -> None:
        """Send the pending value. Producer only."""
        with self._lock:
            previous = self._shared
            self._shared = self._send | _FRESH_BIT
        self._send = previous & _INDEX_MASK

    def refresh(self) -> bool:
        """Update ``received``; return whether new data arrived. Consumer only."""
        with self._lock:
            if not self._shared & _FRESH_BIT:
                return False
            previous = self._shared
            self._shared = self._recv
        self._recv = previous & _INDEX_MASK
        return True

    @property
    def received(self) -> T:
        """The most recent value as of the last ``refresh``. Consumer only."""
        return self._slots[self._recv]