"""Bounded single-producer single-consumer channel."""

from __future__ import annotations

import threading
import weakref
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import islice
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ChannelFull(Exception):
    """Raised when an item does not fit; the rejected item is in ``item``."""

    def __init__(self, item: Any) -> None:
        super().__init__("channel has no room for the item")
        self.item = item


@dataclass(frozen=True)
class RemainingSlots:
    """Every item was sent; ``count`` slots are still free."""

    count: int


@dataclass(frozen=True)
class PushedElements:
    """Only the first ``count`` items fitted into the channel."""

    count: int


SendSliceResult = Union[RemainingSlots, PushedElements]


class _Shared:
    def __init__(self, size: int) -> None:
        self.slots: list[Any] = [None] * size
        self.read = 0
        self.write = 0
        self.lock = threading.Lock()
        self.sender_open = True
        self.receiver_open = True

    @property
    def size(self) -> int:
        return len(self.slots)

    def readable_len(self) -> int:
        with self.lock:
            return (self.write - self.read) % self.size

    def close_sender(self) -> None:
        self.sender_open = False

    def close_receiver(self) -> None:
        self.receiver_open = False


class Sender(Generic[T]):
    """Producer end of a channel."""

    def __init__(self, shared: _Shared) -> None:
        self._shared = shared
        self._finalizer = weakref.finalize(self, shared.close_sender)

    @property
    def capacity(self) -> int:
        """Maximum number of items the channel can hold."""
        return self._shared.size - 1

    def _free(self) -> tuple[int, int]:
        shared = self._shared
        with shared.lock:
            write, read = shared.write, shared.read
        return write, self.capacity - (write - read) % shared.size

    def _publish(self, write: int, n: int) -> None:
        shared = self._shared
        with shared.lock:
            shared.write = (write + n) % shared.size

    def send_from_slice(self, data: Sequence[T]) -> SendSliceResult:
        """Append as many leading items of ``data`` as fit."""
        shared = self._shared
        write, free = self._free()
        n = min(free, len(data))
        for offset, item in enumerate(islice(data, n)):
            shared.slots[(write + offset) % shared.size] = item
        self._publish(write, n)
        if n < len(data):
            return PushedElements(n)
        return RemainingSlots(free - n)

    def send(self, item: T, reserve_slots: int = 0) -> None:
        """Append ``item``, leaving at least ``reserve_slots`` free afterwards.

        Raises :class:`ChannelFull` if that is not possible.
        """
        write, free = self._free()
        if free < reserve_slots + 1:
            raise ChannelFull(item)
        self._shared.slots[write] = item
        self._publish(write, 1)

    def is_closed(self) -> bool:
        """Whether the receiver has been closed or dropped."""
        return not self._shared.receiver_open

    def close(self) -> None:
        """Close this end of the channel."""
        self._finalizer()


class Receiver(Generic[T]):
    """Consumer end of a channel.

    Items become visible only after :meth:`update`; ``len()`` and indexing
    refer to the items visible so far.
    """

    def __init__(self, shared: _Shared) -> None:
        self._shared = shared
        self._len = 0
        self._finalizer = weakref.finalize(self, shared.close_receiver)

    def __len__(self) -> int:
        return self._len

    def update(self) -> None:
        """Make newly sent items visible."""
        self._len = self._shared.readable_len()

    def release(self, n: int) -> None:
        """Discard the first ``n`` visible items, freeing their slots."""
        n = min(self._len, n)
        shared = self._shared
        read = shared.read
        for offset in range(n):
            shared.slots[(read + offset) % shared.size] = None
        with shared.lock:
            shared.read = (read + n) % shared.size
        self._len -= n

    def pop(self) -> T:
        """Remove and return the first visible item."""
        if not self._len:
            raise IndexError("pop from an empty channel")
        shared = self._shared
        read = shared.read
        item = shared.slots[read]
        shared.slots[read] = None
        with shared.lock:
            shared.read = (read + 1) % shared.size
        self._len -= 1
        return item

    def drain(self) -> Iterator[T]:
        """Yield and remove every visible item."""
        while self._len:
            yield self.pop()

    def __getitem__(self, index: int) -> T:
        if not 0 <= index < self._len:
            raise IndexError("channel index out of range")
        shared = self._shared
        return shared.slots[(shared.read + index) % shared.size]

    def is_closed(self) -> bool:
        """Whether the sender has been closed or dropped."""
        return not self._shared.sender_open

    def close(self) -> None:
        """Close this end of the channel."""
        self._finalizer()

    def __repr__(self) -> str:
        return f"Receiver({list(self)!r})"


def channel(capacity: int) -> tuple[Sender[Any], Receiver[Any]]:
    """Create a channel holding at most ``capacity`` items."""
    if capacity < 0:
        raise ValueError("capacity must not be negative")
    shared = _Shared(capacity + 1)
    return Sender(shared), Receiver(shared)