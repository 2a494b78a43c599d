"""A collection of signals filled from one thread and played from another."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from gameaudio.spsc import ChannelFull, Receiver, Sender, channel

T = TypeVar("T")

# One slot short of a power of two, because the ring buffer keeps one slot empty.
INITIAL_CHANNEL_CAPACITY = 127
INITIAL_SIGNALS_CAPACITY = 128


@dataclass(frozen=True)
class _ReallocChannel:
    receiver: Receiver


@dataclass(frozen=True)
class _ReallocSignals:
    capacity: int
    free: Sender


@dataclass(frozen=True)
class _Insert:
    item: Any


@dataclass(frozen=True)
class _FreeTable:
    table: list


@dataclass(frozen=True)
class _FreeSignal:
    item: Any


class SetHandle(Generic[T]):
    """Producer side of a :class:`Set`: adds items from another thread."""

    def __init__(self, sender: Sender, free: Receiver) -> None:
        self._sender = sender
        self._free = free
        self._next_free: deque[Receiver] = deque()
        self._old_senders: deque[Sender] = deque()
        self._signal_capacity = INITIAL_SIGNALS_CAPACITY
        self._active_signals = 0

    @property
    def channel_capacity(self) -> int:
        """Capacity of the message channel currently in use."""
        return self._sender.capacity

    @property
    def signal_capacity(self) -> int:
        """Number of items the set can hold before it must grow."""
        return self._signal_capacity

    @property
    def active_signals(self) -> int:
        """Number of items inserted and not yet known to be removed."""
        return self._active_signals

    def insert(self, item: T) -> None:
        """Add ``item`` to the set."""
        self._gc()
        if self._active_signals == self._signal_capacity:
            self._signal_capacity *= 2
            # One extra slot for the message that hands back the old table.
            free_send, free_recv = channel(self._signal_capacity + 1)
            self._send(_ReallocSignals(self._signal_capacity, free_send))
            self._next_free.append(free_recv)
        self._send(_Insert(item))
        self._active_signals += 1

    def _send(self, msg: Any) -> None:
        try:
            self._sender.send(msg, 1)
        except ChannelFull:
            send, recv = channel(2 * self._sender.capacity + 1)
            self._sender.send(_ReallocChannel(recv), 0)
            send.send(msg, 0)
            self._old_senders.append(self._sender)
            self._sender = send

    def _gc(self) -> None:
        while self._old_senders and self._old_senders[0].is_closed():
            self._old_senders.popleft()
        while True:
            self._gc_inner()
            if not self._free.is_closed() or self._sender.is_closed():
                # An open free queue may still receive items; a closed message
                # queue means the set is gone and nothing matters any more.
                break
            # Drain once more in case items arrived just before closing.
            self._gc_inner()
            if not self._next_free:
                raise RuntimeError("free channel closed without replacement")
            self._free = self._next_free.popleft()

    def _gc_inner(self) -> None:
        self._free.update()
        for freed in self._free.drain():
            if isinstance(freed, _FreeSignal):
                self._active_signals -= 1


class Set(Sequence, Generic[T]):
    """Consumer side: the items themselves, changed only by :meth:`update`
    and :meth:`remove`."""

    def __init__(self, recv: Receiver, free: Sender, capacity: int) -> None:
        self._recv = recv
        self._free = free
        self._signals: list[T] = []
        self._capacity = capacity

    def update(self) -> None:
        """Apply changes sent by the handle."""
        self._recv.update()
        while len(self._recv):
            msg = self._recv.pop()
            if isinstance(msg, _ReallocChannel):
                self._recv.close()
                self._recv = msg.receiver
                self._recv.update()
            elif isinstance(msg, _ReallocSignals):
                old = self._signals
                self._signals = list(old)
                old.clear()
                self._capacity = msg.capacity
                self._free.close()
                self._free = msg.free
                self._free.send(_FreeTable(old), 0)
            elif isinstance(msg, _Insert):
                if len(self._signals) >= self._capacity:
                    raise RuntimeError("set never grows its own storage")
                self._signals.append(msg.item)

    def remove(self, index: int) -> None:
        """Remove the item at ``index``; the last item takes its place."""
        if not 0 <= index < len(self._signals):
            raise IndexError("set index out of range")
        last = self._signals.pop()
        if index < len(self._signals):
            item = self._signals[index]
            self._signals[index] = last
        else:
            item = last
        self._free.send(_FreeSignal(item), 0)

    def __len__(self) -> int:
        return len(self._signals)

    def __getitem__(self, index: Any) -> Any:
        return self._signals[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._signals)


def signal_set() -> tuple[SetHandle[Any], Set[Any]]:
    """Create a set and the handle that adds items to it."""
    msg_send, msg_recv = channel(INITIAL_CHANNEL_CAPACITY)
    free_send, free_recv = channel(INITIAL_SIGNALS_CAPACITY)
    handle: SetHandle[Any] = SetHandle(msg_send, free_recv)
    return handle, Set(msg_recv, free_send, INITIAL_SIGNALS_CAPACITY)


__all__: Sequence[str] = ("Set", "SetHandle", "signal_set")