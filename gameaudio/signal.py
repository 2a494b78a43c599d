"""Core signal abstractions: signals, filters, controls and handles."""

from __future__ import annotations

import threading
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Any, Generic, TypeVar

from gameaudio.frame import Frame

S = TypeVar("S", bound="Signal")


class Signal(ABC):
    """An audio signal.

    ``sample`` produces frames spaced ``interval`` seconds apart. Signals are
    meant to be driven by the code generating audio output; other code adjusts
    them through controls obtained from a :class:`Handle`.
    """

    @abstractmethod
    def sample(self, interval: float, count: int) -> list[Frame]:
        """Return ``count`` frames separated by ``interval`` seconds each."""

    def is_finished(self) -> bool:
        """Whether future calls to ``sample`` will only produce zeroes."""
        return False

    def handle_dropped(self) -> None:
        """Called when the signal's handle has been dropped."""


class Seek(Signal):
    """A signal defined deterministically in terms of absolute time."""

    @abstractmethod
    def seek(self, seconds: float) -> None:
        """Shift the starting point of the next ``sample`` call by ``seconds``."""


class Controlled(ABC):
    """A signal or filter that can be adjusted while it plays."""

    @abstractmethod
    def make_control(self) -> Any:
        """Return the control interface for this signal."""


class Filter:
    """A wrapper that transforms the signal stored in ``inner``."""

    inner: Any

    def control(self, kind: type) -> Any:
        """Return the control of the first ``kind`` in this filter chain."""
        return _control_of(self, kind)


def _chain(signal: Any) -> Iterator[Any]:
    node = signal
    while True:
        yield node
        if not isinstance(node, Filter):
            return
        node = node.inner


def _control_of(signal: Any, kind: type) -> Any:
    for node in _chain(signal):
        if isinstance(node, kind):
            if not isinstance(node, Controlled):
                raise TypeError(f"{kind.__name__} cannot be controlled")
            return node.make_control()
    raise LookupError(f"no {kind.__name__} in the filter chain")


class Handle(Generic[S]):
    """Handle for manipulating a signal that is played elsewhere.

    ``dropped`` is an event set once the handle is closed or garbage
    collected, letting the player notice that no more control will come.
    """

    def __init__(self, signal: S) -> None:
        self._shared = signal
        self._dropped = threading.Event()
        self._finalizer = weakref.finalize(self, self._dropped.set)

    @property
    def dropped(self) -> threading.Event:
        """Event that is set once this handle is released."""
        return self._dropped

    @property
    def closed(self) -> bool:
        return self._dropped.is_set()

    def close(self) -> None:
        """Release the handle; the signal may then clean itself up."""
        self._finalizer()

    def __enter__(self) -> Handle[S]:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def control(self, kind: type) -> Any:
        """Return the control of the first ``kind`` in the handled signal's chain."""
        if self.closed:
            raise RuntimeError("handle is closed")
        return _control_of(self._shared, kind)


class MonoToStereo(Signal, Filter):
    """Adapts a mono signal to stereo by duplicating its output."""

    def __init__(self, signal: Signal) -> None:
        self.inner = signal

    def sample(self, interval: float, count: int) -> list[Frame]:
        return [(x, x) for x in self.inner.sample(interval, count)]

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def seek(self, seconds: float) -> None:
        if not isinstance(self.inner, Seek):
            raise TypeError("inner signal does not support seeking")
        self.inner.seek(seconds)


class SplitSignal(Signal):
    """A signal whose controls live in a separate :class:`Handle`."""

    def __init__(self, signal: Signal) -> None:
        self._signal = signal

    def sample(self, interval: float, count: int) -> list[Frame]:
        return self._signal.sample(interval, count)

    def is_finished(self) -> bool:
        return self._signal.is_finished()


def run(signal: Signal, sample_rate: int, count: int) -> list[Frame]:
    """Return ``count`` frames of ``signal`` sampled at ``sample_rate`` Hz."""
    return signal.sample(1.0 / sample_rate, count)


def split(signal: S) -> tuple[Handle[S], SplitSignal]:
    """Split ``signal`` into a control handle and a playable signal."""
    return Handle(signal), SplitSignal(signal)


def frame_stereo(samples: Sequence[float]) -> list[tuple[float, float]]:
    """Group interleaved stereo samples into frames; a trailing odd sample is dropped."""
    pairs = len(samples) // 2
    return [(float(samples[2 * i]), float(samples[2 * i + 1])) for i in range(pairs)]


def flatten_stereo(frames: Sequence[Sequence[float]]) -> list[float]:
    """Interleave stereo frames into a flat list of samples."""
    return [float(s) for frame in frames for s in frame]