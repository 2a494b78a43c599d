"""Summing all channels of a signal into one."""

from __future__ import annotations

from gameaudio.frame import channels
from gameaudio.signal import Filter, Signal

_CHUNK_SIZE = 256


class Downmix(Signal, Filter):
    """Sums all channels together into a mono signal.

    The inner signal is always sampled in whole blocks of 256 frames.
    """

    def __init__(self, signal: Signal) -> None:
        self.inner = signal

    def sample(self, interval: float, count: int) -> list[float]:
        out: list[float] = []
        while len(out) < count:
            block = self.inner.sample(interval, _CHUNK_SIZE)
            n = min(_CHUNK_SIZE, count - len(out))
            out.extend(sum(channels(frame)) for frame in block[:n])
        return out

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()