"""The Reinhard operator, mapping any range smoothly into (-1, 1)."""

from __future__ import annotations

from gameaudio.frame import Frame, map_channels
from gameaudio.signal import Filter, Seek, Signal


def _reinhard(x: float) -> float:
    return x / (1.0 + abs(x))


class Reinhard(Seek, Filter):
    """Maps every sample ``x`` to ``x / (1 + |x|)``.

    Limits loud output without the artifacts of hard clipping.
    """

    def __init__(self, signal: Signal) -> None:
        self.inner = signal

    def sample(self, interval: float, count: int) -> list[Frame]:
        return [map_channels(x, _reinhard) for x in self.inner.sample(interval, count)]

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def seek(self, seconds: float) -> None:
        if not isinstance(self.inner, Seek):
            raise TypeError("inner signal does not support seeking")
        self.inner.seek(seconds)