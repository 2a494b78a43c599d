"""Hyperbolic tangent soft limiting."""

from __future__ import annotations

import math

from gameaudio.frame import Frame, map_channels
from gameaudio.signal import Filter, Seek, Signal


class Tanh(Seek, Filter):
    """Maps every sample ``x`` to ``tanh(x)``, keeping output within (-1, 1).

    Distorts quiet sounds less than the Reinhard operator, and loud ones more.
    """

    def __init__(self, signal: Signal) -> None:
        self.inner = signal

    def sample(self, interval: float, count: int) -> list[Frame]:
        return [map_channels(x, math.tanh) for x in self.inner.sample(interval, count)]

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def seek(self, seconds: float) -> None:
        if not isinstance(self.inner, Seek):
            raise TypeError("inner signal does not support seeking")
        self.inner.seek(seconds)