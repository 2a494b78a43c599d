"""A sine wave generator."""

from __future__ import annotations

import math

from gameaudio.signal import Seek


class Sine(Seek):
    """A sine wave of a fixed frequency that plays forever."""

    def __init__(self, phase: float, frequency_hz: float) -> None:
        self._phase = phase
        self._frequency = frequency_hz * math.tau

    def _seek_to(self, t: float) -> None:
        # Wrap the phase so precision holds however long the wave plays.
        self._phase = math.fmod(self._phase + t * self._frequency, math.tau)

    def sample(self, interval: float, count: int) -> list[float]:
        out = [math.sin(interval * i * self._frequency + self._phase) for i in range(count)]
        self._seek_to(interval * count)
        return out

    def seek(self, seconds: float) -> None:
        self._seek_to(seconds)