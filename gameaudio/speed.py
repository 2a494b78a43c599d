"""Playback speed scaling."""

from __future__ import annotations

from gameaudio.frame import Frame
from gameaudio.signal import Controlled, Filter, Signal


class Speed(Signal, Filter, Controlled):
    """Scales the rate of playback by an adjustable factor.

    Faster playback raises pitch; slower playback lowers it.
    """

    def __init__(self, signal: Signal) -> None:
        self.inner = signal
        self._speed = 1.0

    def sample(self, interval: float, count: int) -> list[Frame]:
        return self.inner.sample(interval * self._speed, count)

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def make_control(self) -> SpeedControl:
        return SpeedControl(self)


class SpeedControl:
    """Thread-safe control for a :class:`Speed` filter."""

    __slots__ = ("_signal",)

    def __init__(self, signal: Speed) -> None:
        self._signal = signal

    def speed(self) -> float:
        """Current speed factor."""
        return self._signal._speed

    def set_speed(self, factor: float) -> None:
        """Change the speed factor."""
        self._signal._speed = factor