"""A signal that always emits the same frame."""

from __future__ import annotations

from gameaudio.frame import Frame
from gameaudio.signal import Seek


class Constant(Seek):
    """A constant signal, useful for testing. ``frame`` may be changed at any time."""

    def __init__(self, frame: Frame) -> None:
        self.frame = frame

    def sample(self, interval: float, count: int) -> list[Frame]:
        return [self.frame] * count

    def seek(self, seconds: float) -> None:
        """Seeking has no effect on a constant signal."""