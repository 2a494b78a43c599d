"""Static audio data and a signal that plays it back."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from gameaudio.frame import Frame, lerp, zero_like
from gameaudio.signal import Controlled, Seek

_F32_EPSILON = 1.1920929e-07


class Frames(Sequence):
    """A sequence of static audio frames at a particular sample rate.

    Typically shared by several :class:`FramesSignal` instances at once.
    """

    def __init__(self, rate: int, samples: Iterable[Frame]) -> None:
        if rate <= 0:
            raise ValueError("sample rate must be positive")
        self._rate = float(rate)
        self._samples: tuple[Frame, ...] = tuple(samples)
        self._zero: Frame = zero_like(self._samples[0]) if self._samples else 0.0

    @classmethod
    def from_iter(cls, rate: int, iterable: Iterable[Frame]) -> Frames:
        """Build frames at ``rate`` Hz from any iterable of frames."""
        return cls(rate, iterable)

    @property
    def rate(self) -> int:
        """Number of frames per second."""
        return int(self._rate)

    def runtime(self) -> float:
        """Duration in seconds."""
        return len(self._samples) / self._rate

    def interpolate(self, s: float) -> Frame:
        """Interpolate a frame at position ``s``, measured in samples.

        Whole numbers give an exact sample; positions out of range give zero.
        """
        x0 = int(s)
        a, b = self._pair(x0)
        return lerp(a, b, s - x0)

    def _pair(self, index: int) -> tuple[Frame, Frame]:
        samples, zero = self._samples, self._zero
        n = len(samples)
        if index >= 0:
            if index < n - 1:
                return samples[index], samples[index + 1]
            if index < n:
                return samples[index], zero
            return zero, zero
        if index < -1 or not n:
            return zero, zero
        return zero, samples[0]

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index: Any) -> Any:
        return self._samples[index]

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._samples)

    def __repr__(self) -> str:
        return f"Frames(rate={self.rate}, len={len(self._samples)})"


class FramesSignal(Seek, Controlled):
    """An audio signal that plays back :class:`Frames`.

    ``start_seconds`` sets the initial playback position and may be negative.
    """

    def __init__(self, data: Frames, start_seconds: float = 0.0) -> None:
        self.data = data
        self._t = float(start_seconds)
        self._sample_t = int(self._t * data._rate)

    def sample(self, interval: float, count: int) -> list[Frame]:
        rate = self.data._rate
        pair = self.data._pair
        s0 = self._t * rate
        ds = interval * rate
        base = int(s0)
        if abs(ds - 1.0) <= _F32_EPSILON:
            fract = s0 - base
            out = [lerp(*pair(base + i), fract) for i in range(count)]
        else:
            out = []
            offset = s0 - base
            for _ in range(count):
                trunc = int(offset)
                a, b = pair(base + trunc)
                out.append(lerp(a, b, offset - trunc))
                offset += ds
        self._t += interval * count
        self._sample_t = int(self._t * rate)
        return out

    def is_finished(self) -> bool:
        return self._t >= len(self.data) / self.data._rate

    def seek(self, seconds: float) -> None:
        self._t += seconds

    def make_control(self) -> FramesSignalControl:
        return FramesSignalControl(self)


class FramesSignalControl:
    """Thread-safe control for a :class:`FramesSignal`."""

    __slots__ = ("_signal",)

    def __init__(self, signal: FramesSignal) -> None:
        self._signal = signal

    def playback_position(self) -> float:
        """Current playback position in seconds, rounded down to a whole sample.

        May be negative, or beyond the end of the data.
        """
        signal = self._signal
        return signal._sample_t / signal.data._rate