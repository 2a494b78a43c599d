"""Endless looping playback of static frames."""

from __future__ import annotations

from collections.abc import Sequence

from gameaudio.frame import Frame, lerp
from gameaudio.frames import Frames
from gameaudio.signal import Seek
from gameaudio.vecmath import rem_euclid


class Cycle(Seek):
    """Loops :class:`Frames` end to end to make a repeating signal.

    The frames must be prepared to loop smoothly; see :meth:`with_crossfade`.
    """

    def __init__(self, frames: Frames) -> None:
        if not len(frames):
            raise ValueError("cannot cycle empty frames")
        self.frames = frames
        self._cursor = 0.0

    @classmethod
    def with_crossfade(cls, crossfade_size: float, rate: int, frames: Sequence[Frame]) -> Cycle:
        """Loop arbitrary ``frames`` played at ``rate`` Hz, smoothing the loop
        point over ``crossfade_size`` seconds."""
        faded = apply_crossfade(int(crossfade_size * rate), frames)
        return cls(Frames(rate, faded))

    def sample(self, interval: float, count: int) -> list[Frame]:
        frames = self.frames
        n = len(frames)
        ds = interval * frames.rate
        base = int(self._cursor)
        offset = self._cursor - base
        out = []
        for _ in range(count):
            trunc = int(offset)
            fract = offset - trunc
            x = base + trunc
            if x >= n:
                base = 0
                offset = x % n + fract
                x = int(offset)
            a = frames[x]
            b = frames[x + 1] if x < n - 1 else frames[0]
            out.append(lerp(a, b, fract))
            offset += ds
        self._cursor = base + offset
        return out

    def seek(self, seconds: float) -> None:
        self._cursor = rem_euclid(self._cursor + seconds * self.frames.rate, len(self.frames))


def apply_crossfade(size: int, frames: Sequence[Frame]) -> list[Frame]:
    """Blend the last ``size`` frames into the first ones and drop them,
    so the result loops without a glitch."""
    if size > len(frames):
        raise ValueError("crossfade is longer than the frames")
    end = len(frames) - size
    faded = [lerp(frames[end + i], frames[i], (i + 1) / (size + 1)) for i in range(size)]
    faded.extend(frames[size:])
    return faded[:end]