"""Ring buffer recording a mono signal for delayed playback."""

from __future__ import annotations

import math

from gameaudio.frame import lerp
from gameaudio.signal import Signal
from gameaudio.vecmath import rem_euclid


class Ring:
    """Fixed-size circular record of a mono signal with a fractional write cursor."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._buffer = [0.0] * capacity
        self._write = 0.0

    @property
    def buffer(self) -> tuple[float, ...]:
        """The recorded samples in storage order."""
        return tuple(self._buffer)

    @property
    def cursor(self) -> float:
        """Write position, in samples."""
        return self._write

    def write(self, signal: Signal, rate: int, dt: float) -> None:
        """Record ``dt`` seconds of ``signal`` sampled at ``rate`` Hz."""
        size = len(self._buffer)
        span = dt * rate
        if span > size:
            raise ValueError("output range exceeds capacity")
        end = math.fmod(self._write + span, size)
        start_idx = math.ceil(self._write)
        end_idx = math.ceil(end)
        interval = 1.0 / rate
        if end_idx > start_idx:
            self._buffer[start_idx:end_idx] = signal.sample(interval, end_idx - start_idx)
        else:
            self._buffer[start_idx:] = signal.sample(interval, size - start_idx)
            self._buffer[:end_idx] = signal.sample(interval, end_idx)
        self._write = end

    def delay(self, rate: int, dt: float) -> None:
        """Advance the write cursor by ``dt`` seconds as if recording silence."""
        self._write = math.fmod(self._write + rate * dt, len(self._buffer))

    def sample(self, rate: int, t: float, interval: float, count: int) -> list[float]:
        """Read ``count`` samples starting ``t`` seconds before the write cursor.

        ``t`` must be negative and less than one buffer length in the past.
        """
        buffer = self._buffer
        size = len(buffer)
        if t >= 0.0:
            raise ValueError("samples must lie in the past")
        if math.ceil(abs(t * rate)) >= size:
            raise ValueError("samples must lie less than a buffer period in the past")
        offset = rem_euclid(self._write + t * rate, size)
        ds = interval * rate
        out = []
        for _ in range(count):
            x = int(offset)
            fract = offset - x
            if x >= size:
                x %= size
                offset = x + fract
            a = buffer[x]
            b = buffer[x + 1] if x < size - 1 else buffer[0]
            out.append(lerp(a, b, fract))
            offset += ds
        return out