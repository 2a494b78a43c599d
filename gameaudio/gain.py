"""Fixed and dynamically controlled amplification."""

from __future__ import annotations

import math

from gameaudio.frame import Frame, scale
from gameaudio.signal import Controlled, Filter, Seek, Signal
from gameaudio.smooth import Smoothed

# Seconds over which a change in gain is smoothed.
SMOOTHING_PERIOD = 0.1


def _db_to_ratio(db: float) -> float:
    return 10.0 ** (db / 20.0)


class FixedGain(Seek):
    """Amplifies a signal by a constant number of decibels.

    Unlike :class:`Gain`, this supports seeking.
    """

    def __init__(self, signal: Signal, db: float) -> None:
        self.inner = signal
        self.gain = _db_to_ratio(db)

    def sample(self, interval: float, count: int) -> list[Frame]:
        return [scale(x, self.gain) for x in self.inner.sample(interval, count)]

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def seek(self, seconds: float) -> None:
        if not isinstance(self.inner, Seek):
            raise TypeError("inner signal does not support seeking")
        self.inner.seek(seconds)


class Gain(Signal, Filter, Controlled):
    """Amplifies a signal by a factor that may change while it plays.

    Changes made through the control are smoothed over a short period.
    """

    def __init__(self, signal: Signal) -> None:
        self.inner = signal
        self._shared = 1.0
        self._gain: Smoothed[float] = Smoothed(1.0)

    def set_gain(self, db: float) -> None:
        """Set the initial amplification in decibels."""
        self.set_amplitude_ratio(_db_to_ratio(db))

    def set_amplitude_ratio(self, factor: float) -> None:
        """Set the initial amplitude scaling factor directly, without smoothing."""
        self._shared = factor
        self._gain = Smoothed(factor)

    def sample(self, interval: float, count: int) -> list[Frame]:
        out = self.inner.sample(interval, count)
        shared = self._shared
        gain = self._gain
        if gain.target != shared:
            gain.set(shared)
        if gain.progress == 1.0:
            g = gain.get()
            if g != 1.0:
                out = [scale(x, g) for x in out]
            return out
        result = []
        for x in out:
            result.append(scale(x, gain.get()))
            gain.advance(interval / SMOOTHING_PERIOD)
        return result

    def is_finished(self) -> bool:
        return self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def make_control(self) -> GainControl:
        return GainControl(self)


class GainControl:
    """Thread-safe control for a :class:`Gain` filter."""

    __slots__ = ("_gain",)

    def __init__(self, gain: Gain) -> None:
        self._gain = gain

    def gain(self) -> float:
        """Current amplification in decibels."""
        ratio = self.amplitude_ratio()
        if ratio == 0.0:
            return -math.inf
        if ratio < 0.0:
            return math.nan
        return 20.0 * math.log10(ratio)

    def set_gain(self, db: float) -> None:
        """Amplify the signal by ``db`` decibels."""
        self.set_amplitude_ratio(_db_to_ratio(db))

    def amplitude_ratio(self) -> float:
        """Current amplitude scaling factor."""
        return self._gain._shared

    def set_amplitude_ratio(self, factor: float) -> None:
        """Scale the amplitude directly; zero silences, negative inverts phase."""
        self._gain._shared = factor