"""Automatic gain adjustment keeping the RMS level within a target range."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from gameaudio.frame import Frame, channels, scale
from gameaudio.signal import Filter, Signal

_SQRT_2 = math.sqrt(2.0)


@dataclass(frozen=True)
class AdaptOptions:
    """Configuration for an :class:`Adapt` filter.

    ``tau`` sets how smoothly the filter responds; ``max_gain`` bounds the
    linear gain; below ``low`` the gain rises, above ``high`` it falls.
    """

    tau: float = 0.1
    max_gain: float = math.inf
    low: float = field(default=0.1 / _SQRT_2)
    high: float = field(default=0.5 / _SQRT_2)


class Adapt(Signal, Filter):
    """Smoothly adjusts gain over time to keep the average signal level in range.

    Starts as if an endless signal with RMS level ``initial_rms`` had already
    been processed. Rapid changes in input may push output above 1.
    """

    def __init__(
        self, signal: Signal, initial_rms: float, options: AdaptOptions | None = None
    ) -> None:
        self.inner = signal
        self.options = options if options is not None else AdaptOptions()
        self._avg_squared = initial_rms * initial_rms

    def sample(self, interval: float, count: int) -> list[Frame]:
        opts = self.options
        alpha = 1.0 - math.exp(-interval / opts.tau)
        out = []
        for x in self.inner.sample(interval, count):
            s = sum(channels(x))
            self._avg_squared = s * s * alpha + self._avg_squared * (1.0 - alpha)
            avg_peak = math.sqrt(self._avg_squared) * _SQRT_2
            if avg_peak < opts.low:
                boost = opts.low / avg_peak if avg_peak > 0.0 else math.inf
                gain = min(boost, opts.max_gain)
            elif avg_peak > opts.high:
                gain = opts.high / avg_peak
            else:
                gain = 1.0
            out.append(scale(x, gain))
        return out

    def is_finished(self) -> bool:
        return self.inner.is_finished()