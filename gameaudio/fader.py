"""Constant-power cross-fading between dynamically supplied signals."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Optional

from gameaudio.frame import Frame, mix, scale
from gameaudio.signal import Controlled, Filter, Signal
from gameaudio.swap import Swap

_BUFFER_SIZE = 1024


@dataclass
class _Command:
    fade_to: Signal
    duration: float
    begin: Optional[float]


class Fader(Signal, Filter, Controlled):
    """Cross-fades smoothly from the current signal to newly supplied ones.

    Uses constant-power fading, suited to blending uncorrelated signals
    without changing their perceived loudness.
    """

    def __init__(self, inner: Signal) -> None:
        self.inner = inner
        self._progress = 1.0
        self._next: Swap[Optional[_Command]] = Swap(lambda: None)
        self._fading: Optional[_Command] = None

    @staticmethod
    def _waiting(cmd: Optional[_Command]) -> bool:
        return cmd is not None and cmd.begin is not None and time.monotonic() < cmd.begin

    def _active_fade(self) -> Optional[_Command]:
        cmd = self._fading
        # A fade must complete before a new one begins; a deferred fade that
        # has not started yet may still be replaced.
        if cmd is None or self._waiting(cmd):
            if self._next.refresh():
                cmd = self._next.received
                self._fading = cmd
                self._progress = 0.0
        if cmd is None or self._waiting(cmd):
            return None
        return cmd

    def sample(self, interval: float, count: int) -> list[Frame]:
        cmd = self._active_fade()
        if cmd is None:
            return self.inner.sample(interval, count)

        increment = interval / cmd.duration if cmd.duration > 0.0 else math.inf
        out: list[Frame] = []
        while len(out) < count:
            n = min(_BUFFER_SIZE, count - len(out))
            old = self.inner.sample(interval, n)
            new = cmd.fade_to.sample(interval, n)
            for x, o in zip(old, new):
                p = self._progress
                out.append(mix(scale(x, math.sqrt(1.0 - p)), scale(o, math.sqrt(p))))
                self._progress = min(p + increment, 1.0)

        if self._progress >= 1.0:
            self.inner = cmd.fade_to
            self._fading = None
        return out

    def is_finished(self) -> bool:
        return False

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def make_control(self) -> FaderControl:
        return FaderControl(self)


class FaderControl:
    """Thread-safe control for a :class:`Fader`."""

    __slots__ = ("_swap",)

    def __init__(self, fader: Fader) -> None:
        self._swap = fader._next

    def _send(self, command: _Command) -> None:
        self._swap.pending = command
        self._swap.flush()

    def fade_to(self, signal: Signal, duration: float) -> None:
        """Cross-fade to ``signal`` over ``duration`` seconds.

        A fade in progress completes first; a signal already waiting for it
        is replaced.
        """
        self._send(_Command(signal, duration, None))

    def deferred_fade_to(self, signal: Signal, duration: float, seconds_from_now: float) -> None:
        """Cross-fade to ``signal`` over ``duration`` seconds, starting after
        ``seconds_from_now``."""
        self._send(_Command(signal, duration, time.monotonic() + seconds_from_now))