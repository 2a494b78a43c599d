"""A filter that lets a signal be paused or stopped for good."""

from __future__ import annotations

import enum

from gameaudio.frame import Frame
from gameaudio.signal import Controlled, Filter, Seek, Signal


class PlayState(enum.Enum):
    """Playback state of a :class:`Stop` filter."""

    PLAY = 0
    PAUSE = 1
    STOP = 2


class Stop(Signal, Filter, Controlled):
    """A source that can be paused or permanently stopped."""

    def __init__(self, signal: Signal) -> None:
        self.inner = signal
        self._state = PlayState.PLAY

    @property
    def state(self) -> PlayState:
        return self._state

    def sample(self, interval: float, count: int) -> list[Frame]:
        return self.inner.sample(interval, count)

    def is_finished(self) -> bool:
        return self._state is PlayState.STOP or self.inner.is_finished()

    def handle_dropped(self) -> None:
        self.inner.handle_dropped()

    def seek(self, seconds: float) -> None:
        if not isinstance(self.inner, Seek):
            raise TypeError("inner signal does not support seeking")
        self.inner.seek(seconds)

    def stop(self) -> None:
        """Stop the source for good."""
        self._state = PlayState.STOP

    def is_paused(self) -> bool:
        return self._state is PlayState.PAUSE

    def is_stopped(self) -> bool:
        return self._state is PlayState.STOP

    def make_control(self) -> StopControl:
        return StopControl(self)


class StopControl:
    """Thread-safe control for a :class:`Stop` filter."""

    __slots__ = ("_stop",)

    def __init__(self, stop: Stop) -> None:
        self._stop = stop

    def pause(self) -> None:
        """Suspend playback of the source."""
        self._stop._state = PlayState.PAUSE

    def resume(self) -> None:
        """Resume the paused source."""
        self._stop._state = PlayState.PLAY

    def stop(self) -> None:
        """Stop the source for good."""
        self._stop._state = PlayState.STOP

    def is_paused(self) -> bool:
        return self._stop.is_paused()

    def is_stopped(self) -> bool:
        return self._stop.is_stopped()