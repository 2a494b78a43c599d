"""A signal that mixes a dynamic set of signals."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from gameaudio.frame import Frame, mix
from gameaudio.signal import Controlled, Handle, Signal
from gameaudio.signalset import signal_set
from gameaudio.stop import Stop

_BUFFER_SIZE = 1024


@dataclass(frozen=True)
class _Entry:
    stop: Stop
    dropped: threading.Event


class Mixer(Signal, Controlled):
    """A signal that mixes together every signal played through its control.

    ``channels`` is the number of channels in every frame produced; a value of
    1 gives plain float frames.
    """

    def __init__(self, channels: int = 1) -> None:
        if channels < 1:
            raise ValueError("a mixer needs at least one channel")
        self._zero: Frame = 0.0 if channels == 1 else (0.0,) * channels
        self._send, self._set = signal_set()
        self._send_lock = threading.Lock()

    def _insert(self, entry: _Entry) -> None:
        with self._send_lock:
            self._send.insert(entry)

    def sample(self, interval: float, count: int) -> list[Frame]:
        signals = self._set
        signals.update()
        out: list[Frame] = [self._zero] * count

        for i in reversed(range(len(signals))):
            entry = signals[i]
            stop = entry.stop
            if entry.dropped.is_set():
                stop.handle_dropped()
            if stop.is_finished():
                stop.stop()
            if stop.is_stopped():
                signals.remove(i)
                continue
            if stop.is_paused():
                continue

            pos = 0
            while pos < count:
                n = min(count - pos, _BUFFER_SIZE)
                staged = stop.sample(interval, n)
                out[pos:pos + n] = [mix(o, s) for o, s in zip(out[pos:pos + n], staged)]
                pos += n
        return out

    def make_control(self) -> MixerControl:
        return MixerControl(self)


class MixerControl:
    """Control for adding signals to a :class:`Mixer` from another thread."""

    __slots__ = ("_mixer",)

    def __init__(self, mixer: Mixer) -> None:
        self._mixer = mixer

    def play(self, signal: Signal) -> Handle[Stop]:
        """Begin playing ``signal``; the handle can pause or stop it.

        Finished signals are stopped and removed automatically.
        """
        stop = Stop(signal)
        handle = Handle(stop)
        self._mixer._insert(_Entry(stop, handle.dropped))
        return handle