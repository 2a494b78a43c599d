"""Streaming audio supplied from another thread."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from gameaudio.frame import Frame, lerp
from gameaudio.signal import Controlled, Signal
from gameaudio.spsc import RemainingSlots, channel


@dataclass(frozen=True)
class FramesRead:
    """Only the first ``count`` frames fitted into the buffer."""

    count: int


@dataclass(frozen=True)
class AvailableSpace:
    """Every frame was written; ``count`` more still fit."""

    count: int


StreamWriteResult = Union[FramesRead, AvailableSpace]


class Stream(Signal, Controlled):
    """Dynamic audio from an external source, such as a decoder or the network.

    ``rate`` is the stream's sample rate and ``size`` the maximum number of
    buffered frames. ``channels`` fixes the shape of the silent frames produced
    when no data is available.
    """

    def __init__(self, rate: int, size: int, channels: int = 1) -> None:
        if channels < 1:
            raise ValueError("a stream needs at least one channel")
        self._send, self._recv = channel(size)
        self._rate = rate
        self._zero: Frame = 0.0 if channels == 1 else (0.0,) * channels
        # Offset of t=0 from the start of the buffer, in frames
        self._t = 0.0
        self._closed = False

    @property
    def rate(self) -> int:
        return self._rate

    def _get(self, index: int) -> Frame:
        if index < 0 or index >= len(self._recv):
            return self._zero
        return self._recv[index]

    def _sample_single(self, s: float) -> Frame:
        x0 = math.trunc(s)
        return lerp(self._get(x0), self._get(x0 + 1), s - x0)

    def _advance(self, dt: float) -> None:
        t = min(self._t + dt * self._rate, float(len(self._recv)))
        self._recv.release(int(t))
        self._t = t - math.trunc(t)

    def sample(self, interval: float, count: int) -> list[Frame]:
        self._recv.update()
        s0 = self._t
        ds = interval * self._rate
        out = [self._sample_single(s0 + ds * i) for i in range(count)]
        self._advance(interval * count)
        return out

    def is_finished(self) -> bool:
        return self._closed and len(self._recv) == 0

    def handle_dropped(self) -> None:
        self._closed = True
        # Let a following is_finished see data sent at the last moment.
        self._recv.update()

    def make_control(self) -> StreamControl:
        return StreamControl(self)


class StreamControl:
    """Thread-safe control for a :class:`Stream`."""

    __slots__ = ("_stream",)

    def __init__(self, stream: Stream) -> None:
        self._stream = stream

    def write(self, samples: Sequence[Frame]) -> StreamWriteResult:
        """Append frames to the stream.

        Returns :class:`FramesRead` if not all of them fitted, otherwise
        :class:`AvailableSpace` with the room left.
        """
        result = self._stream._send.send_from_slice(samples)
        if isinstance(result, RemainingSlots):
            return AvailableSpace(result.count)
        return FramesRead(result.count)