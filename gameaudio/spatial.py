"""Spatialized mixing of mono signals into stereo output."""

from __future__ import annotations

import enum
import math
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from gameaudio.ring import Ring
from gameaudio.signal import Controlled, Filter, Handle, Seek, Signal
from gameaudio.signalset import Set, signal_set
from gameaudio.stop import Stop
from gameaudio.swap import Swap
from gameaudio.vecmath import Quaternion, Vec3, add, dot, invert_quat, mix, norm, rotate, scale, sub

# Rate sound travels from signals to listeners (m/s)
SPEED_OF_SOUND = 343.0

# Distance from the centre of the head to an ear (m)
HEAD_RADIUS = 0.1075

# Seconds over which position discontinuities are smoothed. Too short a period
# makes abrupt changes in effective velocity, audible through the Doppler effect.
POSITION_SMOOTHING_PERIOD = 0.5

_CHUNK_SIZE = 256
_HALF_SQRT_2 = math.sqrt(2.0) / 2.0


def _point(v: Sequence[float]) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


@dataclass(frozen=True)
class SpatialOptions:
    """Initial placement of a signal in a :class:`SpatialScene`.

    ``radius`` is the distance of zero attenuation: coming closer does not
    make the signal louder.
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    velocity: Vec3 = (0.0, 0.0, 0.0)
    radius: float = 0.1


@dataclass(frozen=True)
class _Motion:
    position: Vec3
    velocity: Vec3
    discontinuity: bool


@dataclass
class _State:
    # Smoothed position estimate when position/velocity were last updated
    prev_position: Vec3
    # Seconds since position/velocity were last updated
    dt: float = 0.0

    def smoothed_position(self, dt: float, motion: _Motion) -> Vec3:
        dt = self.dt + dt
        change = scale(motion.velocity, dt)
        naive = add(self.prev_position, change)
        intended = add(motion.position, change)
        return mix(naive, intended, min(dt / POSITION_SMOOTHING_PERIOD, 1.0))


class _Common:
    def __init__(self, radius: float, position: Vec3, velocity: Vec3) -> None:
        self.radius = radius
        self.motion: Swap[_Motion] = Swap(lambda: _Motion(position, velocity, False))
        self.state = _State(position)
        # How long ago the signal finished, if it did
        self.finished_for: Optional[float] = None


class _Ear(enum.IntEnum):
    LEFT = 0
    RIGHT = 1

    @property
    def position(self) -> Vec3:
        """Location of the ear with respect to a head facing -Z."""
        x = -HEAD_RADIUS if self is _Ear.LEFT else HEAD_RADIUS
        return (x, 0.0, 0.0)

    @property
    def direction(self) -> Vec3:
        """Unit vector along which sound is least attenuated."""
        x = -_HALF_SQRT_2 if self is _Ear.LEFT else _HALF_SQRT_2
        return (x, 0.0, -_HALF_SQRT_2)


def _ear_state(position: Vec3, ear: _Ear, radius: float) -> tuple[float, float]:
    """Return the propagation time offset and gain of ``position`` at ``ear``."""
    distance = norm(sub(position, ear.position))
    offset = distance * (-1.0 / SPEED_OF_SOUND)
    distance_gain = radius / max(distance, radius)
    # 1.0 when the ear faces the source, 0.5 when perpendicular, 0 when opposite
    if distance < 1e-3:
        stereo_gain = 1.0
    else:
        stereo_gain = 0.5 + dot(ear.direction, scale(position, 0.5 / distance))
    return offset, stereo_gain * distance_gain


class SpatialControl:
    """Control for updating the motion of a spatial signal."""

    __slots__ = ("_motion",)

    def __init__(self, motion: Swap[_Motion]) -> None:
        self._motion = motion

    def set_motion(
        self, position: Sequence[float], velocity: Sequence[float], discontinuity: bool
    ) -> None:
        """Update position and velocity, relative to the listener, in metres.

        Set ``discontinuity`` when the signal or listener has teleported, so no
        huge velocity is inferred.
        """
        self._motion.pending = _Motion(_point(position), _point(velocity), bool(discontinuity))
        self._motion.flush()


class Spatial(Filter, Controlled):
    """An individual seekable spatialized signal."""

    def __init__(
        self, inner: Stop, position: Sequence[float], velocity: Sequence[float], radius: float
    ) -> None:
        self.inner = inner
        self._common = _Common(radius, _point(position), _point(velocity))

    def make_control(self) -> SpatialControl:
        return SpatialControl(self._common.motion)


class SpatialBuffered(Filter, Controlled):
    """An individual spatialized signal whose propagation delay is buffered."""

    def __init__(
        self,
        rate: int,
        inner: Stop,
        position: Sequence[float],
        velocity: Sequence[float],
        max_delay: float,
        radius: float,
    ) -> None:
        position = _point(position)
        self.inner = inner
        self.rate = rate
        self.max_delay = max_delay
        self._common = _Common(radius, position, _point(velocity))
        # Delay queue of sound travelling through the medium; accounts only for
        # the source's own motion.
        self._queue = Ring(math.ceil(max_delay * rate) + 1)
        self._queue.delay(rate, min(norm(position) / SPEED_OF_SOUND, max_delay))

    def make_control(self) -> SpatialControl:
        return SpatialControl(self._common.motion)


@dataclass(frozen=True)
class _Entry:
    signal: Union[Spatial, SpatialBuffered]
    dropped: threading.Event


_MixFn = Callable[[Union[Spatial, SpatialBuffered], Vec3, Vec3], None]


def _walk_set(
    signals: Set, prev_rot: Quaternion, rot: Quaternion, elapsed: float, mix_signal: _MixFn
) -> None:
    signals.update()
    for i in reversed(range(len(signals))):
        entry = signals[i]
        spatial = entry.signal
        stop: Stop = spatial.inner
        common: _Common = spatial._common
        if entry.dropped.is_set():
            stop.handle_dropped()

        state = common.state
        motion = common.motion
        orig_next = motion.received
        if motion.refresh():
            received = motion.received
            if received.discontinuity:
                state.prev_position = received.position
            else:
                state.prev_position = state.smoothed_position(0.0, orig_next)
            state.dt = 0.0
        current = motion.received
        prev_position = rotate(prev_rot, state.smoothed_position(0.0, current))
        next_position = rotate(rot, state.smoothed_position(elapsed, current))
        state.dt += elapsed

        # Discard finished sources once their last sound has reached the listener.
        distance = norm(prev_position)
        if common.finished_for is not None:
            if common.finished_for > distance / SPEED_OF_SOUND:
                stop.stop()
            else:
                common.finished_for += elapsed
        elif stop.is_finished():
            common.finished_for = elapsed

        if stop.is_stopped():
            signals.remove(i)
            continue
        if stop.is_paused():
            continue
        mix_signal(spatial, prev_position, next_position)


class SpatialScene(Signal, Controlled):
    """Stereo output from a scene of spatialized mono signals."""

    def __init__(self) -> None:
        self._send, self._recv = signal_set()
        self._send_buffered, self._recv_buffered = signal_set()
        self._send_lock = threading.Lock()
        self._rot: Swap[Quaternion] = Swap(Quaternion)

    @property
    def signal_count(self) -> int:
        """Number of signals currently held by the scene."""
        return len(self._recv) + len(self._recv_buffered)

    def _insert(self, buffered: bool, entry: _Entry) -> None:
        with self._send_lock:
            (self._send_buffered if buffered else self._send).insert(entry)

    def sample(self, interval: float, count: int) -> list[tuple[float, float]]:
        self._recv_buffered.update()
        prev_rot = self._rot.received
        self._rot.refresh()
        rot = self._rot.received

        out = [[0.0, 0.0] for _ in range(count)]
        elapsed = interval * count

        def accumulate(ear: _Ear, start: int, samples: list, gain0: float, d_gain: float) -> None:
            for i, s in enumerate(samples, start):
                out[i][ear] += s * (gain0 + i * d_gain)

        def mix_buffered(signal: SpatialBuffered, prev_pos: Vec3, next_pos: Vec3) -> None:
            if signal.max_delay < elapsed:
                raise ValueError("sampled period exceeds the buffered duration")
            queue = signal._queue
            queue.write(signal.inner, signal.rate, elapsed)
            if not count:
                return
            radius = signal._common.radius
            for ear in _Ear:
                prev_offset, prev_gain = _ear_state(prev_pos, ear, radius)
                next_offset, next_gain = _ear_state(next_pos, ear, radius)
                # Clamp into the length of the delay queue
                prev_offset = max(prev_offset - elapsed, -signal.max_delay)
                next_offset = max(next_offset, -signal.max_delay)
                dt = (next_offset - prev_offset) / count
                d_gain = (next_gain - prev_gain) / count
                for start in range(0, count, _CHUNK_SIZE):
                    n = min(_CHUNK_SIZE, count - start)
                    samples = queue.sample(signal.rate, prev_offset + start * dt, dt, n)
                    accumulate(ear, start, samples, prev_gain, d_gain)

        def mix_seek(signal: Spatial, prev_pos: Vec3, next_pos: Vec3) -> None:
            inner = signal.inner
            radius = signal._common.radius
            for ear in _Ear:
                prev_offset, prev_gain = _ear_state(prev_pos, ear, radius)
                next_offset, next_gain = _ear_state(next_pos, ear, radius)
                inner.seek(prev_offset)  # real start time -> delayed start time
                effective_elapsed = (elapsed + next_offset) - prev_offset
                if count:
                    dt = effective_elapsed / count
                    d_gain = (next_gain - prev_gain) / count
                    for start in range(0, count, _CHUNK_SIZE):
                        n = min(_CHUNK_SIZE, count - start)
                        accumulate(ear, start, inner.sample(dt, n), prev_gain, d_gain)
                # delayed end time -> real start time
                inner.seek(-effective_elapsed - prev_offset)
            # real start time -> real end time
            inner.seek(elapsed)

        _walk_set(self._recv_buffered, prev_rot, rot, elapsed, mix_buffered)
        self._recv.update()
        _walk_set(self._recv, prev_rot, rot, elapsed, mix_seek)
        return [(left, right) for left, right in out]

    def is_finished(self) -> bool:
        return False

    def make_control(self) -> SpatialSceneControl:
        return SpatialSceneControl(self)


class SpatialSceneControl:
    """Control for adding signals to a :class:`SpatialScene` and turning the listener."""

    __slots__ = ("_scene",)

    def __init__(self, scene: SpatialScene) -> None:
        self._scene = scene

    def play(self, signal: Seek, options: Optional[SpatialOptions] = None) -> Handle[Spatial]:
        """Begin playing mono, seekable ``signal`` as an isotropic point source.

        Coordinates are relative to the listener but not rotated, in metres.
        """
        if not isinstance(signal, Seek):
            raise TypeError("play requires a seekable signal; use play_buffered instead")
        options = options if options is not None else SpatialOptions()
        spatial = Spatial(Stop(signal), options.position, options.velocity, options.radius)
        handle = Handle(spatial)
        self._scene._insert(False, _Entry(spatial, handle.dropped))
        return handle

    def play_buffered(
        self,
        signal: Signal,
        options: Optional[SpatialOptions],
        max_distance: float,
        rate: int,
        buffer_duration: float,
    ) -> Handle[SpatialBuffered]:
        """Like :meth:`play`, but buffers ``signal`` so it need not support seeking.

        ``signal`` is sampled at ``rate`` Hz; the buffer covers propagation to
        ``max_distance`` plus ``buffer_duration`` seconds.
        """
        if rate <= 0:
            raise ValueError("sample rate must be positive")
        options = options if options is not None else SpatialOptions()
        spatial = SpatialBuffered(
            rate,
            Stop(signal),
            options.position,
            options.velocity,
            max_distance / SPEED_OF_SOUND + buffer_duration,
            options.radius,
        )
        handle = Handle(spatial)
        self._scene._insert(True, _Entry(spatial, handle.dropped))
        return handle

    def set_listener_rotation(self, rotation: Quaternion) -> None:
        """Set the listener's rotation. Unrotated, it faces -Z with +X right and +Y up."""
        self._scene._rot.pending = invert_quat(rotation)
        self._scene._rot.flush()