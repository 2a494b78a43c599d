"""Helpers for audio frames.

A frame holds one sample per channel. A mono frame is a plain ``float``;
a multi-channel frame is a tuple of floats, e.g. ``(left, right)``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Union

Sample = float
Frame = Union[float, tuple[float, ...]]


def _is_mono(frame: object) -> bool:
    return isinstance(frame, (int, float))


def channels(frame: Frame | Sequence[float]) -> tuple[float, ...]:
    """Return the samples of ``frame``, one per channel."""
    if _is_mono(frame):
        return (float(frame),)  # type: ignore[arg-type]
    return tuple(float(c) for c in frame)  # type: ignore[union-attr]


def zero_like(frame: Frame | Sequence[float]) -> Frame:
    """Return a frame of the same shape as ``frame`` holding zero in every channel."""
    if _is_mono(frame):
        return 0.0
    return (0.0,) * len(frame)  # type: ignore[arg-type]


def map_channels(frame: Frame | Sequence[float], func: Callable[[float], float]) -> Frame:
    """Apply ``func`` to every channel of ``frame``."""
    if _is_mono(frame):
        return func(float(frame))  # type: ignore[arg-type]
    return tuple(func(float(c)) for c in frame)  # type: ignore[union-attr]


def _bimap(a: Frame, b: Frame, func: Callable[[float, float], float]) -> Frame:
    mono_a, mono_b = _is_mono(a), _is_mono(b)
    if mono_a and mono_b:
        return func(float(a), float(b))  # type: ignore[arg-type]
    if mono_a or mono_b:
        raise ValueError("cannot combine a mono frame with a multi-channel frame")
    return tuple(
        func(float(x), float(y))
        for x, y in zip(a, b, strict=True)  # type: ignore[arg-type]
    )


def lerp(a: Frame, b: Frame, t: float) -> Frame:
    """Linearly interpolate from ``a`` towards ``b`` by ``t``."""
    return _bimap(a, b, lambda x, y: x + t * (y - x))


def mix(a: Frame, b: Frame) -> Frame:
    """Sum two frames channel by channel."""
    return _bimap(a, b, lambda x, y: x + y)


def scale(x: Frame, factor: float) -> Frame:
    """Multiply every channel of ``x`` by ``factor``."""
    return map_channels(x, lambda s: s * factor)