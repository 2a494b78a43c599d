"""Linear ramping of parameters towards a target value."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Smoothed(Generic[T]):
    """Linearly ramps a value towards the most recently set target.

    Values must support ``+``, ``-`` and multiplication by a float.
    """

    __slots__ = ("_prev", "_next", "_progress")

    def __init__(self, value: T) -> None:
        self._prev: Any = value
        self._next: Any = value
        self._progress = 1.0

    def advance(self, proportion: float) -> None:
        """Advance interpolation by ``proportion`` of the full ramp."""
        self._progress = min(self._progress + proportion, 1.0)

    @property
    def progress(self) -> float:
        """Progress from the previous towards the next value, in [0, 1]."""
        return self._progress

    def set(self, value: T) -> None:
        """Begin ramping from the current value towards ``value``."""
        self._prev = self.get()
        self._next = value
        self._progress = 0.0

    def get(self) -> T:
        """Return the current value."""
        return self._prev + self._progress * (self._next - self._prev)

    @property
    def target(self) -> T:
        """The value most recently passed to ``set``."""
        return self._next

    def __repr__(self) -> str:
        return f"Smoothed(prev={self._prev!r}, next={self._next!r}, progress={self._progress!r})"