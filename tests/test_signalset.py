import copy

import pytest

from gameaudio.frames import Frames, FramesSignal
from gameaudio.signalset import (
    INITIAL_CHANNEL_CAPACITY,
    INITIAL_SIGNALS_CAPACITY,
    signal_set,
)

RATE = 10


def make_signal():
    return FramesSignal(Frames(RATE, [(0.0, 0.0)] * RATE))


def test_realloc_signals():
    remote, s = signal_set()
    signal = make_signal()
    for i in range(1, INITIAL_SIGNALS_CAPACITY + 3):
        remote.insert(copy.copy(signal))
        s.update()
        assert len(s) == i
    assert remote.signal_capacity == 2 * INITIAL_SIGNALS_CAPACITY


def test_realloc_channel():
    remote, s = signal_set()
    signal = make_signal()
    for _ in range(INITIAL_CHANNEL_CAPACITY + 2):
        remote.insert(copy.copy(signal))
    assert remote.channel_capacity == 1 + 2 * INITIAL_CHANNEL_CAPACITY
    assert len(s) == 0
    s.update()
    assert len(s) == INITIAL_CHANNEL_CAPACITY + 2


def test_insert_order_preserved():
    remote, s = signal_set()
    for name in ("a", "b", "c"):
        remote.insert(name)
    s.update()
    assert list(s) == ["a", "b", "c"]


def test_remove_swaps_last_into_place():
    remote, s = signal_set()
    for name in ("a", "b", "c"):
        remote.insert(name)
    s.update()
    s.remove(0)
    assert list(s) == ["c", "b"]
    s.remove(1)
    assert list(s) == ["c"]


def test_removed_items_are_counted_back():
    remote, s = signal_set()
    for name in ("a", "b", "c"):
        remote.insert(name)
    s.update()
    s.remove(0)
    remote.insert("d")
    assert remote.active_signals == 3
    s.update()
    assert sorted(s) == ["b", "c", "d"]


def test_free_queue_switches_after_growth():
    remote, s = signal_set()
    for i in range(INITIAL_SIGNALS_CAPACITY + 1):
        remote.insert(i)
        s.update()
    s.remove(0)
    remote.insert("new")
    assert remote.active_signals == INITIAL_SIGNALS_CAPACITY + 1
    s.update()
    assert len(s) == INITIAL_SIGNALS_CAPACITY + 1
    assert "new" in list(s)


def test_remove_out_of_range():
    remote, s = signal_set()
    remote.insert("a")
    s.update()
    with pytest.raises(IndexError):
        s.remove(1)