import math

import pytest

from gameaudio.constant import Constant
from gameaudio.frames import Frames, FramesSignal
from gameaudio.gain import FixedGain, Gain, GainControl
from gameaudio.signal import Signal


class _Probe(Signal):
    def __init__(self):
        self.dropped = False

    def sample(self, interval, count):
        return [0.0] * count

    def handle_dropped(self):
        self.dropped = True


def test_smoothing():
    s = Gain(Constant(1.0))
    s.control(Gain).set_amplitude_ratio(5.0)
    assert s.sample(0.025, 6) == [1.0, 2.0, 3.0, 4.0, 5.0, 5.0]
    assert s.sample(0.025, 6) == [5.0] * 6


def test_initial_ratio_applies_immediately():
    s = Gain(Constant(2.0))
    s.set_amplitude_ratio(3.0)
    assert s.sample(0.01, 4) == [6.0] * 4


def test_initial_gain_in_decibels():
    s = Gain(Constant(2.0))
    s.set_gain(-20.0)
    assert s.sample(0.01, 3) == pytest.approx([0.2] * 3)


def test_unity_gain_passes_through():
    assert Gain(Constant(0.7)).sample(0.01, 3) == [0.7] * 3


def test_control_round_trips():
    control = Gain(Constant(1.0)).make_control()
    assert isinstance(control, GainControl)
    control.set_amplitude_ratio(5.0)
    assert control.amplitude_ratio() == 5.0
    control.set_gain(-6.0)
    assert control.gain() == pytest.approx(-6.0)
    control.set_amplitude_ratio(0.0)
    assert control.gain() == -math.inf


def test_zero_ratio_silences_after_smoothing():
    s = Gain(Constant(1.0))
    s.control(Gain).set_amplitude_ratio(0.0)
    s.sample(0.1, 2)
    assert s.sample(0.1, 3) == [0.0] * 3


def test_gain_delegates_finish_and_drop():
    probe = _Probe()
    g = Gain(probe)
    g.handle_dropped()
    assert probe.dropped
    finished = Gain(FramesSignal(Frames(1, [1.0])))
    assert not finished.is_finished()
    finished.sample(1.0, 1)
    assert finished.is_finished()


def test_gain_control_reaches_inner_signal():
    g = Gain(FramesSignal(Frames(1, [1.0, 2.0, 3.0])))
    g.sample(1.0, 2)
    assert g.control(FramesSignal).playback_position() == 2.0


def test_fixed_gain():
    assert FixedGain(Constant(2.0), 0.0).sample(0.1, 3) == [2.0] * 3
    assert FixedGain(Constant(2.0), -20.0).sample(0.1, 2) == pytest.approx([0.2, 0.2])


def test_fixed_gain_stereo():
    out = FixedGain(Constant((1.0, -2.0)), 0.0).sample(0.1, 2)
    assert out == [(1.0, -2.0)] * 2


def test_fixed_gain_seek_and_finish():
    s = FixedGain(FramesSignal(Frames(1, [1.0, 2.0, 3.0])), 0.0)
    s.seek(1.0)
    assert s.sample(1.0, 1) == [2.0]
    assert not s.is_finished()
    s.sample(1.0, 1)
    assert s.is_finished()


def test_fixed_gain_seek_requires_seekable_inner():
    with pytest.raises(TypeError):
        FixedGain(Gain(Constant(1.0)), 0.0).seek(1.0)


def test_fixed_gain_handle_dropped():
    probe = _Probe()
    FixedGain(probe, 0.0).handle_dropped()
    assert probe.dropped