import pytest

from gameaudio.constant import Constant
from gameaudio.frames import Frames, FramesSignal
from gameaudio.gain import Gain
from gameaudio.reinhard import Reinhard
from gameaudio.signal import Signal

VALUES = [-1000.0, -3.0, -0.5, 0.25, 1.0, 7.0, 1e6]


class _Probe(Signal):
    def __init__(self):
        self.dropped = False

    def sample(self, interval, count):
        return [0.0] * count

    def handle_dropped(self):
        self.dropped = True


def _apply(x):
    return Reinhard(Constant(x)).sample(0.1, 1)[0]


@pytest.mark.parametrize("x", VALUES)
def test_output_within_unit_range(x):
    y = _apply(x)
    assert -1.0 < y < 1.0


@pytest.mark.parametrize("x", VALUES)
def test_round_trip_through_inverse(x):
    y = _apply(x)
    assert y / (1.0 - abs(y)) == pytest.approx(x, rel=1e-6)


@pytest.mark.parametrize("x", VALUES)
def test_odd_symmetry(x):
    assert _apply(-x) == -_apply(x)


def test_monotonic():
    outputs = [_apply(x) for x in sorted(VALUES)]
    assert outputs == sorted(outputs)


def test_zero_is_fixed():
    assert _apply(0.0) == 0.0


def test_stereo_channels_are_independent():
    left, right = -3.0, 0.25
    out = Reinhard(Constant((left, right))).sample(0.1, 2)
    assert out == [(_apply(left), _apply(right))] * 2


def test_seek_delegates():
    s = Reinhard(FramesSignal(Frames(1, [1.0, 2.0, 3.0])))
    s.seek(1.0)
    assert s.sample(1.0, 1) == [_apply(2.0)]


def test_seek_requires_seekable_inner():
    with pytest.raises(TypeError):
        Reinhard(Gain(Constant(1.0))).seek(1.0)


def test_is_finished_and_drop_delegate():
    s = Reinhard(FramesSignal(Frames(1, [1.0])))
    assert not s.is_finished()
    s.sample(1.0, 1)
    assert s.is_finished()
    probe = _Probe()
    Reinhard(probe).handle_dropped()
    assert probe.dropped