from gameaudio.constant import Constant
from gameaudio.downmix import Downmix
from gameaudio.frames import Frames, FramesSignal
from gameaudio.signal import MonoToStereo, Signal


class _Probe(Signal):
    def __init__(self):
        self.dropped = False

    def sample(self, interval, count):
        return [(0.0, 0.0)] * count

    def handle_dropped(self):
        self.dropped = True


def test_smoke():
    signal = Downmix(Constant((1.0, 2.0)))
    assert signal.sample(1.0, 384) == [3.0] * 384


def test_mono_passes_through():
    assert Downmix(Constant(2.0)).sample(0.1, 5) == [2.0] * 5


def test_inverse_of_duplication():
    value = 0.25
    assert Downmix(MonoToStereo(Constant(value))).sample(0.1, 3) == [value + value] * 3


def test_empty_request():
    assert Downmix(Constant((1.0, 2.0))).sample(0.1, 0) == []


def test_is_finished_delegates():
    signal = Downmix(FramesSignal(Frames(1, [(1.0, 1.0)])))
    assert not signal.is_finished()
    signal.sample(1.0, 1)
    assert signal.is_finished()


def test_handle_dropped_delegates():
    probe = _Probe()
    Downmix(probe).handle_dropped()
    assert probe.dropped