import pytest

from gameaudio.constant import Constant
from gameaudio.frames import Frames, FramesSignal
from gameaudio.mixer import Mixer
from gameaudio.signal import MonoToStereo, Signal, run, split
from gameaudio.stop import Stop


class _Probe(Signal):
    def __init__(self, value):
        self.value = value
        self.dropped = False

    def sample(self, interval, count):
        return [self.value] * count

    def handle_dropped(self):
        self.dropped = True


def test_mixes_signals_by_summing():
    mixer = Mixer()
    control = mixer.make_control()
    a, b = 0.25, 0.5
    handles = [control.play(Constant(a)), control.play(Constant(b))]
    assert mixer.sample(0.01, 4) == [a + b] * 4
    assert len(handles) == 2


def test_empty_mixer_is_silent():
    assert Mixer().sample(0.1, 3) == [0.0, 0.0, 0.0]


def test_stereo_mixer():
    mixer = Mixer(channels=2)
    a = 0.75
    handle = mixer.make_control().play(MonoToStereo(Constant(a)))
    assert mixer.sample(0.1, 5) == [(a, a)] * 5
    assert not handle.control(Stop).is_stopped()


def test_pause_and_resume():
    mixer = Mixer()
    a = 0.5
    handle = mixer.make_control().play(Constant(a))
    silent = Mixer().sample(0.1, 3)
    stop = handle.control(Stop)
    stop.pause()
    assert stop.is_paused()
    assert mixer.sample(0.1, 3) == silent
    stop.resume()
    assert mixer.sample(0.1, 3) == [a] * 3


def test_stopped_signal_is_removed_for_good():
    mixer = Mixer()
    handle = mixer.make_control().play(Constant(0.5))
    silent = Mixer().sample(0.1, 3)
    stop = handle.control(Stop)
    stop.stop()
    assert mixer.sample(0.1, 3) == silent
    stop.resume()
    assert mixer.sample(0.1, 3) == silent


def test_finished_signal_is_stopped():
    mixer = Mixer()
    handle = mixer.make_control().play(FramesSignal(Frames(1, [1.0, 2.0])))
    assert mixer.sample(1.0, 2) == [1.0, 2.0]
    stop = handle.control(Stop)
    assert not stop.is_stopped()
    mixer.sample(1.0, 2)
    assert stop.is_stopped()


def test_long_blocks_are_continuous():
    ramp = [float(i) for i in range(2500)]
    mixer = Mixer()
    handle = mixer.make_control().play(FramesSignal(Frames(1, ramp)))
    assert mixer.sample(1.0, len(ramp)) == ramp
    assert handle.control(FramesSignal).playback_position() == len(ramp)


def test_handle_drop_is_reported():
    mixer = Mixer()
    probe = _Probe(0.5)
    handle = mixer.make_control().play(probe)
    mixer.sample(0.1, 1)
    assert probe.dropped is False
    handle.close()
    mixer.sample(0.1, 1)
    assert probe.dropped is True


def test_mismatched_channels_raise():
    mixer = Mixer()
    handle = mixer.make_control().play(MonoToStereo(Constant(0.5)))
    with pytest.raises(ValueError):
        mixer.sample(0.1, 2)
    assert handle.control(Stop).is_paused() is False


def test_split_mixer_is_controlled_through_handle():
    handle, signal = split(Mixer())
    a = 0.5
    played = handle.control(Mixer).play(Constant(a))
    assert run(signal, 4, 2) == [a, a]
    assert not played.closed


def test_invalid_channel_count():
    with pytest.raises(ValueError):
        Mixer(channels=0)