import pytest

from gameaudio.frames import Frames, FramesSignal, FramesSignalControl
from gameaudio.signal import split


def assert_out(signal, interval, expected):
    assert signal.sample(interval, len(expected)) == expected


def test_from_slice():
    data = [1.0, 2.0, 3.0]
    frames = Frames(1, data)
    assert list(frames) == data
    assert frames[1] == 2.0
    assert len(frames) == 3


def test_from_iter():
    frames = Frames.from_iter(2, (float(i) for i in range(4)))
    assert list(frames) == [0.0, 1.0, 2.0, 3.0]
    assert frames.rate == 2
    assert frames.runtime() == 2.0


def test_rate_must_be_positive():
    with pytest.raises(ValueError):
        Frames(0, [1.0])


def test_interpolate():
    frames = Frames(1, [1.0, 2.0, 3.0])
    assert frames.interpolate(0.0) == 1.0
    assert frames.interpolate(0.5) == 1.5
    assert frames.interpolate(2.5) == 1.5
    assert frames.interpolate(-0.5) == 0.5
    assert frames.interpolate(10.0) == 0.0
    assert frames.interpolate(-5.0) == 0.0


def test_interpolate_stereo():
    frames = Frames(1, [(1.0, 2.0), (3.0, 4.0)])
    assert frames.interpolate(0.5) == (2.0, 3.0)
    assert frames.interpolate(-5.0) == (0.0, 0.0)


def test_sample():
    signal = FramesSignal(Frames(1, [1.0, 2.0, 3.0, 4.0]), -2.0)
    assert_out(signal, 0.25, [0.0, 0.0, 0.0, 0.0])
    assert_out(signal, 0.5, [0.0, 0.5, 1.0])
    assert_out(signal, 1.0, [1.5, 2.5, 3.5, 2.0, 0.0])


def test_playback_position():
    signal = FramesSignal(Frames(1, [1.0, 2.0, 3.0]), -2.0)
    control = signal.make_control()
    assert isinstance(control, FramesSignalControl)
    assert control.playback_position() == -2.0

    signal.sample(0.2, 10)
    assert control.playback_position() == 0.0
    signal.sample(0.1, 10)
    assert control.playback_position() == 1.0
    signal.sample(0.1, 10)
    assert control.playback_position() == 2.0
    signal.sample(0.2, 10)
    assert control.playback_position() == 4.0
    signal.sample(0.5, 10)
    assert control.playback_position() == 9.0


def test_control_through_handle():
    handle, playing = split(FramesSignal(Frames(2, [1.0, 2.0, 3.0, 4.0])))
    playing.sample(0.5, 2)
    assert handle.control(FramesSignal).playback_position() == 1.0


def test_is_finished():
    signal = FramesSignal(Frames(1, [1.0, 2.0]))
    assert not signal.is_finished()
    signal.sample(1.0, 1)
    assert not signal.is_finished()
    signal.sample(1.0, 1)
    assert signal.is_finished()


def test_seek():
    signal = FramesSignal(Frames(1, [1.0, 2.0, 3.0, 4.0]))
    signal.seek(2.0)
    assert signal.sample(1.0, 2) == [3.0, 4.0]
    signal.seek(-3.0)
    assert signal.sample(1.0, 1) == [2.0]


def test_stereo_playback():
    signal = FramesSignal(Frames(1, [(1.0, -1.0), (3.0, -3.0)]))
    assert signal.sample(0.5, 4) == [(1.0, -1.0), (2.0, -2.0), (3.0, -3.0), (1.5, -1.5)]