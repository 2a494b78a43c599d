from gameaudio.frames import Frames, FramesSignal
from gameaudio.signal import Signal, split
from gameaudio.speed import Speed


class _Recording(Signal):
    def __init__(self):
        self.dropped = False

    def sample(self, interval, count):
        return [0.0] * count

    def handle_dropped(self):
        self.dropped = True


def _frames():
    return Frames(1, [float(i) for i in range(10)])


def test_default_speed_is_one():
    sped = Speed(FramesSignal(_frames()))
    assert sped.make_control().speed() == 1.0
    assert sped.sample(1.0, 4) == FramesSignal(_frames()).sample(1.0, 4)


def test_speed_scales_interval():
    data = _frames()
    sped = Speed(FramesSignal(data))
    control = sped.control(Speed)
    control.set_speed(2.0)
    assert control.speed() == 2.0
    assert sped.sample(0.5, 4) == FramesSignal(data).sample(1.0, 4)


def test_slow_speed_matches_smaller_interval():
    data = _frames()
    sped = Speed(FramesSignal(data))
    sped.make_control().set_speed(0.25)
    assert sped.sample(1.0, 6) == FramesSignal(data).sample(0.25, 6)


def test_control_through_handle():
    data = _frames()
    handle, playing = split(Speed(FramesSignal(data)))
    handle.control(Speed).set_speed(3.0)
    assert playing.sample(1.0, 3) == FramesSignal(data).sample(3.0, 3)


def test_zero_speed_holds_position():
    sped = Speed(FramesSignal(_frames(), 2.0))
    sped.make_control().set_speed(0.0)
    out = sped.sample(1.0, 5)
    assert out == [out[0]] * 5
    assert out[0] == 2.0


def test_is_finished_delegates():
    sped = Speed(FramesSignal(_frames()))
    assert not sped.is_finished()
    sped.make_control().set_speed(5.0)
    sped.sample(1.0, 2)
    assert sped.is_finished()


def test_handle_dropped_delegates():
    inner = _Recording()
    Speed(inner).handle_dropped()
    assert inner.dropped is True