# gameaudio

Lightweight audio for games, in plain Python with no dependencies.

A *signal* produces frames of audio on demand. A frame holds one sample per
channel: a float for mono, a tuple of floats such as `(left, right)` for
stereo. Signals can be wrapped in filters such as gain, speed, cross-fading
and soft limiting. They can be mixed together, or placed in a 3D scene that
models distance, stereo direction, propagation delay and Doppler shift.

Every signal has `sample(interval, count)`, which returns a list of `count`
frames spaced `interval` seconds apart, and `is_finished()`.

## Key pieces

- `gameaudio.frames.Frames` holds static audio data at a sample rate, and
  `gameaudio.frames.FramesSignal` plays it back, optionally from a negative or
  later start time.
- `gameaudio.mixer.Mixer` plays any number of signals at once, and signals can
  be added while it runs. `Mixer(channels=2)` mixes stereo frames; the default
  of one channel mixes plain floats.
- `gameaudio.spatial.SpatialScene` places mono signals in 3D space and
  produces stereo output.
- `gameaudio.signal.split` divides a signal into a `Handle`, used to control
  the signal, and a `SplitSignal`, which produces the audio.
- `gameaudio.signal.run` samples a block of frames from a signal at a given
  output sample rate.

Sources: `sine.Sine`, `constant.Constant`, `frames.FramesSignal`,
`cycle.Cycle` (looping, with `Cycle.with_crossfade` for arbitrary audio) and
`stream.Stream`, which takes audio written a piece at a time through its
`StreamControl.write`.

Filters: `gain.Gain` and `gain.FixedGain`, `speed.Speed`, `fader.Fader`
(constant-power cross-fades, optionally deferred), `adapt.Adapt` (automatic
level control), `reinhard.Reinhard` and `tanh.Tanh` (soft limiting),
`downmix.Downmix` and `signal.MonoToStereo`.

Lower-level building blocks are also available: `swap.Swap` (a channel that
keeps only the latest value), `spsc.channel` (a bounded single-producer
single-consumer queue), `signalset.signal_set`, `ring.Ring`,
`smooth.Smoothed` and the vector helpers in `vecmath`.

## Mixing

```python
from gameaudio.mixer import Mixer
from gameaudio.signal import MonoToStereo, run, split
from gameaudio.sine import Sine
from gameaudio.stop import Stop

handle, mixer = split(Mixer(channels=2))

# Start a 400 Hz tone; `playing` controls that one sound.
playing = handle.control(Mixer).play(MonoToStereo(Sine(0.0, 400.0)))

# Produce 512 stereo frames at 44.1 kHz, e.g. from an audio callback.
block = run(mixer, 44100, 512)

# Stop the tone; the mixer drops it on its next block.
playing.control(Stop).stop()
```

`Handle.control` takes the class of any layer in the chain of filters and
returns that layer's control; it raises `LookupError` if there is no such
layer. A sound played through `Gain` can have its volume changed while it
plays, and the change is smoothed over a tenth of a second:

```python
from gameaudio.gain import Gain

playing = handle.control(Mixer).play(MonoToStereo(Gain(Sine(0.0, 220.0))))
playing.control(Gain).set_gain(-6.0)   # decibels
```

A `Stop` control can also `pause()` and `resume()`. Closing a handle
(`handle.close()`, or leaving it as a context manager) tells the signal that
no more control will come; a `Stream` then finishes once its buffered data
has played.

## Spatial audio

```python
from gameaudio.frames import Frames, FramesSignal
from gameaudio.signal import run, split
from gameaudio.spatial import Spatial, SpatialOptions, SpatialScene

rate = 44100
sound = Frames.from_iter(rate, (0.0 for _ in range(rate)))  # your mono samples

handle, scene = split(SpatialScene())
voice = handle.control(SpatialScene).play(
    FramesSignal(sound),
    SpatialOptions(position=(-50.0, 10.0, 0.0), velocity=(50.0, 0.0, 0.0), radius=0.1),
)

stereo_block = run(scene, rate, 512)

# Later, as the source moves:
voice.control(Spatial).set_motion((0.0, 10.0, 0.0), (50.0, 0.0, 0.0), False)
```

Positions are in metres relative to the listener, who faces -Z with +X to the
right and +Y up; `SpatialSceneControl.set_listener_rotation` turns the
listener with a `vecmath.Quaternion`. `play` needs a seekable signal. Signals
that cannot seek can be played with `SpatialSceneControl.play_buffered`,
which keeps a delay buffer for them; control their motion through
`SpatialBuffered`.

## Demo

The `gameaudio-demo` command renders one of two short pieces to a 16-bit WAV
file at 44.1 kHz:

```
gameaudio-demo offline            # writes offline.wav
gameaudio-demo adapt levels.wav   # writes levels.wav
```

`offline` is a tone passing the listener from left to right in a spatial
scene (stereo). `adapt` is automatic level control applied to a quiet tone,
then a loud tone on top of it, then the quiet tone alone (mono). The same
renders are available as `demo.render_offline(path)` and
`demo.render_adapt(path)`, which return the number of frames written.

## What it does not do

The package produces audio as lists of frames; it does not open a sound
device or play audio in real time, and it does not decode audio files. Feed
the output of `run` to an audio library of your choice, and load samples into
`Frames` yourself. The only file output is the WAV writing of the demo.