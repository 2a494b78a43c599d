"""Offline rendering demos that write WAV files."""

from __future__ import annotations

import argparse
import math
import sys
import wave
from array import array
from collections.abc import Iterable
from os import PathLike
from typing import Union

from gameaudio.adapt import Adapt, AdaptOptions
from gameaudio.frames import Frames, FramesSignal
from gameaudio.gain import FixedGain
from gameaudio.mixer import Mixer
from gameaudio.signal import Signal, run, split
from gameaudio.sine import Sine
from gameaudio.spatial import SpatialOptions, SpatialScene
from gameaudio.stop import Stop

RATE = 44100
BLOCK_SIZE = 512
OFFLINE_SECONDS = 3
ADAPT_SECONDS = 2
SPEED = 50.0

_I16_MAX = 32767
_I16_MIN = -32768

PathArg = Union[str, "PathLike[str]"]


def _to_i16(sample: float) -> int:
    if math.isnan(sample):
        return 0
    value = sample * _I16_MAX
    if value >= _I16_MAX:
        return _I16_MAX
    if value <= _I16_MIN:
        return _I16_MIN
    return int(value)


def _write_samples(writer: wave.Wave_write, samples: Iterable[float]) -> None:
    data = array("h", (_to_i16(s) for s in samples))
    if sys.byteorder == "big":
        data.byteswap()
    writer.writeframes(data.tobytes())


def _open_wav(path: PathArg, channels: int) -> wave.Wave_write:
    writer = wave.open(str(path), "wb")
    writer.setnchannels(channels)
    writer.setsampwidth(2)
    writer.setframerate(RATE)
    return writer


def render_offline(path: PathArg) -> int:
    """Render a tone passing the listener from left to right; return the frames written."""
    total = RATE * OFFLINE_SECONDS
    boop = Frames.from_iter(
        RATE, (math.sin(i / RATE * 500.0 * math.tau) * 80.0 for i in range(total))
    )
    scene_handle, scene = split(SpatialScene())
    scene_handle.control(SpatialScene).play(
        FramesSignal(boop),
        SpatialOptions(position=(-SPEED, 10.0, 0.0), velocity=(SPEED, 0.0, 0.0), radius=0.1),
    )
    blocks = total // BLOCK_SIZE
    with _open_wav(path, 2) as writer:
        for _ in range(blocks):
            block = run(scene, RATE, BLOCK_SIZE)
            _write_samples(writer, (s for frame in block for s in frame))
    return blocks * BLOCK_SIZE


def render_adapt(path: PathArg) -> int:
    """Render a quiet tone, then a loud one on top, then the quiet one alone,
    through an adaptive gain filter; return the frames written."""
    adapt = Adapt(
        Mixer(),
        1e-3 / math.sqrt(2.0),
        AdaptOptions(
            tau=0.1,
            max_gain=1e6,
            low=0.1 / math.sqrt(2.0),
            high=0.5 / math.sqrt(2.0),
        ),
    )
    mixer_handle, signal = split(adapt)
    blocks = RATE * ADAPT_SECONDS // BLOCK_SIZE

    with _open_wav(path, 1) as writer:

        def drive(source: Signal) -> None:
            for _ in range(blocks):
                _write_samples(writer, run(source, RATE, BLOCK_SIZE))

        quiet = FixedGain(Sine(0.0, 5e2), -60.0)
        loud = FixedGain(Sine(0.0, 4e2), -2.0)

        mixer_handle.control(Mixer).play(quiet)
        drive(signal)
        loud_handle = mixer_handle.control(Mixer).play(loud)
        drive(signal)
        loud_handle.control(Stop).stop()
        drive(signal)
    return 3 * blocks * BLOCK_SIZE


def main(argv: list[str] | None = None) -> int:
    """Render one of the demos to a WAV file."""
    parser = argparse.ArgumentParser(prog="gameaudio-demo", description=__doc__)
    parser.add_argument("demo", choices=("offline", "adapt"), help="which demo to render")
    parser.add_argument("output", nargs="?", help="WAV file to write (default: <demo>.wav)")
    args = parser.parse_args(argv)
    render = render_offline if args.demo == "offline" else render_adapt
    path = args.output or f"{args.demo}.wav"
    frames = render(path)
    print(f"wrote {frames} frames to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())