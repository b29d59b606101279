"""8-bit sound cues for game events.

Cues are synthesized once into WAV files in a temp dir and played through an
external player process (afplay by default) so the tick loop never waits on
audio.
"""

import os
import shutil
import struct
import subprocess
import tempfile
import threading
import wave

from breakout.config import SoundConfig
from breakout.game import EventKind, GameEvent

SAMPLE_RATE = 22050
_MAX_CONCURRENT = 4


def _envelope(i: int, n: int, release: float) -> float:
    attack = min(1.0, i / (SAMPLE_RATE * 0.003))
    tail = max(0.0, 1.0 - (i / n) * release)
    return attack * tail


def triangle(freq: float, dur: float, vol: float = 1.0) -> list[float]:
    n = int(SAMPLE_RATE * dur)
    samples = []
    for i in range(n):
        phase = (i / SAMPLE_RATE * freq) % 1.0
        samples.append((4 * abs(phase - 0.5) - 1) * vol * _envelope(i, n, 0.5))
    return samples


def square(freq: float, dur: float, vol: float = 1.0, duty: float = 0.5) -> list[float]:
    n = int(SAMPLE_RATE * dur)
    samples = []
    for i in range(n):
        phase = (i / SAMPLE_RATE * freq) % 1.0
        val = vol if phase < duty else -vol
        samples.append(val * _envelope(i, n, 0.8))
    return samples


def sawtooth(freq: float, dur: float, vol: float = 1.0) -> list[float]:
    n = int(SAMPLE_RATE * dur)
    samples = []
    for i in range(n):
        phase = (i / SAMPLE_RATE * freq) % 1.0
        samples.append((2 * phase - 1) * vol * _envelope(i, n, 0.8))
    return samples


def silence(dur: float) -> list[float]:
    return [0.0] * int(SAMPLE_RATE * dur)


def write_wav(path: str, samples: list[float]) -> None:
    with wave.open(path, "w") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(SAMPLE_RATE)
        frames = b"".join(
            struct.pack("<h", int(max(-0.95, min(0.95, s)) * 32767))
            for s in samples
        )
        w.writeframes(frames)


def cue_samples(v: float) -> dict[EventKind, list[float]]:
    """Sample data for every event that has a cue, at volume v."""
    return {
        EventKind.WALL_HIT: square(560, 0.03, v * 0.6),
        EventKind.PADDLE_HIT: triangle(420, 0.05, v * 0.8),
        EventKind.BRICK_HIT: square(720, 0.04, v * 0.7),
        EventKind.LIFE_LOST: sawtooth(180, 0.18, v),
        EventKind.LEVEL_CLEARED: (triangle(660, 0.06, v * 0.8) + silence(0.01)
                                  + triangle(990, 0.08, v * 0.8)),
        EventKind.GAME_OVER: (sawtooth(220, 0.12, v) + silence(0.01)
                              + sawtooth(155, 0.18, v)),
        EventKind.WIN: (triangle(784, 0.08, v) + silence(0.01)
                        + triangle(988, 0.08, v) + silence(0.01)
                        + triangle(1175, 0.08, v)),
    }


class SoundBoard:
    """Game listener that plays a cue per event. Playback failures are ignored."""

    def __init__(self, config: SoundConfig | None = None):
        self.config = config or SoundConfig()
        self.cues: dict[EventKind, str] = {}
        self._dir = ""
        self._processes: list[subprocess.Popen] = []
        self._lock = threading.Lock()

    def generate(self) -> None:
        """Write every cue to a fresh temp dir."""
        self._dir = tempfile.mkdtemp(prefix="breakout-sfx-")
        for kind, samples in cue_samples(self.config.volume).items():
            path = os.path.join(self._dir, f"{kind.value}.wav")
            write_wav(path, samples)
            self.cues[kind] = path

    def on_event(self, event: GameEvent) -> None:
        if not self.config.enabled:
            return
        path = self.cues.get(event.kind)
        if path:
            self._play(path)

    def _reap(self):
        self._processes[:] = [p for p in self._processes if p.poll() is None]

    def _play(self, path: str) -> None:
        with self._lock:
            self._reap()
            # kill oldest if too many concurrent
            while len(self._processes) >= _MAX_CONCURRENT:
                old = self._processes.pop(0)
                old.kill()
                old.wait()
            try:
                p = subprocess.Popen(
                    [self.config.player, path],
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
            except OSError:
                return
            self._processes.append(p)

    def close(self) -> None:
        """Stop playback and remove the generated files."""
        with self._lock:
            for p in self._processes:
                p.kill()
                p.wait()
            self._processes.clear()
        if self._dir and os.path.isdir(self._dir):
            shutil.rmtree(self._dir, ignore_errors=True)
        self.cues.clear()
