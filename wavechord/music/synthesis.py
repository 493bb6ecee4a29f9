"""Offline wavetable oscillator bank that renders into pydub segments.

This is the reference implementation of the audio backend contract used by
``ChordSession``: it lets a chord be auditioned or inspected without an
audio device.
"""

import logging
from typing import List, Sequence

import numpy as np
from pydub import AudioSegment

from .types import WaveformKind
from .wavetable import DEFAULT_TABLE_LENGTH, generate

_LOG = logging.getLogger("wavechord.synthesis")

MAX_VOICES = 16
MIN_VOICE_HZ = 1.0
ENVELOPE_RATE = 0.001  # per-sample step toward the gate target, avoids clicks
SILENCE_LEVEL = 1e-5
DEFAULT_GAIN = 0.2


def soft_clip(samples: np.ndarray) -> np.ndarray:
    return samples / (1.0 + np.abs(samples))


class PreviewBackend:
    def __init__(self, sample_rate: int = 44100) -> None:
        self.sample_rate = sample_rate
        self.gain = DEFAULT_GAIN
        self._table = np.array(generate(WaveformKind.SINE, DEFAULT_TABLE_LENGTH))
        self._freqs = np.zeros(MAX_VOICES)
        self._gates = np.zeros(MAX_VOICES, dtype=bool)
        self._amps = np.zeros(MAX_VOICES)
        self._phases = np.zeros(MAX_VOICES)

    @property
    def table(self) -> np.ndarray:
        return self._table

    @property
    def active_frequencies(self) -> List[float]:
        return [float(freq) for freq, gate in zip(self._freqs, self._gates) if gate]

    def load_wavetable(self, samples: Sequence[float]) -> None:
        self._table = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)

    def set_active_frequencies(self, frequencies: Sequence[float]) -> None:
        if len(frequencies) > MAX_VOICES:
            _LOG.warning("Only %d of %d frequencies fit in the voice bank", MAX_VOICES, len(frequencies))
        count = min(len(frequencies), MAX_VOICES)
        for idx in range(count):
            self._freqs[idx] = max(float(frequencies[idx]), MIN_VOICE_HZ)
        self._gates[:count] = True
        self._gates[count:] = False

    def silence_all(self) -> None:
        self._gates[:] = False

    def set_output_gain(self, gain: float) -> None:
        self.gain = max(0.0, min(float(gain), 1.0))

    def render_samples(self, frames: int) -> np.ndarray:
        """Advance every voice by ``frames`` samples and return the mono mix in (-1, 1)."""
        mix = np.zeros(max(frames, 0))
        size = len(self._table)
        if frames <= 0 or size == 0:
            return mix

        steps = np.arange(1, frames + 1, dtype=np.float64)
        decay = (1.0 - ENVELOPE_RATE) ** steps
        active = np.zeros(frames)

        for voice in range(MAX_VOICES):
            target = 1.0 if self._gates[voice] else 0.0
            amp = target + (self._amps[voice] - target) * decay
            self._amps[voice] = amp[-1]
            if amp.max() < SILENCE_LEVEL:
                continue

            increment = self._freqs[voice] / self.sample_rate
            phase = (self._phases[voice] + steps * increment) % 1.0
            self._phases[voice] = phase[-1]

            pos = phase * size
            i0 = np.floor(pos).astype(np.int64) % size
            i1 = (i0 + 1) % size
            frac = pos - np.floor(pos)
            s0 = self._table[i0]
            sample = (s0 + (self._table[i1] - s0) * frac) * amp

            audible = amp >= SILENCE_LEVEL
            mix += np.where(audible, sample, 0.0)
            active += audible

        norm = np.where(active > 0, 1.0 / np.sqrt(np.maximum(active, 1.0)), 0.0)
        return soft_clip(mix * norm * self.gain)

    def render(self, duration_ms: int) -> AudioSegment:
        frames = int(self.sample_rate * duration_ms / 1000)
        audio = self.render_samples(frames)
        samples = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)
        return AudioSegment(
            samples.tobytes(),
            frame_rate=self.sample_rate,
            sample_width=2,
            channels=1,
        )
