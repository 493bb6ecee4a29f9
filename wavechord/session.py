import logging
from typing import FrozenSet, Iterable, List, Optional, Protocol, Sequence

from .config import Settings
from .music.pitch import NOTE_SEMITONES, preset_intervals, resolve
from .music.types import ChordSpec, WaveformKind
from .music.wavetable import generate


class AudioBackend(Protocol):
    def load_wavetable(self, samples: Sequence[float]) -> None: ...

    def set_active_frequencies(self, frequencies: Sequence[float]) -> None: ...

    def silence_all(self) -> None: ...

    def set_output_gain(self, gain: float) -> None: ...


class ChordSession:
    """Keeps chord parameters and pushes recomputed output to an audio backend.

    Every setter recomputes only what depends on it: waveform changes reload
    the wavetable, tuning/root/interval changes re-resolve the frequencies
    and retune the backend while the chord is sounding.
    """

    def __init__(self, backend: AudioBackend, settings: Optional[Settings] = None) -> None:
        self._log = logging.getLogger("wavechord.session")
        self.backend = backend
        self.settings = settings or Settings()
        self._check_tuning(self.settings.tuning_hz)
        self._check_root(self.settings.root)

        self.waveform: WaveformKind = self.settings.waveform
        self.tuning_hz: float = float(self.settings.tuning_hz)
        self.root: str = self.settings.root
        self.intervals: FrozenSet[str] = frozenset(self.settings.intervals)
        self.gain: float = 0.0
        self.playing = False
        self._frequencies: List[float] = []

        self.backend.load_wavetable(generate(self.waveform, self.settings.table_length))
        self.set_gain(self.settings.gain)
        self._refresh()

    @staticmethod
    def _check_tuning(tuning_hz: float) -> None:
        if not tuning_hz > 0:
            raise ValueError(f"Tuning reference must be positive, got {tuning_hz}.")

    @staticmethod
    def _check_root(root: str) -> None:
        if root not in NOTE_SEMITONES:
            raise KeyError(f"Unknown note name {root!r}.")

    @property
    def frequencies(self) -> List[float]:
        return list(self._frequencies)

    @property
    def spec(self) -> ChordSpec:
        return ChordSpec(tuning_hz=self.tuning_hz, root=self.root, intervals=self.intervals)

    def _refresh(self) -> None:
        frequencies = resolve(self.tuning_hz, self.root, self.intervals)
        if frequencies == self._frequencies:
            return
        self._frequencies = frequencies
        self._log.debug("Resolved %s %s to %s", self.root, sorted(self.intervals), frequencies)
        if self.playing:
            self.backend.set_active_frequencies(list(frequencies))

    def set_waveform(self, kind: WaveformKind) -> None:
        if kind == self.waveform:
            return
        self.waveform = kind
        self._log.info("Switching oscillator to %s", kind.value)
        self.backend.load_wavetable(generate(kind, self.settings.table_length))

    def set_tuning(self, tuning_hz: float) -> None:
        self._check_tuning(tuning_hz)
        self.tuning_hz = float(tuning_hz)
        self._refresh()

    def set_root(self, root: str) -> None:
        self._check_root(root)
        self.root = root
        self._refresh()

    def set_intervals(self, intervals: Iterable[str]) -> None:
        self.intervals = frozenset(intervals)
        self._refresh()

    def toggle_interval(self, label: str) -> None:
        if label in self.intervals:
            self.set_intervals(self.intervals - {label})
        else:
            self.set_intervals(self.intervals | {label})

    def apply_preset(self, name: str) -> None:
        self.set_intervals(preset_intervals(name))

    def set_gain(self, gain: float) -> None:
        self.gain = max(0.0, min(float(gain), 1.0))
        self.backend.set_output_gain(self.gain)

    def play(self) -> None:
        self.playing = True
        self.backend.set_active_frequencies(list(self._frequencies))

    def stop(self) -> None:
        self.playing = False
        self.backend.silence_all()

    def toggle(self) -> bool:
        if self.playing:
            self.stop()
        else:
            self.play()
        return self.playing
