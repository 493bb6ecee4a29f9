import os
import re
from dataclasses import dataclass, field
from typing import FrozenSet

from .music.types import WaveformKind


@dataclass
class Settings:
    tuning_hz: float = 440.0
    root: str = "A"
    waveform: WaveformKind = WaveformKind.SINE
    intervals: FrozenSet[str] = field(default_factory=lambda: frozenset({"1", "3", "5"}))
    gain: float = 0.2
    table_length: int = 2048
    sample_rate: int = 44100


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None
    if value < 1:
        raise RuntimeError(f"{name} must be positive, got {value}.")
    return value


def _env_waveform(name: str, default: WaveformKind) -> WaveformKind:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return WaveformKind(raw.strip().lower())
    except ValueError:
        choices = ", ".join(kind.value for kind in WaveformKind)
        raise RuntimeError(f"{name} must be one of {choices}, got {raw!r}.") from None


def _env_intervals(name: str, default: FrozenSet[str]) -> FrozenSet[str]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return frozenset(token for token in re.split(r"[,\s]+", raw) if token)


def load_settings() -> Settings:
    """Read WAVECHORD_* variables, falling back to the built-in defaults."""
    defaults = Settings()
    return Settings(
        tuning_hz=_env_float("WAVECHORD_TUNING_HZ", defaults.tuning_hz),
        root=os.getenv("WAVECHORD_ROOT", defaults.root).strip() or defaults.root,
        waveform=_env_waveform("WAVECHORD_WAVEFORM", defaults.waveform),
        intervals=_env_intervals("WAVECHORD_INTERVALS", defaults.intervals),
        gain=_env_float("WAVECHORD_GAIN", defaults.gain),
        table_length=_env_int("WAVECHORD_TABLE_LENGTH", defaults.table_length),
        sample_rate=_env_int("WAVECHORD_SAMPLE_RATE", defaults.sample_rate),
    )
