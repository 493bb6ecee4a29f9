"""Band-limited single-cycle wavetables built by additive synthesis."""

import math
from typing import Callable, Dict

import numpy as np

from .types import WaveformKind

MAX_HARMONICS = 48  # high enough to sound bright, low enough to stay clean
DEFAULT_TABLE_LENGTH = 2048


def _phase(length: int) -> np.ndarray:
    t = np.arange(length, dtype=np.float64) / length
    return 2.0 * math.pi * t


def _harmonic_sum(phase: np.ndarray, harmonics: np.ndarray, weights: np.ndarray) -> np.ndarray:
    # rows are harmonics, columns are samples
    partials = np.sin(np.outer(harmonics, phase))
    return weights @ partials


def _sine(phase: np.ndarray) -> np.ndarray:
    return np.sin(phase)


def _square(phase: np.ndarray) -> np.ndarray:
    k = np.arange(1, MAX_HARMONICS + 1, 2, dtype=np.float64)
    return (4.0 / math.pi) * _harmonic_sum(phase, k, 1.0 / k)


def _saw(phase: np.ndarray) -> np.ndarray:
    k = np.arange(1, MAX_HARMONICS + 1, dtype=np.float64)
    signs = np.where(k % 2 == 1, 1.0, -1.0)  # (-1)^(k+1)
    return (2.0 / math.pi) * _harmonic_sum(phase, k, signs / k)


def _triangle(phase: np.ndarray) -> np.ndarray:
    k = np.arange(1, MAX_HARMONICS + 1, 2, dtype=np.float64)
    signs = np.where(((k - 1) // 2) % 2 == 0, 1.0, -1.0)  # (-1)^((k-1)/2)
    return (8.0 / (math.pi * math.pi)) * _harmonic_sum(phase, k, signs / (k * k))


GENERATOR_MAP: Dict[WaveformKind, Callable[[np.ndarray], np.ndarray]] = {
    WaveformKind.SINE: _sine,
    WaveformKind.SQUARE: _square,
    WaveformKind.SAW: _saw,
    WaveformKind.TRIANGLE: _triangle,
}


def peak(table: np.ndarray) -> float:
    if len(table) == 0:
        return 0.0
    return float(np.max(np.abs(table)))


def _normalize(table: np.ndarray) -> np.ndarray:
    max_abs = peak(table)
    if max_abs > 0:
        return table / max_abs
    return table


def generate(kind: WaveformKind, length: int = DEFAULT_TABLE_LENGTH) -> np.ndarray:
    """Return one period of ``kind`` as ``length`` samples peaking at exactly 1.0.

    ``length`` must be at least 1. A table that comes out all zero (which
    only happens for very short tables) is returned as is. The result is
    read-only so callers can share it freely.
    """
    raw = GENERATOR_MAP[kind](_phase(length))
    table = _normalize(np.asarray(raw, dtype=np.float64))
    table.flags.writeable = False
    return table
