"""Music helpers for wavechord."""

from .pitch import parse_interval, resolve, resolve_spec
from .synthesis import PreviewBackend
from .types import ChordSpec, WaveformKind
from .wavetable import generate

__all__ = [
    "ChordSpec",
    "PreviewBackend",
    "WaveformKind",
    "generate",
    "parse_interval",
    "resolve",
    "resolve_spec",
]
