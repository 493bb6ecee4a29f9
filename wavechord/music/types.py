from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable


class WaveformKind(Enum):
    SINE = "sine"
    SQUARE = "square"
    SAW = "saw"
    TRIANGLE = "triangle"


@dataclass(frozen=True)
class ChordSpec:
    tuning_hz: float  # A4 reference, Hz
    root: str  # note name, e.g. "C#" or "Db"
    intervals: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, tuning_hz: float, root: str, intervals: Iterable[str]) -> "ChordSpec":
        return cls(tuning_hz=float(tuning_hz), root=root, intervals=frozenset(intervals))
