import logging
import math
import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from .types import ChordSpec

_LOG = logging.getLogger("wavechord.pitch")

# semitones above A within the octave starting at A4
NOTE_SEMITONES: Mapping[str, int] = MappingProxyType({
    "A": 0, "A#": 1, "Bb": 1,
    "B": 2,
    "C": 3,
    "C#": 4, "Db": 4,
    "D": 5,
    "D#": 6, "Eb": 6,
    "E": 7,
    "F": 8,
    "F#": 9, "Gb": 9,
    "G": 10,
    "G#": 11, "Ab": 11,
})

DEGREE_SEMITONES: Mapping[int, int] = MappingProxyType({
    1: 0, 2: 2, 3: 4, 4: 5, 5: 7, 6: 9, 7: 11,
    8: 12, 9: 14, 10: 16, 11: 17, 12: 19, 13: 21,
})

NOTE_OPTIONS: Sequence[str] = (
    "C", "C#", "Db", "D", "D#", "Eb", "E", "F", "F#", "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
)

INTERVAL_CHOICES: Sequence[str] = (
    "1", "b2", "2", "#2",
    "b3", "3",
    "4", "#4",
    "b5", "5", "#5",
    "b6", "6",
    "bb7", "b7", "7",
    "8",
    "b9", "9", "#9",
    "11", "#11",
    "b13", "13",
)

CHORD_PRESETS: Mapping[str, frozenset] = MappingProxyType({
    "maj": frozenset({"1", "3", "5"}),
    "min": frozenset({"1", "b3", "5"}),
    "dom7": frozenset({"1", "3", "5", "b7"}),
    "maj7": frozenset({"1", "3", "5", "7"}),
    "sus4": frozenset({"1", "4", "5"}),
})

FREQUENCY_EPSILON = 0.05  # Hz; closer pitches count as one
_INTERVAL_PATTERN = re.compile(r"^([b#]*)([0-9]+)$")


def note_semitone(root: str) -> int:
    return NOTE_SEMITONES[root]


def semitone_ratio(semitones: float) -> float:
    return math.pow(2, semitones / 12.0)


def root_frequency(tuning_hz: float, root: str) -> float:
    return tuning_hz * semitone_ratio(note_semitone(root))


def interval_frequency(root_hz: float, semitones: int) -> float:
    return root_hz * semitone_ratio(semitones)


def parse_interval(label: str) -> Optional[int]:
    """Semitones above the root for labels like ``"b7"`` or ``"#11"``.

    Any number of ``b``/``#`` marks may precede the degree and they stack
    without limit, so ``"b#b7"`` is one semitone under a major seventh.
    Returns ``None`` for anything that does not parse or names a degree
    outside 1..13.
    """
    match = _INTERVAL_PATTERN.match(label.strip())
    if not match:
        return None
    accidentals, digits = match.groups()
    degree = digits.lstrip("0") or "0"
    if len(degree) > 2:
        return None
    base = DEGREE_SEMITONES.get(int(degree))
    if base is None:
        return None
    return base + accidentals.count("#") - accidentals.count("b")


def dedupe_frequencies(
    frequencies: Iterable[float],
    epsilon: float = FREQUENCY_EPSILON,
) -> List[float]:
    kept: List[float] = []
    for freq in sorted(frequencies):
        if not kept or abs(kept[-1] - freq) > epsilon:
            kept.append(freq)
    return kept


def resolve(tuning_hz: float, root: str, intervals: Iterable[str]) -> List[float]:
    """Ascending, de-duplicated playback frequencies for a chord."""
    root_hz = root_frequency(tuning_hz, root)
    frequencies: List[float] = []
    for label in sorted(set(intervals)):
        semitones = parse_interval(label)
        if semitones is None:
            _LOG.debug("Ignoring interval %r", label)
            continue
        frequencies.append(interval_frequency(root_hz, semitones))
    return dedupe_frequencies(frequencies)


def resolve_spec(spec: ChordSpec) -> List[float]:
    return resolve(spec.tuning_hz, spec.root, spec.intervals)


def preset_intervals(name: str) -> frozenset:
    return CHORD_PRESETS[name]
