"""Diatonic scales and scale inference from ranked pitch classes.

Scale inference works on a ranking rather than on raw energies: the tone
at rank ``r`` of ``n`` ranked tones carries weight ``n - r``. Each of the
twelve major-scale collections scores the weights of the ranked tones it
contains. A collection is shared by a major key and its relative minor, so
the tonic is whichever of the two ranks higher in the input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from ..core import InvalidInputError
from .tones import Tone


class Mode(Enum):
    """Diatonic modes distinguished by scale inference."""

    MAJOR = "major"
    MINOR = "minor"


SCALE_INTERVALS = {
    Mode.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    Mode.MINOR: (0, 2, 3, 5, 7, 8, 10),  # Natural minor
}


@dataclass(frozen=True)
class DiatonicScale:
    """A seven-tone diatonic scale."""

    tonic: Tone
    mode: Mode

    def pitch_classes(self) -> Tuple[Tone, ...]:
        """Scale tones starting from the tonic."""
        return tuple(self.tonic.transpose(i) for i in SCALE_INTERVALS[self.mode])

    @property
    def relative(self) -> "DiatonicScale":
        """Relative major/minor sharing the same tones."""
        if self.mode == Mode.MAJOR:
            return DiatonicScale(self.tonic.transpose(-3), Mode.MINOR)
        return DiatonicScale(self.tonic.transpose(3), Mode.MAJOR)

    @property
    def name(self) -> str:
        return f"{self.tonic.pitch_name} {self.mode.value}"

    def __str__(self) -> str:
        return self.name


def detect_scale(ranked: Sequence[Tone]) -> DiatonicScale:
    """
    Infer the most likely diatonic scale from tones ranked by prominence.

    Args:
        ranked: Distinct tones, most prominent first

    Returns:
        The best matching DiatonicScale

    Raises:
        InvalidInputError: If ranked is empty or contains duplicates
    """
    tones: List[Tone] = [Tone(t) for t in ranked]
    if not tones:
        raise InvalidInputError("Scale inference needs at least one tone")
    if len(set(tones)) != len(tones):
        raise InvalidInputError(f"Ranked tones must be distinct: {tones}")

    weights = {tone: len(tones) - rank for rank, tone in enumerate(tones)}

    best_major = None
    best_score = -1
    for tonic in Tone:
        collection = DiatonicScale(tonic, Mode.MAJOR).pitch_classes()
        score = sum(weights.get(t, 0) for t in collection)
        # Strictly greater keeps the lowest tonic on ties
        if score > best_score:
            best_major = DiatonicScale(tonic, Mode.MAJOR)
            best_score = score

    minor = best_major.relative
    if weights.get(minor.tonic, 0) > weights.get(best_major.tonic, 0):
        return minor
    return best_major
