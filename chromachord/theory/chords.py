"""Chord qualities and chords.

A chord is a root tone plus a quality; the quality is the set of intervals
(in semitones) stacked on the root.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .tones import Tone


class Quality(Enum):
    """Triad qualities, in the order chord templates are enumerated."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"

    @property
    def intervals(self) -> Tuple[int, ...]:
        """Intervals from the root in semitones."""
        return _INTERVALS[self]

    @property
    def suffix(self) -> str:
        """Chord-symbol suffix (e.g., 'm' for minor)."""
        return _SUFFIXES[self]


# Chord templates (intervals from root in semitones)
_INTERVALS = {
    Quality.MAJOR: (0, 4, 7),
    Quality.MINOR: (0, 3, 7),
    Quality.DIMINISHED: (0, 3, 6),
    Quality.AUGMENTED: (0, 4, 8),
}

_SUFFIXES = {
    Quality.MAJOR: "",
    Quality.MINOR: "m",
    Quality.DIMINISHED: "dim",
    Quality.AUGMENTED: "aug",
}


@dataclass(frozen=True)
class Chord:
    """A chord identified by root and quality."""

    root: Tone
    quality: Quality

    def pitch_classes(self) -> Tuple[Tone, ...]:
        """Constituent tones, ordered by interval from the root."""
        return tuple(self.root.transpose(i) for i in self.quality.intervals)

    @property
    def symbol(self) -> str:
        """Get chord symbol (e.g., 'C', 'Em', 'Bdim')."""
        return f"{self.root.pitch_name}{self.quality.suffix}"

    def __str__(self) -> str:
        return self.symbol
