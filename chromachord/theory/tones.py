"""Tones and chromas - the pitch-class vocabulary of the analysis.

A chroma is an ordered set of pitch classes that defines a tuning system.
The analysis layer only needs three things from it: iteration in a stable
order, the number of steps per octave, and the step index of a tone.
"""

from enum import IntEnum
from typing import Hashable, Iterator, Protocol, TypeVar

from ..core import PITCH_NAMES

P = TypeVar("P", bound=Hashable)


class Chroma(Protocol[P]):
    """Anything that enumerates pitch classes and locates them by step."""

    def __iter__(self) -> Iterator[P]:
        ...

    def size(self) -> int:
        ...

    def step(self, pitch_class: P) -> int:
        ...


class Tone(IntEnum):
    """The 12 equal-tempered pitch classes (C=0 .. B=11)."""

    C = 0
    Cs = 1
    D = 2
    Ds = 3
    E = 4
    F = 5
    Fs = 6
    G = 7
    Gs = 8
    A = 9
    As = 10
    B = 11

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C', 'F#')."""
        return PITCH_NAMES[self.value]

    def transpose(self, semitones: int) -> "Tone":
        """Transpose by a number of semitones (positive or negative)."""
        return Tone((self.value + semitones) % 12)

    @classmethod
    def parse(cls, name: str) -> "Tone":
        """Parse a tone from 'C#', 'Cs' or 'c#'."""
        name = name.strip()
        upper = name[:1].upper() + name[1:]
        if upper in PITCH_NAMES:
            return cls(PITCH_NAMES.index(upper))
        for member in cls:
            if member.name.lower() == name.lower():
                return member
        raise ValueError(f"Unknown tone: {name}")

    def __str__(self) -> str:
        return self.pitch_name


class TwelveTone:
    """12-tone equal temperament, enumerated from C upwards."""

    def __iter__(self) -> Iterator[Tone]:
        return iter(Tone)

    def __len__(self) -> int:
        return len(Tone)

    def size(self) -> int:
        return len(Tone)

    def step(self, pitch_class: Tone) -> int:
        return int(Tone(pitch_class))

    def tone(self, step: int) -> Tone:
        """Tone at a given step, wrapping around the octave."""
        return Tone(step % len(Tone))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TwelveTone)

    def __hash__(self) -> int:
        return hash(TwelveTone)

    def __repr__(self) -> str:
        return "TwelveTone()"
