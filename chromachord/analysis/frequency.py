"""Pitch-class frequencies relative to a reference tone."""

from typing import Hashable

from ..theory import Chroma


def pitch_frequency(chroma: Chroma, pitch_class: Hashable, ref_freq: float) -> float:
    """Frequency (Hz) of a pitch class in the octave starting at ref_freq."""
    return ref_freq * 2.0 ** (chroma.step(pitch_class) / chroma.size())
