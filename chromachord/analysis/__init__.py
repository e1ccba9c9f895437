"""Analysis layer - From spectrum to chromagram.

- Spectral representation (complex spectrum, magnitude)
- Pitch-class frequencies
- Chromagram construction over octaves and harmonics

Pipeline: Spectrum → Magnitude → Chromagram
"""

from .spectrum import Spectrum, Magnitude, magnitude_of
from .frequency import pitch_frequency
from .chromagram import Chromagram, ChromagramConfig, ChromagramFactory

__all__ = [
    "Spectrum",
    "Magnitude",
    "magnitude_of",
    "pitch_frequency",
    "Chromagram",
    "ChromagramConfig",
    "ChromagramFactory",
]
