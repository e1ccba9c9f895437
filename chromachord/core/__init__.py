"""Core constants and errors for chromachord."""

from .constants import (
    PITCH_NAMES,
    DEFAULT_SR,
    DEFAULT_N_FFT,
    DEFAULT_NUM_OCTAVES,
    DEFAULT_NUM_HARMONICS,
    DEFAULT_BIN_RADIUS,
    DEFAULT_REF_FREQ,
    SCALE_SIZE,
)
from .errors import (
    ChromaChordError,
    ConfigurationError,
    InvalidInputError,
    UnknownPitchClassError,
    UnknownChordError,
)

__all__ = [
    "PITCH_NAMES",
    "DEFAULT_SR",
    "DEFAULT_N_FFT",
    "DEFAULT_NUM_OCTAVES",
    "DEFAULT_NUM_HARMONICS",
    "DEFAULT_BIN_RADIUS",
    "DEFAULT_REF_FREQ",
    "SCALE_SIZE",
    "ChromaChordError",
    "ConfigurationError",
    "InvalidInputError",
    "UnknownPitchClassError",
    "UnknownChordError",
]
