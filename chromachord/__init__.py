"""chromachord - Chord and scale inference from spectral energy.

Architecture Layers:
    1. core/      - Constants and errors
    2. theory/    - Tones, chromas, chords, scales
    3. input/     - Audio loading and single-window spectra
    4. analysis/  - Spectrum, magnitude, chromagram construction
    5. inference/ - Chord detection and scale inference
"""

__version__ = "0.1.0"

# Core
from .core import (
    ChromaChordError,
    ConfigurationError,
    InvalidInputError,
    UnknownPitchClassError,
    UnknownChordError,
)

# Theory layer
from .theory import (
    Chord,
    DiatonicScale,
    Mode,
    Quality,
    Tone,
    TwelveTone,
    detect_scale,
)

# Analysis layer
from .analysis import (
    Chromagram,
    ChromagramConfig,
    ChromagramFactory,
    Magnitude,
    Spectrum,
    magnitude_of,
)

# Inference layer
from .inference import (
    ChordDetector,
    ChordMatch,
    ChordTemplateTable,
    detect_chord,
    get_template_table,
    infer_scale,
)

# Input layer
from .input import AudioLoader

__all__ = [
    # Core
    "ChromaChordError",
    "ConfigurationError",
    "InvalidInputError",
    "UnknownPitchClassError",
    "UnknownChordError",
    # Theory
    "Chord",
    "DiatonicScale",
    "Mode",
    "Quality",
    "Tone",
    "TwelveTone",
    "detect_scale",
    # Analysis
    "Chromagram",
    "ChromagramConfig",
    "ChromagramFactory",
    "Magnitude",
    "Spectrum",
    "magnitude_of",
    # Inference
    "ChordDetector",
    "ChordMatch",
    "ChordTemplateTable",
    "detect_chord",
    "get_template_table",
    "infer_scale",
    # Input
    "AudioLoader",
]
