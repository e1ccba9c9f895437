"""Theory layer - the music-theory vocabulary the analysis consumes.

- Tones and chromas (pitch-class enumeration and step arithmetic)
- Chord qualities and chords (decomposition into pitch classes)
- Diatonic scales and scale inference from ranked pitch classes
"""

from .tones import Chroma, Tone, TwelveTone
from .chords import Chord, Quality
from .scales import DiatonicScale, Mode, detect_scale

__all__ = [
    "Chroma",
    "Tone",
    "TwelveTone",
    "Chord",
    "Quality",
    "DiatonicScale",
    "Mode",
    "detect_scale",
]
