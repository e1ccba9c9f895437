"""Inference layer - Musical interpretation of a chromagram.

- Chord detection by weighted template matching
- Scale inference from the dominant pitch classes

Pipeline: Chromagram → [Chord, Scale]
"""

from .chords import (
    ChordDetector,
    ChordMatch,
    ChordTemplateTable,
    detect_chord,
    get_template_table,
)
from .scale import infer_scale

__all__ = [
    # Chord detection
    "ChordDetector",
    "ChordMatch",
    "ChordTemplateTable",
    "detect_chord",
    "get_template_table",
    # Scale inference
    "infer_scale",
]
