"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

# Equal-tempered frequencies (Hz)
E3 = 164.81
G3 = 196.00
B3 = 246.94
C4 = 261.63
E4 = 329.63
G4 = 392.00


def generate_chord(frequencies: list, duration: float, sr: int = 22050) -> np.ndarray:
    """Generate a chord by summing sine waves, normalized to avoid clipping."""
    t = np.linspace(0, duration, int(sr * duration), endpoint=False)
    chord = np.sum([np.sin(2 * np.pi * f * t) for f in frequencies], axis=0)
    max_abs = np.max(np.abs(chord)) or 1.0
    return (chord / max_abs).astype(np.float32)


@pytest.fixture
def e_minor_audio():
    """One second of an E minor triad (E3, G3, B3) at 22050 Hz."""
    return generate_chord([E3, G3, B3], duration=1.0), 22050


@pytest.fixture
def c_major_audio():
    """One second of a C major triad (C4, E4, G4) at 22050 Hz."""
    return generate_chord([C4, E4, G4], duration=1.0), 22050


@pytest.fixture
def e_minor_wav(tmp_path: Path, e_minor_audio) -> Path:
    """E minor triad written to a temporary WAV file."""
    audio, sr = e_minor_audio
    path = tmp_path / "e_minor.wav"
    sf.write(str(path), audio, sr)
    return path
