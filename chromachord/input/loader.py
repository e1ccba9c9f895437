"""Audio loading and single-window spectrum extraction."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import librosa
import numpy as np

from ..analysis import Spectrum
from ..core import DEFAULT_N_FFT, DEFAULT_SR, InvalidInputError

logger = logging.getLogger(__name__)


class AudioLoader:
    """Handles audio file loading and spectrum extraction."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        mono: bool = True,
        normalize: bool = True,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Target sample rate for resampling
            mono: Convert to mono if True
            normalize: Normalize audio amplitude if True
        """
        self.target_sr = target_sr
        self.mono = mono
        self.normalize = normalize

    def load(self, path: str) -> Tuple[np.ndarray, int]:
        """
        Load audio file and preprocess.

        Args:
            path: Path to audio file

        Returns:
            Tuple of (audio array, sample rate)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        audio, sr = librosa.load(
            str(path),
            sr=self.target_sr,
            mono=self.mono,
        )

        if self.normalize:
            audio = self._normalize(audio)

        logger.debug("Loaded %s: %d samples at %d Hz", path.name, len(audio), sr)
        return audio, sr

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if audio.size else 0.0
        if peak > 0:
            audio = audio / peak
        return audio

    def get_duration(self, audio: np.ndarray, sr: Optional[int] = None) -> float:
        """Get duration in seconds."""
        sr = sr or self.target_sr
        return len(audio) / sr

    def spectrum(
        self,
        audio: np.ndarray,
        sr: Optional[int] = None,
        n_fft: int = DEFAULT_N_FFT,
        offset: float = 0.0,
    ) -> Spectrum:
        """
        Complex spectrum of one Hann-windowed frame.

        The full (two-sided) FFT is kept so that the bin width is
        ``sr / n_fft``. Frames running past the end are zero-padded.

        Args:
            audio: Mono audio array
            sr: Sample rate (default: target_sr)
            n_fft: Frame length in samples
            offset: Frame start in seconds

        Returns:
            Spectrum with n_fft bins

        Raises:
            InvalidInputError: If n_fft is not positive, offset is negative,
                or the audio is not mono
        """
        sr = sr or self.target_sr
        if n_fft <= 0:
            raise InvalidInputError(f"n_fft must be positive, got {n_fft}")
        if offset < 0:
            raise InvalidInputError(f"offset must be non-negative, got {offset}")
        if audio.ndim != 1:
            raise InvalidInputError("Spectrum extraction needs mono audio")

        start = int(round(offset * sr))
        frame = np.zeros(n_fft, dtype=np.float64)
        chunk = audio[start:start + n_fft]
        frame[:len(chunk)] = chunk

        window = librosa.filters.get_window("hann", n_fft, fftbins=True)
        return Spectrum(np.fft.fft(frame * window), sr)
