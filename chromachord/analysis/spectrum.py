"""Spectral representation of one audio window.

A Spectrum holds complex FFT bins with linear frequency spacing; a
Magnitude drops the phase. Both carry the sample rate so that the width of
a bin is ``sample_rate / bin_count``.
"""

import numpy as np

from ..core import InvalidInputError


def _validate_sample_rate(sample_rate: float) -> float:
    sample_rate = float(sample_rate)
    if not np.isfinite(sample_rate) or sample_rate <= 0:
        raise InvalidInputError(f"Sample rate must be positive, got {sample_rate}")
    return sample_rate


def _frozen(values: np.ndarray) -> np.ndarray:
    if values.ndim != 1:
        raise InvalidInputError(f"Expected a 1-D bin array, got shape {values.shape}")
    if values.size == 0:
        raise InvalidInputError("Bin array is empty")
    values.setflags(write=False)
    return values


class Spectrum:
    """Complex-valued spectrum plus the sample rate that produced it."""

    def __init__(self, values, sample_rate: float):
        """
        Initialize Spectrum.

        Args:
            values: Complex bin values, one per frequency bin
            sample_rate: Sample rate of the analysed audio (Hz)

        Raises:
            InvalidInputError: If values is empty or sample_rate is not positive
        """
        self._values = _frozen(np.array(values, dtype=np.complex128))
        self._sample_rate = _validate_sample_rate(sample_rate)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    def __len__(self) -> int:
        return len(self._values)

    def to_magnitude(self) -> "Magnitude":
        """Element-wise modulus of every bin."""
        return magnitude_of(self)

    def __repr__(self) -> str:
        return f"Spectrum(bins={len(self)}, sample_rate={self._sample_rate})"


class Magnitude:
    """Non-negative magnitude spectrum plus sample rate."""

    def __init__(self, values, sample_rate: float):
        """
        Initialize Magnitude.

        Args:
            values: Non-negative magnitudes, one per frequency bin
            sample_rate: Sample rate of the analysed audio (Hz)

        Raises:
            InvalidInputError: If values is complex, empty, negative or
                non-finite, or sample_rate is not positive
        """
        if np.iscomplexobj(values):
            raise InvalidInputError(
                "Magnitude values must be real; use magnitude_of() for a complex spectrum"
            )
        values = np.array(values, dtype=np.float64)
        self._values = _frozen(values)
        if not np.all(np.isfinite(values)):
            raise InvalidInputError("Magnitude contains non-finite values")
        if np.any(values < 0):
            raise InvalidInputError("Magnitude contains negative values")
        self._sample_rate = _validate_sample_rate(sample_rate)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def bin_hz(self) -> float:
        """Width of one frequency bin in Hz."""
        return self._sample_rate / len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __repr__(self) -> str:
        return f"Magnitude(bins={len(self)}, sample_rate={self._sample_rate})"


def magnitude_of(spectrum: Spectrum) -> Magnitude:
    """
    Convert a complex spectrum to its magnitude.

    Args:
        spectrum: Complex spectrum

    Returns:
        Magnitude with |spectrum[i]| per bin, same sample rate and bin count
    """
    return Magnitude(np.abs(spectrum.values), spectrum.sample_rate)
