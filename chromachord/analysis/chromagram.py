"""Chromagram construction from a magnitude spectrum.

For every pitch class the factory sums the strongest spectral energy found
near the pitch's fundamental, across a number of octaves and harmonics:

    energy(p) = sum over octave o, harmonic h of  peak(o, h) / h

where ``peak`` is the maximum magnitude inside a window of ``bin_radius * h``
bins either side of the bin nearest to ``freq(p) * o * h``.

Window policy at the spectrum edges:
- Window ends are clamped into ``[0, bin_count]`` (the upper end exclusive).
- A non-empty clamped window yields its maximum.
- An empty window (radius 0, or a window lying wholly outside the
  spectrum) yields the value of the valid bin nearest to the center.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from ..core import (
    DEFAULT_BIN_RADIUS,
    DEFAULT_NUM_HARMONICS,
    DEFAULT_NUM_OCTAVES,
    DEFAULT_REF_FREQ,
    ConfigurationError,
    InvalidInputError,
    UnknownPitchClassError,
)
from ..theory import Chroma
from .frequency import pitch_frequency
from .spectrum import Magnitude

logger = logging.getLogger(__name__)


class Chromagram:
    """Energy per pitch class for one analysis window.

    Pitch classes keep the order of the mapping they were built from; the
    factory uses the chroma's enumeration order. That order breaks ties in
    ``top_k``.
    """

    def __init__(self, energies: Mapping[Hashable, float]):
        """
        Initialize Chromagram.

        Args:
            energies: Mapping from pitch class to non-negative energy

        Raises:
            InvalidInputError: If an energy is negative or non-finite
        """
        self._energies: Dict[Hashable, float] = {}
        for pitch_class, energy in energies.items():
            energy = float(energy)
            if not math.isfinite(energy) or energy < 0:
                raise InvalidInputError(
                    f"Energy of {pitch_class} must be finite and non-negative, got {energy}"
                )
            self._energies[pitch_class] = energy
        self._order = {p: i for i, p in enumerate(self._energies)}

    def energy(self, pitch_class: Hashable) -> float:
        try:
            return self._energies[pitch_class]
        except KeyError:
            raise UnknownPitchClassError(pitch_class) from None

    def pitch_classes(self) -> Tuple[Hashable, ...]:
        return tuple(self._energies)

    def items(self) -> List[Tuple[Hashable, float]]:
        return list(self._energies.items())

    def as_array(self) -> np.ndarray:
        """Energies in pitch-class order."""
        return np.array(list(self._energies.values()), dtype=np.float64)

    def top_k(self, k: int) -> List[Hashable]:
        """
        Get the k most energetic pitch classes.

        Args:
            k: Number of pitch classes to return

        Returns:
            min(k, len(self)) pitch classes by descending energy, ties in
            pitch-class order
        """
        if k < 0:
            raise InvalidInputError(f"k must be non-negative, got {k}")
        ranked = sorted(
            self._energies,
            key=lambda p: (-self._energies[p], self._order[p]),
        )
        return ranked[:k]

    def __len__(self) -> int:
        return len(self._energies)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._energies)

    def __contains__(self, pitch_class: object) -> bool:
        return pitch_class in self._energies

    def __repr__(self) -> str:
        inner = ", ".join(f"{p}: {e:.4g}" for p, e in self._energies.items())
        return f"Chromagram({{{inner}}})"


@dataclass(frozen=True)
class ChromagramConfig:
    """Configuration for chromagram construction.

    Attributes:
        num_octaves: Octave multiples of each fundamental to sum (default: 2)
        num_harmonics: Harmonic multiples within each octave to sum (default: 2)
        bin_radius: Half-width of the search window in bins, scaled by the
            harmonic number (default: 2)
        ref_freq: Frequency of the chroma's step 0 at octave multiplier 1
            (default: 130.81279 Hz, C3)
    """

    num_octaves: int = DEFAULT_NUM_OCTAVES
    num_harmonics: int = DEFAULT_NUM_HARMONICS
    bin_radius: int = DEFAULT_BIN_RADIUS
    ref_freq: float = DEFAULT_REF_FREQ

    def __post_init__(self):
        for name in ("num_octaves", "num_harmonics", "bin_radius"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__} {value!r}"
                )
        if self.num_octaves < 1:
            raise ConfigurationError(f"num_octaves must be >= 1, got {self.num_octaves}")
        if self.num_harmonics < 1:
            raise ConfigurationError(f"num_harmonics must be >= 1, got {self.num_harmonics}")
        if self.bin_radius < 0:
            raise ConfigurationError(f"bin_radius must be >= 0, got {self.bin_radius}")
        if not math.isfinite(self.ref_freq) or self.ref_freq <= 0:
            raise ConfigurationError(f"ref_freq must be positive, got {self.ref_freq}")


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _window_peak(values: np.ndarray, center: int, radius: int) -> Tuple[float, bool]:
    """
    Peak magnitude around a center bin, clamped to the spectrum.

    Returns:
        (peak, outside) where outside is True if the whole window lies
        beyond the last bin
    """
    n = len(values)
    lo = min(max(center - radius, 0), n)
    hi = min(max(center + radius, 0), n)
    if lo < hi:
        return float(values[lo:hi].max()), False
    nearest = min(max(center, 0), n - 1)
    return float(values[nearest]), center - radius >= n


class ChromagramFactory:
    """Build chromagrams from magnitude spectra."""

    def __init__(
        self,
        num_octaves: int = DEFAULT_NUM_OCTAVES,
        num_harmonics: int = DEFAULT_NUM_HARMONICS,
        bin_radius: int = DEFAULT_BIN_RADIUS,
        ref_freq: float = DEFAULT_REF_FREQ,
        config: Optional[ChromagramConfig] = None,
    ):
        """
        Initialize ChromagramFactory.

        Args:
            num_octaves: Octave multiples of each fundamental to sum
            num_harmonics: Harmonic multiples within each octave to sum
            bin_radius: Search window half-width in bins (scaled per harmonic)
            ref_freq: Frequency (Hz) of the chroma's reference tone
            config: Optional ChromagramConfig, overrides the other arguments

        Raises:
            ConfigurationError: If a parameter is out of range
        """
        if config is not None:
            self.config = config
        else:
            self.config = ChromagramConfig(
                num_octaves=num_octaves,
                num_harmonics=num_harmonics,
                bin_radius=bin_radius,
                ref_freq=ref_freq,
            )

    @classmethod
    def default(cls) -> "ChromagramFactory":
        """2 octaves, 2 harmonics, radius 2, reference C3."""
        return cls(config=ChromagramConfig())

    def create(self, magnitude: Magnitude, chroma: Chroma) -> Chromagram:
        """
        Compute the chromagram of a magnitude spectrum.

        Args:
            magnitude: Magnitude spectrum of one window
            chroma: Pitch-class enumeration to aggregate into

        Returns:
            Chromagram with one entry per pitch class of the chroma

        Raises:
            InvalidInputError: If magnitude is not a Magnitude or the chroma
                enumerates a pitch class twice
        """
        if not isinstance(magnitude, Magnitude):
            raise InvalidInputError(
                f"Expected Magnitude, got {type(magnitude).__name__}"
            )

        cfg = self.config
        values = magnitude.values
        bin_hz = magnitude.bin_hz

        energies: Dict[Hashable, float] = {}
        windows_outside = 0

        for pitch_class in chroma:
            if pitch_class in energies:
                raise InvalidInputError(f"Chroma enumerates {pitch_class} twice")

            freq = pitch_frequency(chroma, pitch_class, cfg.ref_freq)
            oct_sum = 0.0

            for octave in range(1, cfg.num_octaves + 1):
                harmonic_sum = 0.0

                for harmonic in range(1, cfg.num_harmonics + 1):
                    center = _round_half_up(freq * octave * harmonic / bin_hz)
                    peak, outside = _window_peak(values, center, cfg.bin_radius * harmonic)
                    if outside:
                        windows_outside += 1
                    # Harmonic energy attenuates with harmonic number
                    harmonic_sum += peak / harmonic

                oct_sum += harmonic_sum

            energies[pitch_class] = oct_sum

        if windows_outside:
            warnings.warn(
                f"{windows_outside} search windows lie beyond the last of "
                f"{len(values)} bins ({bin_hz:.2f} Hz/bin); reduce octaves or "
                f"harmonics, or use a longer FFT"
            )

        logger.debug(
            "Built chromagram over %d pitch classes from %d bins (%d windows outside)",
            len(energies), len(values), windows_outside,
        )
        return Chromagram(energies)
