"""Exceptions raised by chromachord."""


class ChromaChordError(Exception):
    """Base class for all chromachord errors."""


class ConfigurationError(ChromaChordError, ValueError):
    """Invalid analysis parameters (octaves, harmonics, radius, reference)."""


class InvalidInputError(ChromaChordError, ValueError):
    """Input that the pipeline cannot analyze.

    Raised for empty spectra, non-positive sample rates, negative energies,
    and chromagrams that are empty or do not match the chord templates.
    """


class UnknownPitchClassError(ChromaChordError, KeyError):
    """Lookup of a pitch class that is not part of a chromagram."""


class UnknownChordError(ChromaChordError, KeyError):
    """Lookup of a chord that has no template in a chord table."""
