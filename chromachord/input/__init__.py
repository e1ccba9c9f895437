"""Input layer - Audio loading and spectrum extraction."""

from .loader import AudioLoader

__all__ = ["AudioLoader"]
