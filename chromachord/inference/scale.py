"""Scale inference from a chromagram's dominant pitch classes."""

import logging
from typing import Callable, Sequence

from ..analysis import Chromagram
from ..core import SCALE_SIZE, InvalidInputError
from ..theory import DiatonicScale, Tone, detect_scale

logger = logging.getLogger(__name__)


def infer_scale(
    chromagram: Chromagram,
    detector: Callable[[Sequence[Tone]], DiatonicScale] = detect_scale,
) -> DiatonicScale:
    """
    Infer the scale from the seven most energetic pitch classes.

    Args:
        chromagram: Chromagram with at least seven pitch classes
        detector: Scale inference function taking tones ranked by
            descending energy

    Returns:
        The scale chosen by detector

    Raises:
        InvalidInputError: If the chromagram has fewer than seven pitch classes
    """
    if len(chromagram) < SCALE_SIZE:
        raise InvalidInputError(
            f"Scale inference needs {SCALE_SIZE} pitch classes, "
            f"chromagram has {len(chromagram)}"
        )
    ranked = chromagram.top_k(SCALE_SIZE)
    scale = detector(ranked)
    logger.debug("Inferred %s from %s", scale, [str(t) for t in ranked])
    return scale
