"""Chord detection - Match a chromagram against binary chord templates.

Every (root, quality) pair has a template with a 1 at each constituent
pitch class. A chord scores the squared energy that falls outside its
template:

    score(c) = sum_i (1 - T_c[i]) * energy(i) ** 2

so a chromagram whose energy sits entirely on chord tones scores 0. The
detected chord minimizes the score; exact ties go to the chord that comes
first in table order (roots in chroma order, then qualities in Quality
order).
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..analysis import Chromagram
from ..core import InvalidInputError, UnknownChordError
from ..theory import Chord, Chroma, Quality, TwelveTone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChordMatch:
    """A candidate chord with its template error (lower is better)."""
    chord: Chord
    score: float


class ChordTemplateTable:
    """Binary pitch-class templates for every root and quality.

    Read-only once built. Rows follow ``chords`` order.
    """

    def __init__(self, chroma: Chroma, chords: Sequence[Chord], templates: np.ndarray):
        if len(chords) != templates.shape[0]:
            raise InvalidInputError(
                f"{len(chords)} chords but {templates.shape[0]} template rows"
            )
        self.chroma = chroma
        self.chords = tuple(chords)
        self.templates = templates.astype(np.uint8)
        self.templates.setflags(write=False)
        # Weight of each pitch class in a chord's error term
        self.misses = 1.0 - self.templates.astype(np.float64)
        self.misses.setflags(write=False)
        self._index: Dict[Chord, int] = {c: i for i, c in enumerate(self.chords)}

    @classmethod
    def build(
        cls,
        chroma: Optional[Chroma] = None,
        qualities: Optional[Iterable[Quality]] = None,
    ) -> "ChordTemplateTable":
        """
        Build the templates for every root in the chroma and every quality.

        Args:
            chroma: 12-tone chroma to enumerate roots from (default: TwelveTone)
            qualities: Qualities to include (default: all of Quality)

        Returns:
            ChordTemplateTable with len(chroma) * len(qualities) chords
        """
        chroma = chroma if chroma is not None else TwelveTone()
        qualities = list(qualities) if qualities is not None else list(Quality)

        chords = []
        rows = []
        for root in chroma:
            for quality in qualities:
                chord = Chord(root, quality)
                row = np.zeros(chroma.size(), dtype=np.uint8)
                for pitch_class in chord.pitch_classes():
                    row[chroma.step(pitch_class)] = 1
                chords.append(chord)
                rows.append(row)

        templates = np.array(rows, dtype=np.uint8).reshape(len(rows), chroma.size())
        return cls(chroma, chords, templates)

    def template(self, chord: Chord) -> np.ndarray:
        """Membership vector of a chord, indexed by chroma step."""
        return self.templates[self.index(chord)]

    def index(self, chord: Chord) -> int:
        try:
            return self._index[chord]
        except KeyError:
            raise UnknownChordError(f"No template for chord {chord}") from None

    def __len__(self) -> int:
        return len(self.chords)

    def __contains__(self, chord: object) -> bool:
        return chord in self._index


_TEMPLATE_TABLE: Optional[ChordTemplateTable] = None
_TEMPLATE_TABLE_LOCK = threading.Lock()


def get_template_table() -> ChordTemplateTable:
    """Process-wide 12-TET template table, built once on first use."""
    global _TEMPLATE_TABLE
    if _TEMPLATE_TABLE is None:
        with _TEMPLATE_TABLE_LOCK:
            if _TEMPLATE_TABLE is None:
                _TEMPLATE_TABLE = ChordTemplateTable.build()
                logger.debug("Built chord template table with %d chords", len(_TEMPLATE_TABLE))
    return _TEMPLATE_TABLE


class ChordDetector:
    """Detect the chord whose template best explains a chromagram.

    Features:
    - Weighted squared-error template matching
    - Deterministic tie-break by table order
    - Ranked candidate list for inspecting alternatives
    """

    def __init__(self, table: Optional[ChordTemplateTable] = None):
        """
        Initialize ChordDetector.

        Args:
            table: Template table to match against (default: the shared
                12-TET table)
        """
        self._table = table

    @property
    def table(self) -> ChordTemplateTable:
        if self._table is None:
            return get_template_table()
        return self._table

    def _energy_vector(self, chromagram: Chromagram) -> np.ndarray:
        if len(chromagram) == 0:
            raise InvalidInputError("Cannot detect a chord in an empty chromagram")

        chroma = self.table.chroma
        if set(chromagram.pitch_classes()) != set(chroma):
            raise InvalidInputError(
                "Chromagram pitch classes do not match the chord template chroma"
            )

        energies = np.zeros(chroma.size(), dtype=np.float64)
        for pitch_class, energy in chromagram.items():
            energies[chroma.step(pitch_class)] = energy
        return energies

    def scores(self, chromagram: Chromagram) -> np.ndarray:
        """Template error of every chord, in table order."""
        energies = self._energy_vector(chromagram)
        return self.table.misses @ (energies ** 2)

    def score(self, chromagram: Chromagram, chord: Chord) -> float:
        """Template error of a single chord."""
        return float(self.scores(chromagram)[self.table.index(chord)])

    def detect(self, chromagram: Chromagram) -> Chord:
        """
        Detect the best matching chord.

        Args:
            chromagram: Chromagram over the table's chroma

        Returns:
            Chord with the lowest score (first in table order on ties)

        Raises:
            InvalidInputError: If the chromagram is empty or does not cover
                the table's chroma
        """
        scores = self.scores(chromagram)
        # argmin returns the first occurrence of the minimum
        best = int(np.argmin(scores))
        chord = self.table.chords[best]
        logger.debug("Detected %s (score %.6g)", chord, scores[best])
        return chord

    def rank(self, chromagram: Chromagram, top_n: Optional[int] = None) -> List[ChordMatch]:
        """
        Rank all chords by score.

        Args:
            chromagram: Chromagram over the table's chroma
            top_n: Only return the best top_n candidates

        Returns:
            ChordMatch list sorted by score, then table order

        Raises:
            InvalidInputError: If top_n is negative
        """
        if top_n is not None and top_n < 0:
            raise InvalidInputError(f"top_n must be non-negative, got {top_n}")
        scores = self.scores(chromagram)
        order = np.argsort(scores, kind="stable")
        if top_n is not None:
            order = order[:top_n]
        return [ChordMatch(self.table.chords[i], float(scores[i])) for i in order]


def detect_chord(chromagram: Chromagram, table: Optional[ChordTemplateTable] = None) -> Chord:
    """Detect the chord that best matches a chromagram."""
    return ChordDetector(table).detect(chromagram)
