"""
Fuzzy symbol index - fzf-style matching over distinct symbol names.

A name matches when the query is a case-insensitive subsequence of it. Two
ranking variants exist:

- ``v2`` (precise): aligns the query preferring word starts (camelCase humps,
  ``_``/``-`` separators) and ranks by boundary hits, then gap size, then
  ``rapidfuzz.fuzz.WRatio``.
- ``v1`` (fast): greedy alignment ranked by ``rapidfuzz.fuzz.ratio``. Used for
  large corpora where the precise variant costs too much per query.

Both variants rank exact matches first.
"""

import logging
from typing import Iterable, List, Optional, Set, Tuple

from rapidfuzz import fuzz

logger = logging.getLogger(__name__)

ALGORITHM_FAST = "v1"
ALGORITHM_PRECISE = "v2"
DEFAULT_LARGE_CORPUS_THRESHOLD = 20000


def greedy_positions(query: str, text: str, start: int = 0) -> Optional[List[int]]:
    """Leftmost positions of query characters in text, or None if not a subsequence"""
    positions: List[int] = []
    index = start
    for char in query:
        index = text.find(char, index)
        if index == -1:
            return None
        positions.append(index)
        index += 1
    return positions


def word_boundaries(name: str) -> Set[int]:
    """Indices where a new word starts: first char, after separators, camelCase humps, digits"""
    boundaries: Set[int] = set()
    for i, char in enumerate(name):
        if not char.isalnum():
            continue
        if i == 0:
            boundaries.add(i)
            continue
        prev = name[i - 1]
        if not prev.isalnum():
            boundaries.add(i)
        elif char.isupper() and (prev.islower() or prev.isdigit()):
            boundaries.add(i)
        elif char.isupper() and prev.isupper() and i + 1 < len(name) and name[i + 1].islower():
            boundaries.add(i)
        elif char.isdigit() and not prev.isdigit():
            boundaries.add(i)
    return boundaries


def boundary_positions(query: str, lowered: str, boundaries: Set[int]) -> Optional[List[int]]:
    """
    Align query to name, taking a word-start occurrence whenever the rest of
    the query still fits after it.
    """
    positions: List[int] = []
    index = 0

    for offset, char in enumerate(query):
        chosen = -1
        candidate = lowered.find(char, index)
        first = candidate
        while candidate != -1:
            if candidate in boundaries and greedy_positions(query[offset + 1:], lowered, candidate + 1) is not None:
                chosen = candidate
                break
            candidate = lowered.find(char, candidate + 1)

        if chosen == -1:
            chosen = first
        if chosen == -1:
            return None

        positions.append(chosen)
        index = chosen + 1

    return positions


class FuzzySymbolIndex:
    """Read-only fuzzy matcher built from the distinct symbol names of an index."""

    def __init__(self, names: Iterable[str], large_corpus_threshold: int = DEFAULT_LARGE_CORPUS_THRESHOLD):
        self.names: List[str] = list(dict.fromkeys(names))
        self._lowered: List[str] = [name.lower() for name in self.names]
        self.algorithm = ALGORITHM_FAST if len(self.names) > large_corpus_threshold else ALGORITHM_PRECISE
        logger.debug(f"Built fuzzy index over {len(self.names)} names (algorithm {self.algorithm})")

    def __len__(self) -> int:
        return len(self.names)

    def find(self, query: str) -> List[str]:
        """
        Find names matching the query.

        Returns:
            Matching names, best match first
        """
        needle = query.strip()
        if not needle:
            return []

        lowered_needle = needle.lower()
        score = self._score_fast if self.algorithm == ALGORITHM_FAST else self._score_precise

        ranked: List[Tuple[tuple, int, str]] = []
        for position, (name, lowered) in enumerate(zip(self.names, self._lowered)):
            key = score(needle, lowered_needle, name, lowered)
            if key is not None:
                ranked.append((key, position, name))

        ranked.sort(key=lambda item: (item[0], item[1]))
        return [name for _, _, name in ranked]

    @staticmethod
    def _exact_rank(query: str, lowered_query: str, name: str, lowered: str) -> int:
        if name == query:
            return 0
        if lowered == lowered_query:
            return 1
        return 2

    def _score_fast(self, query: str, lowered_query: str, name: str, lowered: str) -> Optional[tuple]:
        if greedy_positions(lowered_query, lowered) is None:
            return None
        return (
            self._exact_rank(query, lowered_query, name, lowered),
            0 if lowered.startswith(lowered_query) else 1,
            -fuzz.ratio(lowered_query, lowered),
            len(name),
        )

    def _score_precise(self, query: str, lowered_query: str, name: str, lowered: str) -> Optional[tuple]:
        if greedy_positions(lowered_query, lowered) is None:
            return None

        boundaries = word_boundaries(name)
        positions = boundary_positions(lowered_query, lowered, boundaries)
        if positions is None:
            return None

        boundary_hits = sum(1 for pos in positions if pos in boundaries)
        gaps = sum(b - a - 1 for a, b in zip(positions, positions[1:]))

        return (
            self._exact_rank(query, lowered_query, name, lowered),
            0 if lowered.startswith(lowered_query) else 1,
            -boundary_hits,
            gaps,
            -fuzz.WRatio(query, name),
            len(name),
        )
