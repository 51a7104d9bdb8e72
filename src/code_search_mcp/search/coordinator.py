"""
Text search coordinator - runs the search tiers in order until one succeeds.
"""

import logging
from typing import List, Optional, Sequence

from ..core.errors import SearchToolError
from ..core.globs import expand_glob_braces
from ..core.models import TextMatch
from .base import SearchStrategy, sort_results_by_recency
from .basic import BasicSearchStrategy
from .git_grep import GitGrepStrategy
from .grep import SystemGrepStrategy

logger = logging.getLogger(__name__)

# Prioritized list of search strategies
SEARCH_STRATEGY_CLASSES = [
    GitGrepStrategy,
    SystemGrepStrategy,
    BasicSearchStrategy,
]


def create_default_strategies(timeout: float = 30) -> List[SearchStrategy]:
    """Instantiate every tier in priority order"""
    strategies: List[SearchStrategy] = []
    for strategy_class in SEARCH_STRATEGY_CLASSES:
        if strategy_class is BasicSearchStrategy:
            strategies.append(strategy_class())
        else:
            strategies.append(strategy_class(timeout=timeout))
    return strategies


class TextSearchCoordinator:
    """
    Drives the fallback chain.

    A tier is skipped when unavailable and abandoned when it raises
    ``SearchToolError``. A regex search that git grep answers with no matches
    also moves on, since git's regex dialect is narrower than the others.
    ``ValueError`` from a tier (invalid pattern) reaches the caller.
    """

    def __init__(
        self,
        base_path: str,
        strategies: Optional[Sequence[SearchStrategy]] = None,
        recent_window: float = 24 * 3600,
        timeout: float = 30,
    ):
        self.base_path = base_path
        self.strategies = list(strategies) if strategies is not None else create_default_strategies(timeout)
        self.recent_window = recent_window

    def search(
        self,
        pattern: str,
        file_glob: Optional[str] = None,
        is_regex: bool = False,
        max_results: int = 100,
    ) -> List[TextMatch]:
        """
        Search file contents.

        Args:
            pattern: Literal text or regex
            file_glob: Optional glob, ``{a,b}`` groups allowed
            is_regex: Treat the pattern as a regex
            max_results: Maximum number of matches

        Returns:
            Matches ordered by file recency

        Raises:
            SearchToolError: Every tier failed
            ValueError: The regex pattern is invalid
        """
        file_globs = expand_glob_braces(file_glob) if file_glob else None
        errors: List[str] = []

        for strategy in self.strategies:
            if not strategy.is_available(self.base_path):
                logger.debug(f"Search tier {strategy.name} unavailable")
                continue

            try:
                results = strategy.search(
                    pattern, self.base_path, file_globs=file_globs, is_regex=is_regex, max_results=max_results
                )
            except SearchToolError as e:
                logger.debug(f"Search tier {strategy.name} failed: {e}")
                errors.append(f"{strategy.name}: {e}")
                continue

            if not results and is_regex and isinstance(strategy, GitGrepStrategy):
                logger.debug("git grep found nothing for a regex pattern, trying next tier")
                continue

            return sort_results_by_recency(results, self.base_path, self.recent_window)

        raise SearchToolError(f"All search strategies failed for pattern {pattern!r}: {'; '.join(errors)}")
