"""
Code search service - the engine facade behind every tool.

One instance owns the index state for one project root. Symbol operations
refresh the index lazily; text search and reference lookups scan the tree
directly.
"""

import logging
import os
import re
import time
from typing import Dict, List, Optional, Tuple, Union

from ..config import SearchConfig, get_search_config
from ..search.coordinator import TextSearchCoordinator
from .cache import FileContentCache
from .errors import FileOutlineError
from .exclusions import ExclusionLoader
from .indexer import SymbolIndexer
from .models import (
    CodeReference,
    CodeSymbol,
    IndexStats,
    SemanticSearchType,
    SymbolSearchResult,
    SymbolType,
    TextMatch,
)
from .references import ReferenceFinder
from .symbols import parse_file_symbols

logger = logging.getLogger(__name__)

DEFINITION_TYPES = frozenset({SymbolType.FUNCTION, SymbolType.CLASS, SymbolType.VARIABLE})

# Symbol kinds kept by semantic search; None keeps everything
SEMANTIC_TYPE_FILTERS = {
    SemanticSearchType.DEFINITION: frozenset({SymbolType.FUNCTION, SymbolType.CLASS, SymbolType.INTERFACE}),
    SemanticSearchType.USAGE: frozenset(),
    SemanticSearchType.IMPLEMENTATION: frozenset({SymbolType.FUNCTION, SymbolType.METHOD, SymbolType.CLASS}),
    SemanticSearchType.ALL: None,
}

SEMANTIC_REFERENCE_SYMBOLS = 5

_CAMEL_SPLIT_RE = re.compile(r"(?=[A-Z])")


def manual_match_score(symbol_name: str, query: str) -> int:
    """
    Score a name without the fuzzy index.

    exact 100, prefix 80, substring 60, capitalized-segment initials 40,
    otherwise 20 per character of an in-order subsequence; 0 means no match.
    """
    name_lower = symbol_name.lower()
    query_lower = query.lower()

    if name_lower == query_lower:
        return 100
    if name_lower.startswith(query_lower):
        return 80
    if query_lower in name_lower:
        return 60

    initials = "".join(segment[0].lower() for segment in _CAMEL_SPLIT_RE.split(symbol_name) if segment)
    if query_lower in initials:
        return 40

    score = 0
    query_index = 0
    for char in name_lower:
        if query_index >= len(query_lower):
            break
        if char == query_lower[query_index]:
            score += 20
            query_index += 1

    return score if query_index == len(query_lower) else 0


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 3)


class CodeSearchService:
    """
    Code intelligence for one project root.

    Core principles:
    1. Index lazily, refresh incrementally
    2. Degrade instead of failing where a fallback exists
    3. Plain dataclasses out, no formatting here
    """

    def __init__(self, base_path: Optional[str] = None, config: Optional[SearchConfig] = None):
        self.config = config or get_search_config()
        self.base_path = os.path.abspath(base_path or os.getcwd())

        self.exclusions = ExclusionLoader(self.base_path, self.config.ignore_file)
        self.content_cache = FileContentCache(self.config.max_cached_files)
        self.indexer = SymbolIndexer(
            self.base_path,
            self.exclusions,
            self.content_cache,
            cache_duration=self.config.index_cache_seconds,
            batch_size=self.config.batch_size,
            large_corpus_threshold=self.config.large_corpus_threshold,
        )
        self.reference_finder = ReferenceFinder(self.base_path)
        self.text_searcher = TextSearchCoordinator(
            self.base_path,
            recent_window=self.config.get_recent_window_seconds(),
            timeout=self.config.subprocess_timeout,
        )

    @property
    def state(self):
        return self.indexer.state

    def build_index(self, force_refresh: bool = False) -> Dict[str, int]:
        """Build or incrementally refresh the symbol index"""
        return self.indexer.build_index(force_refresh)

    def search_symbols(
        self,
        query: str,
        symbol_type: Optional[Union[SymbolType, str]] = None,
        language: Optional[str] = None,
        max_results: int = 100,
    ) -> SymbolSearchResult:
        """
        Fuzzy search over indexed symbol names.

        Args:
            query: Name or abbreviation (``gfc`` finds ``getFileContent``)
            symbol_type: Keep only this symbol kind
            language: Keep only this language
            max_results: Maximum number of symbols

        Returns:
            Symbols ranked by match quality
        """
        start_time = time.perf_counter()
        if not query or not query.strip():
            return SymbolSearchResult(query=query, symbols=[], total_results=0, search_time=_elapsed_ms(start_time))

        self.build_index()
        wanted_type = SymbolType(symbol_type) if symbol_type else None

        fuzzy_index = self.state.fuzzy_index
        if fuzzy_index is None:
            return self._search_symbols_manual(query, wanted_type, language, max_results, start_time)

        try:
            matched_names = fuzzy_index.find(query)
        except Exception as e:
            logger.debug(f"Fuzzy search failed, falling back to manual scoring: {e}")
            return self._search_symbols_manual(query, wanted_type, language, max_results, start_time)

        name_order = {name: position for position, name in enumerate(matched_names)}
        symbols: List[CodeSymbol] = []

        if max_results > 0:
            for symbol in self.state.iter_symbols():
                if wanted_type and symbol.type != wanted_type:
                    continue
                if language and symbol.language != language:
                    continue
                if symbol.name in name_order:
                    symbols.append(symbol)
                    if len(symbols) >= max_results:
                        break

        symbols.sort(key=lambda s: name_order.get(s.name, len(name_order)))

        return SymbolSearchResult(
            query=query,
            symbols=symbols,
            total_results=len(symbols),
            search_time=_elapsed_ms(start_time),
        )

    def _search_symbols_manual(
        self,
        query: str,
        symbol_type: Optional[SymbolType],
        language: Optional[str],
        max_results: int,
        start_time: float,
    ) -> SymbolSearchResult:
        """Fallback symbol search scoring every name directly"""
        scored: List[Tuple[CodeSymbol, int]] = []
        limit = max_results * 2

        if limit > 0:
            for symbol in self.state.iter_symbols():
                if symbol_type and symbol.type != symbol_type:
                    continue
                if language and symbol.language != language:
                    continue

                score = manual_match_score(symbol.name, query)
                if score > 0:
                    scored.append((symbol, score))
                    if len(scored) >= limit:
                        break

        scored.sort(key=lambda item: item[1], reverse=True)
        symbols = [symbol for symbol, _ in scored[:max_results]]

        return SymbolSearchResult(
            query=query,
            symbols=symbols,
            total_results=len(symbols),
            search_time=_elapsed_ms(start_time),
        )

    def find_definition(self, symbol_name: str, context_file: Optional[str] = None) -> Optional[CodeSymbol]:
        """
        Find where a symbol is defined.

        The context file is searched first. Only functions, classes and
        variables count as definitions. None when nothing matches.
        """
        self.build_index()

        if context_file:
            context_path = os.path.normpath(os.path.join(self.base_path, context_file))
            for symbol in self.state.symbols.get(context_path, []):
                if symbol.name == symbol_name and symbol.type in DEFINITION_TYPES:
                    return symbol

        for symbol in self.state.iter_symbols():
            if symbol.name == symbol_name and symbol.type in DEFINITION_TYPES:
                return symbol

        return None

    def find_references(self, symbol_name: str, max_results: int = 100) -> List[CodeReference]:
        """Find every word-boundary occurrence of a symbol name"""
        return self.reference_finder.find(symbol_name, max_results)

    def semantic_search(
        self,
        query: str,
        search_type: Union[SemanticSearchType, str] = SemanticSearchType.ALL,
        language: Optional[str] = None,
        max_results: int = 50,
    ) -> SymbolSearchResult:
        """
        Symbol search combined with references.

        Args:
            query: Symbol query
            search_type: definition, usage, implementation or all
            language: Keep only this language
            max_results: Limit for the symbol search and each reference lookup

        Raises:
            ValueError: Unknown search type
        """
        try:
            search_kind = SemanticSearchType(search_type)
        except ValueError:
            valid = ", ".join(kind.value for kind in SemanticSearchType)
            raise ValueError(f"Invalid search type: {search_type}. Expected one of: {valid}")

        start_time = time.perf_counter()
        symbol_results = self.search_symbols(query, language=language, max_results=max_results)

        references: List[CodeReference] = []
        if search_kind in (SemanticSearchType.USAGE, SemanticSearchType.ALL):
            for symbol in symbol_results.symbols[:SEMANTIC_REFERENCE_SYMBOLS]:
                references.extend(self.find_references(symbol.name, max_results))

        allowed = SEMANTIC_TYPE_FILTERS[search_kind]
        if allowed is None:
            symbols = symbol_results.symbols
        else:
            symbols = [symbol for symbol in symbol_results.symbols if symbol.type in allowed]

        return SymbolSearchResult(
            query=query,
            symbols=symbols,
            references=references,
            total_results=len(symbols) + len(references),
            search_time=_elapsed_ms(start_time),
        )

    def get_file_outline(self, file_path: str) -> List[CodeSymbol]:
        """
        Parse one file directly, bypassing the index and its exclusions.

        Raises:
            FileOutlineError: The file cannot be read
        """
        full_path = os.path.normpath(os.path.join(self.base_path, file_path))
        try:
            with open(full_path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            raise FileOutlineError(f"Failed to get outline for {file_path}: {e}") from e
        return parse_file_symbols(full_path, content, self.base_path)

    def text_search(
        self,
        pattern: str,
        file_glob: Optional[str] = None,
        is_regex: bool = False,
        max_results: int = 100,
    ) -> List[TextMatch]:
        """Search file contents through the tier chain, recent files first"""
        return self.text_searcher.search(pattern, file_glob=file_glob, is_regex=is_regex, max_results=max_results)

    def get_index_stats(self) -> IndexStats:
        """Summary of the current index without triggering a refresh"""
        language_breakdown: Dict[str, int] = {}
        total_symbols = 0

        for symbol in self.state.iter_symbols():
            total_symbols += 1
            language_breakdown[symbol.language] = language_breakdown.get(symbol.language, 0) + 1

        last_index_time = self.state.last_index_time
        cache_age = (time.time() - last_index_time) * 1000 if last_index_time else 0.0

        return IndexStats(
            total_files=len(self.state.symbols),
            total_symbols=total_symbols,
            language_breakdown=language_breakdown,
            cache_age=cache_age,
        )

    def clear_cache(self) -> None:
        """Drop the index, modification times, fuzzy index and file contents"""
        self.indexer.clear()
        logger.debug(f"Cleared code search cache for {self.base_path}")


# Global service instance
_search_service: Optional[CodeSearchService] = None


def get_search_service(base_path: Optional[str] = None) -> CodeSearchService:
    """Get or create the global search service"""
    global _search_service
    if _search_service is None:
        _search_service = CodeSearchService(base_path or get_search_config().root)
    return _search_service


def reset_search_service():
    """Reset the global service (mainly for testing)"""
    global _search_service
    _search_service = None
