"""
Incremental symbol indexer - only re-parses changed files.

Bad programmers worry about the code. Good programmers worry about data structures.
All mutable index state lives in one ``IndexState`` owned by the indexer; only
``build_index`` and ``clear`` mutate it.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from .cache import FileContentCache
from .decorators import safe_file_operation
from .exclusions import ExclusionLoader
from .fuzzy import FuzzySymbolIndex
from .languages import detect_language
from .models import CodeSymbol
from .symbols import parse_file_symbols

logger = logging.getLogger(__name__)


@dataclass
class IndexState:
    """Everything the engine caches between calls"""

    # absolute path -> symbols; paths with zero symbols are absent
    symbols: Dict[str, List[CodeSymbol]] = field(default_factory=dict)
    # path -> last seen modification time
    mod_times: Dict[str, float] = field(default_factory=dict)
    # every path ever observed as indexable
    indexed_files: Set[str] = field(default_factory=set)
    fuzzy_index: Optional[FuzzySymbolIndex] = None
    last_index_time: float = 0.0

    def remove_file(self, file_path: str) -> None:
        self.symbols.pop(file_path, None)
        self.mod_times.pop(file_path, None)
        self.indexed_files.discard(file_path)

    def clear(self) -> None:
        self.symbols.clear()
        self.mod_times.clear()
        self.indexed_files.clear()
        self.fuzzy_index = None
        self.last_index_time = 0.0

    def iter_symbols(self) -> Iterator[CodeSymbol]:
        for file_symbols in self.symbols.values():
            yield from file_symbols

    def symbol_names(self) -> List[str]:
        return [symbol.name for symbol in self.iter_symbols()]


class SymbolIndexer:
    """
    Incremental indexer.

    Core principles:
    1. Avoid full rebuilds - modification times decide what is re-parsed
    2. Direct data manipulation - no abstraction layers
    3. A failed file is dropped, never half-stored
    """

    def __init__(
        self,
        base_path: str,
        exclusions: ExclusionLoader,
        content_cache: FileContentCache,
        cache_duration: float = 60.0,
        batch_size: int = 10,
        large_corpus_threshold: int = 20000,
    ):
        self.base_path = base_path
        self.exclusions = exclusions
        self.content_cache = content_cache
        self.cache_duration = cache_duration
        self.batch_size = batch_size
        self.large_corpus_threshold = large_corpus_threshold
        self.state = IndexState()

    def is_fresh(self, now: Optional[float] = None) -> bool:
        """True when the index is non-empty and younger than the freshness window"""
        now = time.time() if now is None else now
        return bool(self.state.symbols) and now - self.state.last_index_time < self.cache_duration

    def build_index(self, force_refresh: bool = False) -> Dict[str, int]:
        """
        Build or refresh the symbol index.

        Args:
            force_refresh: Discard every cached structure before walking

        Returns:
            Statistics: {"parsed": N, "removed": N, "skipped": 0|1}
        """
        now = time.time()
        stats = {"parsed": 0, "removed": 0, "skipped": 0}

        if not force_refresh and self.is_fresh(now):
            stats["skipped"] = 1
            return stats

        self.exclusions.load()

        if force_refresh:
            self.clear()

        files_to_process = self._collect_changed_files()
        self._parse_in_batches(files_to_process)
        stats["parsed"] = len(files_to_process)
        stats["removed"] = self._sweep_deleted_files()

        self.state.last_index_time = now

        if files_to_process or stats["removed"] or force_refresh:
            self.rebuild_fuzzy_index()

        logger.debug(
            f"Indexed {self.base_path}: parsed {stats['parsed']}, removed {stats['removed']}, "
            f"{len(self.state.symbols)} files with symbols"
        )
        return stats

    def clear(self) -> None:
        """Drop all cached structures"""
        self.state.clear()
        self.content_cache.clear()

    def rebuild_fuzzy_index(self) -> None:
        self.state.fuzzy_index = FuzzySymbolIndex(
            self.state.symbol_names(), large_corpus_threshold=self.large_corpus_threshold
        )

    def walk_source_files(self) -> Iterator[str]:
        """Yield indexable files under the root, skipping excluded directories"""
        for root, dirs, files in os.walk(self.base_path, onerror=self._on_walk_error):
            dirs[:] = sorted(
                d for d in dirs
                if not self.exclusions.should_exclude_directory(d, os.path.join(root, d))
            )
            for file_name in sorted(files):
                if detect_language(file_name):
                    yield os.path.join(root, file_name)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory: {error}")

    def _collect_changed_files(self) -> List[str]:
        """Record modification times and return files that are new or newer"""
        changed: List[str] = []

        for file_path in self.walk_source_files():
            try:
                if not os.path.isfile(file_path):
                    continue
                current_mtime = os.stat(file_path).st_mtime
            except OSError:
                continue

            cached_mtime = self.state.mod_times.get(file_path)
            if cached_mtime is None or current_mtime > cached_mtime:
                changed.append(file_path)
                self.state.mod_times[file_path] = current_mtime

            self.state.indexed_files.add(file_path)

        return changed

    @safe_file_operation
    def _parse_file(self, file_path: str) -> Optional[List[CodeSymbol]]:
        content = self.content_cache.read(file_path)
        return parse_file_symbols(file_path, content, self.base_path)

    def _parse_in_batches(self, files_to_process: List[str]) -> None:
        """Parse files in sequential batches; files within a batch run concurrently"""
        if not files_to_process:
            return

        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for start in range(0, len(files_to_process), self.batch_size):
                batch = files_to_process[start:start + self.batch_size]
                for file_path, symbols in zip(batch, executor.map(self._parse_file, batch)):
                    if symbols is None:
                        self.state.symbols.pop(file_path, None)
                        self.state.mod_times.pop(file_path, None)
                    elif symbols:
                        self.state.symbols[file_path] = symbols
                    else:
                        self.state.symbols.pop(file_path, None)

    def _sweep_deleted_files(self) -> int:
        """Remove every tracked path that no longer exists on disk"""
        tracked = set(self.state.symbols) | set(self.state.mod_times) | self.state.indexed_files
        removed = 0
        for file_path in tracked:
            if not os.path.exists(file_path):
                self.state.remove_file(file_path)
                self.content_cache.invalidate(file_path)
                removed += 1
        return removed
