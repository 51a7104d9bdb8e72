"""
File content cache keyed by path and modification time.

Core principles:
1. LRU eviction avoids unbounded memory growth
2. Modification time check avoids redundant reads
3. A newer read simply overwrites the old entry
"""

import os
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CacheEntry:
    content: str
    modification_time: float


class FileContentCache:
    """Decoded file text, reused while the file's mtime is unchanged."""

    def __init__(self, max_size: Optional[int] = None):
        if max_size is None:
            from ..config import get_search_config
            max_size = get_search_config().max_cached_files

        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._max_size = max_size
        # Parse batches read concurrently
        self._lock = threading.Lock()

        # Cache statistics
        self._cache_hits = 0
        self._cache_misses = 0
        self._evictions = 0
        self._start_time = time.time()

    def read(self, file_path: str) -> str:
        """
        Read file content, served from cache when the mtime is unchanged.

        Raises:
            OSError: the file cannot be stat'ed or read
        """
        mtime = os.stat(file_path).st_mtime

        with self._lock:
            entry = self._cache.get(file_path)
            if entry is not None and entry.modification_time == mtime:
                self._cache_hits += 1
                self._cache.move_to_end(file_path)
                return entry.content
            self._cache_misses += 1

        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()

        with self._lock:
            self._cache[file_path] = CacheEntry(content=content, modification_time=mtime)
            self._cache.move_to_end(file_path)
            while len(self._cache) > self._max_size:
                self._cache.popitem(last=False)
                self._evictions += 1

        return content

    def get(self, file_path: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._cache.get(file_path)

    def invalidate(self, file_path: str) -> None:
        with self._lock:
            self._cache.pop(file_path, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, file_path: str) -> bool:
        return file_path in self._cache

    def get_stats(self) -> Dict[str, Any]:
        """Cache statistics - performance monitoring"""
        total = self._cache_hits + self._cache_misses
        return {
            "cached_files": len(self._cache),
            "max_size": self._max_size,
            "hits": self._cache_hits,
            "misses": self._cache_misses,
            "hit_rate": self._cache_hits / total if total else 0.0,
            "evictions": self._evictions,
            "uptime": time.time() - self._start_time,
        }
