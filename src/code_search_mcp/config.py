"""
Configuration Management for Code Search MCP

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import os
from typing import Optional

import psutil


def _calculate_smart_cache_size() -> int:
    """
    Size the file content cache from system memory.

    Returns:
        Maximum number of cached files (100-5000)
    """
    try:
        memory = psutil.virtual_memory()
        total_memory_gb = memory.total / (1024 ** 3)

        # 400 files per GB of system RAM
        max_files = int(400 * total_memory_gb)
        return max(100, min(max_files, 5000))
    except Exception:
        return 1000


class SearchConfig:
    """Code search engine configuration"""

    DEFAULT_INDEX_CACHE_SECONDS = 60.0  # Index freshness window
    DEFAULT_BATCH_SIZE = 10  # Files parsed concurrently per batch
    DEFAULT_LARGE_CORPUS_THRESHOLD = 20000  # Switch to the fast fuzzy variant above this
    DEFAULT_RECENT_HOURS = 24.0  # Recency bucket for text search ranking
    DEFAULT_SUBPROCESS_TIMEOUT = 30.0
    DEFAULT_IGNORE_FILE = ".snowignore"
    DEFAULT_LOG_LEVEL = "ERROR"

    def __init__(self):
        self.index_cache_seconds = self._get_float_env(
            "CODE_SEARCH_INDEX_CACHE_SECONDS", self.DEFAULT_INDEX_CACHE_SECONDS
        )
        self.batch_size = self._get_int_env("CODE_SEARCH_BATCH_SIZE", self.DEFAULT_BATCH_SIZE)
        self.large_corpus_threshold = self._get_int_env(
            "CODE_SEARCH_LARGE_CORPUS_THRESHOLD", self.DEFAULT_LARGE_CORPUS_THRESHOLD
        )
        self.recent_hours = self._get_float_env("CODE_SEARCH_RECENT_HOURS", self.DEFAULT_RECENT_HOURS)
        self.subprocess_timeout = self._get_float_env(
            "CODE_SEARCH_SUBPROCESS_TIMEOUT", self.DEFAULT_SUBPROCESS_TIMEOUT
        )
        self.max_cached_files = self._get_int_env(
            "CODE_SEARCH_MAX_CACHED_FILES", _calculate_smart_cache_size()
        )
        self.ignore_file = os.environ.get("CODE_SEARCH_IGNORE_FILE") or self.DEFAULT_IGNORE_FILE
        self.log_level = (os.environ.get("CODE_SEARCH_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL).upper()
        self.root = os.environ.get("CODE_SEARCH_ROOT") or os.getcwd()

        # Validate configuration
        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_float_env(self, key: str, default: float) -> float:
        """Get float from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return float(value)
        except (ValueError, TypeError):
            pass
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if self.index_cache_seconds < 0:
            raise ValueError("index_cache_seconds cannot be negative")
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.large_corpus_threshold <= 0:
            raise ValueError("large_corpus_threshold must be positive")
        if self.recent_hours <= 0:
            raise ValueError("recent_hours must be positive")
        if self.subprocess_timeout <= 0:
            raise ValueError("subprocess_timeout must be positive")
        if self.max_cached_files <= 0:
            raise ValueError("max_cached_files must be positive")

    def get_recent_window_seconds(self) -> float:
        """Get the recency window in seconds"""
        return self.recent_hours * 3600

    def __repr__(self) -> str:
        return (
            f"SearchConfig("
            f"index_cache_seconds={self.index_cache_seconds}, "
            f"batch_size={self.batch_size}, "
            f"large_corpus_threshold={self.large_corpus_threshold}, "
            f"recent_hours={self.recent_hours}, "
            f"subprocess_timeout={self.subprocess_timeout}, "
            f"max_cached_files={self.max_cached_files}, "
            f"ignore_file={self.ignore_file!r}, "
            f"root={self.root!r})"
        )


# Global configuration instance
_config: Optional[SearchConfig] = None


def get_search_config() -> SearchConfig:
    """Get global search configuration instance"""
    global _config
    if _config is None:
        _config = SearchConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Code Search Configuration Environment Variables:

- CODE_SEARCH_INDEX_CACHE_SECONDS: Index freshness window in seconds (default: 60)
- CODE_SEARCH_BATCH_SIZE: Files parsed concurrently per batch (default: 10)
- CODE_SEARCH_LARGE_CORPUS_THRESHOLD: Distinct symbol names above which the fast
  fuzzy matcher is used (default: 20000)
- CODE_SEARCH_RECENT_HOURS: Files modified within this window rank first in text search (default: 24)
- CODE_SEARCH_SUBPROCESS_TIMEOUT: Timeout for git/rg/grep in seconds (default: 30)
- CODE_SEARCH_MAX_CACHED_FILES: File content cache capacity (default: derived from system memory)
- CODE_SEARCH_IGNORE_FILE: Tool-specific ignore file read next to .gitignore (default: .snowignore)
- CODE_SEARCH_LOG_LEVEL: Server log level (default: ERROR)
- CODE_SEARCH_ROOT: Project root served by the MCP server (default: current directory)

Example usage:
    export CODE_SEARCH_INDEX_CACHE_SECONDS=120
    export CODE_SEARCH_BATCH_SIZE=20
"""
