"""
Directory exclusion - built-in deny-list plus ignore-file patterns.
"""

import logging
import os
from typing import List, Optional

import pathspec

logger = logging.getLogger(__name__)

# Directories never worth descending into
DEFAULT_EXCLUDED_DIRS = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    "__pycache__",
    "target",
    ".next",
    ".nuxt",
    "coverage",
})

GITIGNORE_FILE = ".gitignore"


def is_builtin_excluded(dir_name: str) -> bool:
    """Built-in deny-list check: known output directories and hidden directories"""
    return dir_name in DEFAULT_EXCLUDED_DIRS or dir_name.startswith(".")

def read_ignore_file(file_path: str) -> List[str]:
    """
    Read patterns from an ignore-style file.

    Blank lines and comments are skipped; everything else, negations and
    anchors included, is kept as written. A missing or unreadable file yields
    no patterns.
    """
    patterns: List[str] = []
    try:
        with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
            for raw_line in f:
                line = raw_line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)
    except OSError as e:
        logger.debug(f"Ignore file not loaded {file_path}: {e}")
    return patterns


class ExclusionLoader:
    """Loads custom exclusion patterns once per engine instance."""

    def __init__(self, base_path: str, ignore_file: str = ".snowignore"):
        self.base_path = base_path
        self.ignore_file = ignore_file
        self._patterns: Optional[List[str]] = None
        self._spec: Optional[pathspec.GitIgnoreSpec] = None

    @property
    def loaded(self) -> bool:
        return self._patterns is not None

    def load(self) -> List[str]:
        """
        Read ``.gitignore`` and the tool-specific ignore file at the root.

        Memoized: the files are read at most once per instance.
        """
        if self._patterns is None:
            patterns: List[str] = []
            for name in (GITIGNORE_FILE, self.ignore_file):
                patterns.extend(read_ignore_file(os.path.join(self.base_path, name)))
            self._patterns = patterns
            self._spec = pathspec.GitIgnoreSpec.from_lines(patterns)
            logger.debug(f"Loaded {len(patterns)} custom exclusion patterns from {self.base_path}")
        return self._patterns

    @property
    def spec(self) -> pathspec.GitIgnoreSpec:
        """Compiled gitignore matcher for the loaded patterns"""
        self.load()
        return self._spec

    def should_exclude_directory(self, dir_name: str, dir_path: str) -> bool:
        """
        Check whether the walker should skip a directory.

        Args:
            dir_name: Directory name
            dir_path: Absolute directory path

        Returns:
            True for deny-listed, hidden or ignore-file matched directories
        """
        if is_builtin_excluded(dir_name):
            return True

        rel_path = os.path.relpath(dir_path, self.base_path).replace("\\", "/")
        return self.spec.match_file(rel_path + "/")
