"""
Basic, pure-Python search strategy.
"""

import logging
import os
import re
from typing import Iterator, List, Optional

from ..core.decorators import get_file_extension, normalize_path
from ..core.exclusions import is_builtin_excluded
from ..core.globs import matches_any_glob
from ..core.models import TextMatch
from .base import SearchStrategy, compile_search_pattern

logger = logging.getLogger(__name__)

BINARY_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".svg",
    ".pdf", ".zip", ".tar", ".gz", ".rar", ".7z",
    ".exe", ".dll", ".so", ".dylib",
    ".mp3", ".mp4", ".avi", ".mov",
    ".woff", ".woff2", ".ttf", ".eot",
    ".class", ".jar", ".war", ".o", ".a", ".lib",
})


class BasicSearchStrategy(SearchStrategy):
    """
    A basic, pure-Python search strategy.

    This strategy iterates through files and lines manually. It's the last
    tier, used when neither git nor an external grep tool can serve the search.
    """

    @property
    def name(self) -> str:
        """The name of the search tool."""
        return "basic"

    def is_available(self, base_path: str) -> bool:
        """This basic strategy is always available."""
        return True

    def search(
        self,
        pattern: str,
        base_path: str,
        file_globs: Optional[List[str]] = None,
        is_regex: bool = False,
        max_results: int = 100,
    ) -> List[TextMatch]:
        """
        Execute a case-insensitive, line-by-line search.

        Raises:
            ValueError: The regex pattern does not compile
        """
        try:
            search_regex = compile_search_pattern(pattern, is_regex)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {pattern}, error: {e}")

        results: List[TextMatch] = []
        if max_results <= 0:
            return results

        for file_path in self._walk(base_path):
            rel_path = normalize_path(os.path.relpath(file_path, base_path))
            if file_globs and not matches_any_glob(rel_path, file_globs):
                continue

            try:
                with open(file_path, "r", encoding="utf-8", errors="ignore", newline="") as f:
                    for line_num, line in enumerate(f, 1):
                        content = line.rstrip("\r\n")
                        match = search_regex.search(content)
                        if not match:
                            continue
                        results.append(TextMatch(
                            file_path=rel_path,
                            line=line_num,
                            column=match.start() + 1,
                            content=content.strip(),
                        ))
                        if len(results) >= max_results:
                            return results
            except OSError as e:
                # Unreadable files are skipped
                logger.debug(f"Skipping {file_path}: {e}")
                continue

        return results

    @staticmethod
    def _walk(base_path: str) -> Iterator[str]:
        for root, dirs, files in os.walk(base_path):
            dirs[:] = sorted(d for d in dirs if not is_builtin_excluded(d))
            for file_name in sorted(files):
                if get_file_extension(file_name) in BINARY_EXTENSIONS:
                    continue
                yield os.path.join(root, file_name)
