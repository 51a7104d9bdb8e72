"""
Search Strategies for Code Search MCP

This package defines the text search tiers. Each tier wraps one way of
scanning file contents (git grep, rg/grep, pure Python) behind the same
interface so the coordinator can fall back from one to the next.
"""

import logging
import os
import re
import shutil
import time
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, List, Optional, Pattern

from ..core.decorators import normalize_path
from ..core.globs import matches_any_glob
from ..core.models import TextMatch

logger = logging.getLogger(__name__)

_GREP_LINE_RE = re.compile(r"^(.+?):(\d+):(.*)$")


def is_command_available(command: str) -> bool:
    """Check whether a program is on the PATH"""
    return shutil.which(command) is not None


@lru_cache(maxsize=256)
def compile_search_pattern(pattern: str, is_regex: bool) -> Pattern:
    """
    Compile a user pattern as a case-insensitive matcher.

    Raises:
        re.error: The regex pattern is invalid
    """
    source = pattern if is_regex else re.escape(pattern)
    return re.compile(source, re.IGNORECASE)


def match_column(line: str, pattern: str, is_regex: bool) -> int:
    """1-based column of the first match in the line; 1 when unknown"""
    try:
        match = compile_search_pattern(pattern, is_regex).search(line)
    except re.error:
        return 1
    return match.start() + 1 if match else 1


def parse_grep_output(
    output: str,
    base_path: str,
    pattern: str,
    is_regex: bool,
) -> List[TextMatch]:
    """
    Parse ``path:line:content`` output from git grep, rg or grep.

    Paths are resolved against the base path and reported relative to it.
    Lines that do not follow the format are skipped.
    """
    results: List[TextMatch] = []
    if not output:
        return results

    for raw_line in output.splitlines():
        if not raw_line.strip():
            continue

        match = _GREP_LINE_RE.match(raw_line)
        if not match:
            continue

        raw_path, line_number, content = match.groups()
        absolute_path = os.path.normpath(os.path.join(base_path, raw_path))
        rel_path = os.path.relpath(absolute_path, base_path)
        if rel_path == ".":
            rel_path = os.path.basename(absolute_path)

        results.append(TextMatch(
            file_path=normalize_path(rel_path),
            line=int(line_number),
            column=match_column(content, pattern, is_regex),
            content=content.strip(),
        ))

    return results


def filter_by_globs(results: List[TextMatch], file_globs: Optional[List[str]]) -> List[TextMatch]:
    """Keep matches whose relative path matches one of the globs"""
    if not file_globs:
        return results
    return [result for result in results if matches_any_glob(result.file_path, file_globs)]


def sort_results_by_recency(
    results: List[TextMatch],
    base_path: str,
    recent_window: float = 24 * 3600,
    now: Optional[float] = None,
) -> List[TextMatch]:
    """
    Order matches so recently modified files come first.

    Files modified inside the window sort before older files. Each group is
    ordered newest first; matches from equally old files keep the order the
    search tier produced. A file that cannot be stat'ed counts as oldest.
    """
    if not results:
        return results

    now = time.time() if now is None else now
    mod_times: Dict[str, float] = {}

    for result in results:
        if result.file_path in mod_times:
            continue
        try:
            mod_times[result.file_path] = os.stat(os.path.join(base_path, result.file_path)).st_mtime
        except OSError:
            mod_times[result.file_path] = 0.0

    def sort_key(result: TextMatch):
        mtime = mod_times[result.file_path]
        if now - mtime < recent_window:
            return (0, -mtime)
        return (1, -mtime)

    # sorted() is stable, ties keep tier order
    return sorted(results, key=sort_key)


class SearchStrategy(ABC):
    """
    Abstract base class for a text search tier.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of the search tool (e.g., 'git-grep', 'rg')."""

    @abstractmethod
    def is_available(self, base_path: str) -> bool:
        """
        Check if the search tool can be used for this root.

        Returns:
            True if the tool is available, False otherwise.
        """

    @abstractmethod
    def search(
        self,
        pattern: str,
        base_path: str,
        file_globs: Optional[List[str]] = None,
        is_regex: bool = False,
        max_results: int = 100,
    ) -> List[TextMatch]:
        """
        Execute a search using the specific strategy.

        Args:
            pattern: The search pattern
            base_path: Root directory to search
            file_globs: Brace-expanded glob filters, or None for all files
            is_regex: Treat the pattern as a regular expression
            max_results: Maximum number of matches

        Returns:
            Matches in the tool's own order

        Raises:
            SearchToolError: The tool failed; the caller moves to the next tier
        """
