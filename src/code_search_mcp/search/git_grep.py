"""
Search Strategy for git grep
"""

import logging
import os
from typing import List, Optional

from ..core.errors import SearchToolError
from ..core.models import TextMatch
from .base import SearchStrategy, is_command_available, parse_grep_output
from .process import run_command

logger = logging.getLogger(__name__)


class GitGrepStrategy(SearchStrategy):
    """Search strategy using git's built-in content grep, untracked files included."""

    def __init__(self, timeout: float = 30):
        self.timeout = timeout

    @property
    def name(self) -> str:
        """The name of the search tool."""
        return "git-grep"

    def is_available(self, base_path: str) -> bool:
        """Available inside a repository root when git is installed."""
        return os.path.exists(os.path.join(base_path, ".git")) and is_command_available("git")

    def build_command(self, pattern: str, file_globs: Optional[List[str]], is_regex: bool) -> List[str]:
        cmd = [
            "git",
            "-c",
            "core.quotePath=false",
            "grep",
            "--untracked",
            "-n",
            "-I",
            "--ignore-case",
            "-E" if is_regex else "-F",
            "-e",
            pattern,
        ]
        if file_globs:
            cmd.append("--")
            cmd.extend(file_globs)
        return cmd

    def search(
        self,
        pattern: str,
        base_path: str,
        file_globs: Optional[List[str]] = None,
        is_regex: bool = False,
        max_results: int = 100,
    ) -> List[TextMatch]:
        """
        Execute git grep.

        Exit code 1 means no matches; anything above is a failure.
        """
        result = run_command(self.build_command(pattern, file_globs, is_regex), cwd=base_path, timeout=self.timeout)

        if result.returncode == 0:
            return parse_grep_output(result.stdout, base_path, pattern, is_regex)[:max_results]
        if result.returncode == 1:
            return []
        raise SearchToolError(f"git grep exited with code {result.returncode}: {result.stderr.strip()}")
