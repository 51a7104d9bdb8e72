"""
Search Strategy for ripgrep, falling back to system grep
"""

import logging
import re
from typing import List, Optional

from ..core.errors import SearchToolError
from ..core.exclusions import DEFAULT_EXCLUDED_DIRS
from ..core.models import TextMatch
from .base import SearchStrategy, filter_by_globs, is_command_available, parse_grep_output
from .process import run_command

logger = logging.getLogger(__name__)

# grep chatter that does not indicate a failed search
_HARMLESS_STDERR_RE = re.compile(r"Permission denied|grep:.*: Is a directory", re.IGNORECASE)


def meaningful_stderr(stderr: str) -> str:
    """Drop permission and directory warnings from tool stderr"""
    lines = [line for line in stderr.splitlines() if line.strip() and not _HARMLESS_STDERR_RE.search(line)]
    return "\n".join(lines).strip()


class SystemGrepStrategy(SearchStrategy):
    """
    Search strategy using an external line-search utility.

    Prefers 'rg' and falls back to 'grep' when ripgrep is not installed.
    """

    def __init__(self, timeout: float = 30):
        self.timeout = timeout

    @property
    def command(self) -> str:
        return "rg" if is_command_available("rg") else "grep"

    @property
    def name(self) -> str:
        """The name of the search tool."""
        return self.command

    def is_available(self, base_path: str) -> bool:
        """Check if 'rg' or 'grep' is available on the PATH."""
        return is_command_available("rg") or is_command_available("grep")

    def build_command(self, command: str, pattern: str, file_globs: Optional[List[str]], is_regex: bool) -> List[str]:
        excluded = sorted(DEFAULT_EXCLUDED_DIRS)

        if command == "rg":
            cmd = ["rg", "-n", "-i", "--no-heading", "--with-filename", "--color", "never"]
            if not is_regex:
                cmd.append("-F")
            for directory in excluded:
                cmd.extend(["--glob", f"!{directory}/"])
            for glob in file_globs or []:
                cmd.extend(["--glob", glob])
            cmd.extend(["-e", pattern, "."])
            return cmd

        cmd = ["grep", "-r", "-n", "-H", "-I", "-i", "-E" if is_regex else "-F"]
        for directory in excluded:
            cmd.append(f"--exclude-dir={directory}")
        # grep only matches --include against base names
        for glob in file_globs or []:
            cmd.append(f"--include={glob.split('/')[-1]}")
        cmd.extend(["-e", pattern, "."])
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
        Execute rg or grep.

        Exit code 1 means no matches. Above that, a failure is reported only
        when stderr carries something beyond permission warnings.
        """
        command = self.command
        result = run_command(
            self.build_command(command, pattern, file_globs, is_regex), cwd=base_path, timeout=self.timeout
        )

        if result.returncode == 1:
            return []
        if result.returncode > 1:
            stderr = meaningful_stderr(result.stderr)
            if stderr:
                raise SearchToolError(f"{command} exited with code {result.returncode}: {stderr}")
            logger.debug(f"{command} exited with code {result.returncode} without errors, using partial output")
        elif result.returncode != 0:
            raise SearchToolError(f"{command} was terminated by signal {-result.returncode}")

        results = parse_grep_output(result.stdout, base_path, pattern, is_regex)
        if command == "grep":
            results = filter_by_globs(results, file_globs)
        return results[:max_results]
