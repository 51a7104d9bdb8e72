"""
Subprocess wrapper for external search tools.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List

from ..core.errors import SearchToolError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


def run_command(args: List[str], cwd: str, timeout: float = 30) -> CommandResult:
    """
    Run a command and buffer its output.

    Args:
        args: Program and arguments, no shell involved
        cwd: Working directory
        timeout: Seconds before the command is killed

    Returns:
        Exit code with decoded stdout and stderr

    Raises:
        SearchToolError: The program could not be started or timed out
    """
    logger.debug(f"Running {' '.join(args)} in {cwd}")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="ignore",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise SearchToolError(f"{args[0]} timed out after {timeout}s") from e
    except OSError as e:
        raise SearchToolError(f"Failed to run {args[0]}: {e}") from e

    return CommandResult(returncode=result.returncode, stdout=result.stdout or "", stderr=result.stderr or "")
