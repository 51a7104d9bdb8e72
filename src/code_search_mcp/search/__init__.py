"""
Text search tiers and the coordinator that chains them.
"""

from .base import SearchStrategy, parse_grep_output, sort_results_by_recency
from .basic import BasicSearchStrategy
from .coordinator import SEARCH_STRATEGY_CLASSES, TextSearchCoordinator
from .git_grep import GitGrepStrategy
from .grep import SystemGrepStrategy
from .process import CommandResult, run_command

__all__ = [
    "SearchStrategy",
    "GitGrepStrategy",
    "SystemGrepStrategy",
    "BasicSearchStrategy",
    "SEARCH_STRATEGY_CLASSES",
    "TextSearchCoordinator",
    "CommandResult",
    "run_command",
    "parse_grep_output",
    "sort_results_by_recency",
]
