"""
Reference finder - word-boundary scan over every indexable source file.

Runs its own walk and applies only the built-in directory deny-list; custom
ignore-file patterns do not affect reference results.
"""

import logging
import os
import re
from functools import lru_cache
from typing import Iterator, List, Optional, Pattern

from .decorators import normalize_path, safe_file_operation
from .exclusions import is_builtin_excluded
from .languages import detect_language
from .models import CodeReference, ReferenceType
from .symbols import get_context, split_lines

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def _word_pattern(symbol_name: str) -> Pattern:
    return re.compile(rf"\b{re.escape(symbol_name)}\b")


@lru_cache(maxsize=256)
def _definition_pattern(symbol_name: str) -> Pattern:
    return re.compile(rf"(?:function|class|const|let|var)\s+{re.escape(symbol_name)}")


def classify_reference(line: str, symbol_name: str) -> ReferenceType:
    """
    Classify one line containing a reference.

    First matching rule wins: import, definition keyword, type annotation, usage.
    """
    if "import" in line and symbol_name in line:
        return ReferenceType.IMPORT
    if _definition_pattern(symbol_name).search(line):
        return ReferenceType.DEFINITION
    if ":" in line:
        return ReferenceType.TYPE
    return ReferenceType.USAGE


class ReferenceFinder:
    """Find every occurrence of a symbol name under a root directory."""

    def __init__(self, base_path: str):
        self.base_path = base_path

    def find(self, symbol_name: str, max_results: int = 100) -> List[CodeReference]:
        """
        Find references to a symbol.

        Args:
            symbol_name: Exact symbol name, matched on word boundaries
            max_results: Stop after this many references

        Returns:
            References in walk order
        """
        references: List[CodeReference] = []
        if not symbol_name or max_results <= 0:
            return references

        pattern = _word_pattern(symbol_name)

        for file_path in self._walk():
            content = self._read(file_path)
            if content is None:
                continue

            rel_path = normalize_path(os.path.relpath(file_path, self.base_path))
            lines = split_lines(content)

            for index, line in enumerate(lines):
                matches = list(pattern.finditer(line))
                if not matches:
                    continue

                reference_type = classify_reference(line, symbol_name)
                context = get_context(lines, index, 1)

                for match in matches:
                    references.append(CodeReference(
                        symbol=symbol_name,
                        file_path=rel_path,
                        line=index + 1,
                        column=match.start() + 1,
                        context=context,
                        reference_type=reference_type,
                    ))
                    if len(references) >= max_results:
                        return references

        logger.debug(f"Found {len(references)} references to {symbol_name}")
        return references

    def _walk(self) -> Iterator[str]:
        for root, dirs, files in os.walk(self.base_path, onerror=self._on_walk_error):
            dirs[:] = sorted(d for d in dirs if not is_builtin_excluded(d))
            for file_name in sorted(files):
                if detect_language(file_name):
                    yield os.path.join(root, file_name)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory: {error}")

    @staticmethod
    @safe_file_operation
    def _read(file_path: str) -> Optional[str]:
        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
