"""
Symbol parser - regex based symbol extraction.

One pass over the lines of a file; every language pattern is tried on every
line, so a single line can produce several symbols (e.g. an exported function
is both a ``function`` and an ``export``).
"""

import os
from typing import List

from .decorators import normalize_path
from .languages import LANGUAGE_CONFIG, detect_language
from .models import CodeSymbol, SymbolType

# Lines of context captured around each symbol kind
_CONTEXT_SIZES = {
    SymbolType.FUNCTION: 2,
    SymbolType.CLASS: 2,
    SymbolType.INTERFACE: 2,
    SymbolType.TYPE: 2,
    SymbolType.ENUM: 2,
    SymbolType.VARIABLE: 1,
}

_SIGNATURE_LINES = 3


def split_lines(content: str) -> List[str]:
    """Split on LF only so line numbers agree with grep-style tools"""
    return [line.rstrip("\r") for line in content.split("\n")]


def get_context(lines: List[str], line_index: int, context_size: int) -> str:
    """
    Get the lines around a specific line.

    Args:
        lines: All lines in the file
        line_index: Target line index (0-based)
        context_size: Number of lines before and after

    Returns:
        Context string, trimmed
    """
    start = max(0, line_index - context_size)
    end = min(len(lines), line_index + context_size + 1)
    return "\n".join(lines[start:end]).strip()


def parse_file_symbols(file_path: str, content: str, base_path: str) -> List[CodeSymbol]:
    """
    Extract code symbols from file content.

    Args:
        file_path: Absolute path of the file (language is taken from its extension)
        content: Decoded file content
        base_path: Index root, symbol paths are made relative to it

    Returns:
        Symbols in line order; empty for unsupported languages
    """
    language = detect_language(file_path)
    if not language:
        return []

    config = LANGUAGE_CONFIG[language]
    rel_path = normalize_path(os.path.relpath(file_path, base_path))
    lines = split_lines(content)
    symbols: List[CodeSymbol] = []

    for index, line in enumerate(lines):
        if not line:
            continue

        for symbol_type, pattern in config.symbol_patterns.items():
            match = pattern.search(line)
            if not match:
                continue

            group = next((i for i in range(1, len(match.groups()) + 1) if match.group(i)), None)
            if group is None:
                continue

            name = match.group(group).strip()
            if not name:
                continue

            if symbol_type == SymbolType.FUNCTION:
                signature = "\n".join(lines[index:index + _SIGNATURE_LINES]).strip()
            else:
                signature = line.strip()

            context_size = _CONTEXT_SIZES.get(symbol_type)
            context = get_context(lines, index, context_size) if context_size else line.strip()

            symbols.append(CodeSymbol(
                name=name,
                type=symbol_type,
                language=language,
                file_path=rel_path,
                line=index + 1,
                column=match.start(group) + 1,
                context=context,
                signature=signature,
            ))

    return symbols
