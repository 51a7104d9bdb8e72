"""
Language table - extension lookup and per-language symbol patterns.

Symbol extraction is lexical: each pattern is tried against every line and the
first non-empty capture group is the symbol name.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Pattern

from .models import SymbolType


@dataclass(frozen=True)
class LanguageConfig:
    name: str
    extensions: List[str]
    symbol_patterns: Dict[SymbolType, Pattern]


_JS_FUNCTION = (
    r"(?:export\s+)?(?:async\s+)?function\s+(\w+)"
    r"|(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?\([^)]*\)\s*=>"
)
_JS_VARIABLE = r"(?:export\s+)?(?:const|let|var)\s+(\w+)\s*="
_JS_IMPORT = r"""import\s+(?:{[^}]+}|\w+)\s+from\s+['"]([^'"]+)['"]"""


def _compile(patterns: Dict[SymbolType, str]) -> Dict[SymbolType, Pattern]:
    return {symbol_type: re.compile(pattern) for symbol_type, pattern in patterns.items()}


# Pattern order is the order symbols are emitted for a single line
LANGUAGE_CONFIG: Dict[str, LanguageConfig] = {
    "typescript": LanguageConfig(
        name="typescript",
        extensions=[".ts", ".tsx"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: _JS_FUNCTION,
            SymbolType.CLASS: r"(?:export\s+)?(?:abstract\s+)?class\s+(\w+)",
            SymbolType.INTERFACE: r"(?:export\s+)?(?:declare\s+)?interface\s+(\w+)",
            SymbolType.TYPE: r"(?:export\s+)?type\s+(\w+)\s*(?:<[^>]*>)?\s*=",
            SymbolType.ENUM: r"(?:export\s+)?(?:const\s+)?enum\s+(\w+)",
            SymbolType.VARIABLE: _JS_VARIABLE,
            SymbolType.IMPORT: _JS_IMPORT,
            SymbolType.EXPORT: (
                r"export\s+(?:default\s+)?"
                r"(?:class|function|const|let|var|interface|type|enum)\s+(\w+)"
            ),
        }),
    ),
    "javascript": LanguageConfig(
        name="javascript",
        extensions=[".js", ".jsx", ".mjs", ".cjs"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: _JS_FUNCTION,
            SymbolType.CLASS: r"(?:export\s+)?class\s+(\w+)",
            SymbolType.VARIABLE: _JS_VARIABLE,
            SymbolType.IMPORT: _JS_IMPORT,
            SymbolType.EXPORT: r"export\s+(?:default\s+)?(?:class|function|const|let|var)\s+(\w+)",
        }),
    ),
    "python": LanguageConfig(
        name="python",
        extensions=[".py", ".pyx", ".pyi"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: r"def\s+(\w+)\s*\(",
            SymbolType.CLASS: r"class\s+(\w+)\s*[(:]",
            SymbolType.VARIABLE: r"(\w+)\s*=\s*[^=]",
            SymbolType.IMPORT: r"(?:from\s+[\w.]+\s+)?import\s+([\w, ]+)",
            # No explicit exports in Python: module-level assignments
            SymbolType.EXPORT: r"^(\w+)\s*=\s*",
        }),
    ),
    "go": LanguageConfig(
        name="go",
        extensions=[".go"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: r"func\s+(?:\([^)]+\)\s+)?(\w+)\s*\(",
            SymbolType.CLASS: r"type\s+(\w+)\s+struct",
            SymbolType.INTERFACE: r"type\s+(\w+)\s+interface",
            SymbolType.VARIABLE: r"(?:var|const)\s+(\w+)\s+",
            SymbolType.IMPORT: r"""import\s+(?:"([^"]+)"|[(]([^)]+)[)])""",
            # Exported identifiers start with a capital letter
            SymbolType.EXPORT: r"^(?:func|type|var|const)\s+([A-Z]\w+)",
        }),
    ),
    "rust": LanguageConfig(
        name="rust",
        extensions=[".rs"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: r"(?:pub\s+)?(?:async\s+)?fn\s+(\w+)\s*[<(]",
            SymbolType.CLASS: r"(?:pub\s+)?struct\s+(\w+)|(?:pub\s+)?enum\s+(\w+)|(?:pub\s+)?trait\s+(\w+)",
            SymbolType.VARIABLE: r"(?:pub\s+)?(?:static|const)\s+(\w+)\s*:",
            SymbolType.IMPORT: r"use\s+([^;]+);",
            SymbolType.EXPORT: r"pub\s+(?:fn|struct|enum|trait|const|static)\s+(\w+)",
        }),
    ),
    "java": LanguageConfig(
        name="java",
        extensions=[".java"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: r"(?:public|private|protected|static|\s)+[\w<>\[\]]+\s+(\w+)\s*\([^)]*\)\s*\{",
            SymbolType.CLASS: r"(?:public|private|protected)?\s*(?:abstract|final)?\s*class\s+(\w+)",
            SymbolType.VARIABLE: r"(?:public|private|protected|static|final|\s)+[\w<>\[\]]+\s+(\w+)\s*[=;]",
            SymbolType.IMPORT: r"import\s+([\w.]+);",
            SymbolType.EXPORT: r"public\s+(?:class|interface|enum)\s+(\w+)",
        }),
    ),
    "csharp": LanguageConfig(
        name="csharp",
        extensions=[".cs"],
        symbol_patterns=_compile({
            SymbolType.FUNCTION: (
                r"(?:public|private|protected|internal|static|\s)+[\w<>\[\]]+\s+(\w+)\s*\([^)]*\)\s*\{"
            ),
            SymbolType.CLASS: (
                r"(?:public|private|protected|internal)?\s*(?:abstract|sealed|static)?\s*class\s+(\w+)"
            ),
            SymbolType.VARIABLE: (
                r"(?:public|private|protected|internal|static|readonly|\s)+[\w<>\[\]]+\s+(\w+)\s*[=;]"
            ),
            SymbolType.IMPORT: r"using\s+([\w.]+);",
            SymbolType.EXPORT: r"public\s+(?:class|interface|enum|struct)\s+(\w+)",
        }),
    ),
}

# Direct lookup table, no if/elif chain
EXTENSION_MAP: Dict[str, str] = {
    extension: config.name
    for config in LANGUAGE_CONFIG.values()
    for extension in config.extensions
}

SUPPORTED_LANGUAGES: List[str] = list(LANGUAGE_CONFIG.keys())


def detect_language(file_path: str) -> Optional[str]:
    """
    Detect programming language from file extension.

    Returns:
        Language name, or None when the extension is not indexed
    """
    return EXTENSION_MAP.get(Path(file_path).suffix.lower())
