"""
Code search tools - tool functions, JSON schemas and the registry.

Every tool returns a JSON-serializable dict. Callers may use the prefixed
names from ``MCP_TOOLS`` (``ace-search_symbols``) and camelCase arguments
(``maxResults``); both are normalized before dispatch.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from .core.decorators import handle_tool_errors
from .core.languages import SUPPORTED_LANGUAGES
from .core.models import SemanticSearchType, SymbolType
from .core.service import get_search_service

TOOL_PREFIX = "ace-"

_SYMBOL_TYPES = [symbol_type.value for symbol_type in SymbolType]
_SEARCH_TYPES = [search_type.value for search_type in SemanticSearchType]
_LANGUAGES = list(SUPPORTED_LANGUAGES)

_LANGUAGE_PROPERTY = {
    "type": "string",
    "enum": _LANGUAGES,
    "description": "Filter by programming language (optional)",
}

MCP_TOOLS: List[Dict[str, Any]] = [
    {
        "name": f"{TOOL_PREFIX}search_symbols",
        "description": (
            "Code Search: Intelligent symbol search across the codebase. Finds functions, classes, "
            "variables, and other code symbols with fuzzy matching. Supports TypeScript, JavaScript, "
            "Python, Go, Rust, Java and C#. Returns file locations with line numbers and context."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": 'Symbol name to search for (fuzzy, e.g. "gfc" matches "getFileContent")',
                },
                "symbolType": {
                    "type": "string",
                    "enum": _SYMBOL_TYPES,
                    "description": "Filter by specific symbol type (optional)",
                },
                "language": _LANGUAGE_PROPERTY,
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of results to return (default: 100)",
                    "default": 100,
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}find_definition",
        "description": (
            "Code Search: Find the definition of a symbol (Go to Definition). Locates where a function, "
            "class, or variable is defined and returns its location, signature and context."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "symbolName": {
                    "type": "string",
                    "description": "Name of the symbol to find definition for",
                },
                "contextFile": {
                    "type": "string",
                    "description": "Current file path, searched first (optional)",
                },
            },
            "required": ["symbolName"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}find_references",
        "description": (
            "Code Search: Find all references to a symbol (Find All References). Categorizes each "
            "reference as definition, usage, import, or type reference."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "symbolName": {
                    "type": "string",
                    "description": "Name of the symbol to find references for",
                },
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of references to return (default: 100)",
                    "default": 100,
                },
            },
            "required": ["symbolName"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}semantic_search",
        "description": (
            "Code Search: Symbol search filtered by search type (definition, usage, implementation, all), "
            "combined with cross-reference analysis."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (symbol name or pattern)",
                },
                "searchType": {
                    "type": "string",
                    "enum": _SEARCH_TYPES,
                    "description": (
                        "definition (declarations), usage (references), "
                        "implementation (functions, methods, classes), all (everything)"
                    ),
                    "default": "all",
                },
                "language": _LANGUAGE_PROPERTY,
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of results to return (default: 50)",
                    "default": 50,
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}file_outline",
        "description": (
            "Code Search: Get the code outline of a file: all functions, classes, variables and other "
            "symbols it defines, with their locations."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "filePath": {
                    "type": "string",
                    "description": "Path to the file (relative to workspace root)",
                },
            },
            "required": ["filePath"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}text_search",
        "description": (
            "Code Search: Text search across the codebase using git grep, ripgrep/grep or a built-in "
            "scanner, whichever is available. Searches literal text or regex with glob filtering; "
            "recently modified files come first."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "pattern": {
                    "type": "string",
                    "description": 'Text pattern or regex (e.g. "TODO:", "import.*from")',
                },
                "fileGlob": {
                    "type": "string",
                    "description": 'Glob filter (e.g. "*.ts", "**/*.{js,ts}", "src/**/*.py")',
                },
                "isRegex": {
                    "type": "boolean",
                    "description": "Whether the pattern is a regular expression (default: false)",
                    "default": False,
                },
                "maxResults": {
                    "type": "number",
                    "description": "Maximum number of results to return (default: 100)",
                    "default": 100,
                },
            },
            "required": ["pattern"],
        },
    },
    {
        "name": f"{TOOL_PREFIX}index_stats",
        "description": (
            "Code Search: Statistics about the code index: indexed files, symbols, language breakdown "
            "and cache age."
        ),
        "inputSchema": {"type": "object", "properties": {}},
    },
    {
        "name": f"{TOOL_PREFIX}clear_cache",
        "description": (
            "Code Search: Clear the symbol index cache and force a full re-index on the next search."
        ),
        "inputSchema": {"type": "object", "properties": {}},
    },
]


# ----- Tool functions -----


@handle_tool_errors
def tool_search_symbols(
    query: str,
    symbol_type: Optional[str] = None,
    language: Optional[str] = None,
    max_results: int = 100,
) -> Dict[str, Any]:
    result = get_search_service().search_symbols(query, symbol_type, language, int(max_results))
    return result.to_dict()


@handle_tool_errors
def tool_find_definition(symbol_name: str, context_file: Optional[str] = None) -> Dict[str, Any]:
    symbol = get_search_service().find_definition(symbol_name, context_file)
    return {
        "symbol_name": symbol_name,
        "found": symbol is not None,
        "definition": symbol.to_dict() if symbol else None,
    }


@handle_tool_errors
def tool_find_references(symbol_name: str, max_results: int = 100) -> Dict[str, Any]:
    references = get_search_service().find_references(symbol_name, int(max_results))
    return {
        "symbol_name": symbol_name,
        "references": [reference.to_dict() for reference in references],
        "total_count": len(references),
    }


@handle_tool_errors
def tool_semantic_search(
    query: str,
    search_type: str = "all",
    language: Optional[str] = None,
    max_results: int = 50,
) -> Dict[str, Any]:
    result = get_search_service().semantic_search(query, search_type, language, int(max_results))
    return result.to_dict()


@handle_tool_errors
def tool_file_outline(file_path: str) -> Dict[str, Any]:
    symbols = get_search_service().get_file_outline(file_path)
    return {
        "file_path": file_path,
        "symbols": [symbol.to_dict() for symbol in symbols],
        "total_count": len(symbols),
    }


@handle_tool_errors
def tool_text_search(
    pattern: str,
    file_glob: Optional[str] = None,
    is_regex: bool = False,
    max_results: int = 100,
) -> Dict[str, Any]:
    matches = get_search_service().text_search(pattern, file_glob, bool(is_regex), int(max_results))
    return {
        "pattern": pattern,
        "matches": [match.to_dict() for match in matches],
        "total_count": len(matches),
    }


@handle_tool_errors
def tool_index_stats() -> Dict[str, Any]:
    return get_search_service().get_index_stats().to_dict()


@handle_tool_errors
def tool_clear_cache() -> Dict[str, Any]:
    get_search_service().clear_cache()
    return {"message": "Code search cache cleared"}


# ----- Registry -----


def get_tool_registry() -> Dict[str, Callable[..., Dict[str, Any]]]:
    """Tool name -> tool function"""
    return {
        "search_symbols": tool_search_symbols,
        "find_definition": tool_find_definition,
        "find_references": tool_find_references,
        "semantic_search": tool_semantic_search,
        "file_outline": tool_file_outline,
        "text_search": tool_text_search,
        "index_stats": tool_index_stats,
        "clear_cache": tool_clear_cache,
    }


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake_case(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def execute_tool(tool_name: str, **params) -> Dict[str, Any]:
    """
    Single entry point for every tool.

    Accepts prefixed or bare tool names and camelCase or snake_case arguments.
    """
    name = tool_name[len(TOOL_PREFIX):] if tool_name.startswith(TOOL_PREFIX) else tool_name
    tool_func = get_tool_registry().get(name)

    if not tool_func:
        return {"success": False, "error": f"Unknown tool: {tool_name}"}

    kwargs = {_to_snake_case(key): value for key, value in params.items()}
    return tool_func(**kwargs)
