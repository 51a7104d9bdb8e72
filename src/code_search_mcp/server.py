"""
Code Search MCP Server

Registers the code search tools on a FastMCP server. Each tool forwards to
the registry in ``tools.py`` so the MCP surface and direct callers share one
implementation.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .config import CONFIG_DOCS, get_search_config
from .core.service import get_search_service
from .tools import execute_tool

mcp = FastMCP("CodeSearch")
logging.basicConfig(level=get_search_config().log_level, stream=sys.stderr)


# ----- Symbol tools -----


@mcp.tool()
def search_symbols(
    query: str,
    symbol_type: Optional[str] = None,
    language: Optional[str] = None,
    max_results: int = 100,
) -> Dict[str, Any]:
    """Fuzzy symbol search - "gfc" finds "getFileContent"."""
    return execute_tool(
        "search_symbols",
        query=query,
        symbol_type=symbol_type,
        language=language,
        max_results=max_results,
    )


@mcp.tool()
def find_definition(symbol_name: str, context_file: Optional[str] = None) -> Dict[str, Any]:
    """Go to definition of a function, class or variable."""
    return execute_tool("find_definition", symbol_name=symbol_name, context_file=context_file)


@mcp.tool()
def find_references(symbol_name: str, max_results: int = 100) -> Dict[str, Any]:
    """Find all references, classified as definition, usage, import or type."""
    return execute_tool("find_references", symbol_name=symbol_name, max_results=max_results)


@mcp.tool()
def semantic_search(
    query: str,
    search_type: str = "all",
    language: Optional[str] = None,
    max_results: int = 50,
) -> Dict[str, Any]:
    """Symbol search plus references, filtered by definition/usage/implementation/all."""
    return execute_tool(
        "semantic_search",
        query=query,
        search_type=search_type,
        language=language,
        max_results=max_results,
    )


@mcp.tool()
def file_outline(file_path: str) -> Dict[str, Any]:
    """All symbols defined in one file."""
    return execute_tool("file_outline", file_path=file_path)


# ----- Text search -----


@mcp.tool()
def text_search(
    pattern: str,
    file_glob: Optional[str] = None,
    is_regex: bool = False,
    max_results: int = 100,
) -> Dict[str, Any]:
    """Literal or regex search over file contents, recently modified files first."""
    return execute_tool(
        "text_search",
        pattern=pattern,
        file_glob=file_glob,
        is_regex=is_regex,
        max_results=max_results,
    )


# ----- Index management -----


@mcp.tool()
def index_stats() -> Dict[str, Any]:
    """Indexed files, symbols, language breakdown and cache age."""
    return execute_tool("index_stats")


@mcp.tool()
def clear_cache() -> Dict[str, Any]:
    """Drop the symbol index; the next search re-indexes from scratch."""
    return execute_tool("clear_cache")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Code Search MCP server (stdio)",
        epilog=CONFIG_DOCS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--root", type=str, help="Project root to serve (overrides CODE_SEARCH_ROOT)")
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    if args.root:
        get_search_service(args.root)
    mcp.run()


if __name__ == "__main__":
    main()
