"""
Core module - index state, symbol extraction and the search service.

The service lives in ``core.service``; only the data model is re-exported
here so the search package can import core helpers without a cycle.
"""

from .errors import CodeSearchError, FileOutlineError, SearchToolError
from .models import (CodeReference, CodeSymbol, IndexStats, ReferenceType,
                     SemanticSearchType, SymbolSearchResult, SymbolType,
                     TextMatch)

__all__ = [
    "CodeSymbol",
    "CodeReference",
    "TextMatch",
    "SymbolSearchResult",
    "IndexStats",
    "SymbolType",
    "ReferenceType",
    "SemanticSearchType",
    "CodeSearchError",
    "SearchToolError",
    "FileOutlineError",
]
