"""Core data structures for the code search engine."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SymbolType(str, Enum):
    """Kind of a code symbol"""

    FUNCTION = "function"
    CLASS = "class"
    METHOD = "method"
    VARIABLE = "variable"
    CONSTANT = "constant"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    IMPORT = "import"
    EXPORT = "export"


class ReferenceType(str, Enum):
    """Kind of a symbol reference"""

    DEFINITION = "definition"
    USAGE = "usage"
    IMPORT = "import"
    TYPE = "type"


class SemanticSearchType(str, Enum):
    """Filter applied by semantic search"""

    DEFINITION = "definition"
    USAGE = "usage"
    IMPLEMENTATION = "implementation"
    ALL = "all"


@dataclass
class CodeSymbol:
    name: str
    type: SymbolType
    language: str
    file_path: str  # relative to the index root
    line: int
    column: int
    context: str = ""
    signature: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class CodeReference:
    symbol: str
    file_path: str
    line: int
    column: int
    context: str
    reference_type: ReferenceType

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reference_type"] = self.reference_type.value
        return data


@dataclass
class TextMatch:
    file_path: str
    line: int
    column: int
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SymbolSearchResult:
    query: str
    symbols: List[CodeSymbol]
    total_results: int
    search_time: float  # milliseconds
    references: List[CodeReference] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "symbols": [symbol.to_dict() for symbol in self.symbols],
            "references": [reference.to_dict() for reference in self.references],
            "total_results": self.total_results,
            "search_time": self.search_time,
        }


@dataclass
class IndexStats:
    total_files: int
    total_symbols: int
    language_breakdown: Dict[str, int]
    cache_age: float  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
