"""Error types raised by the code search engine."""


class CodeSearchError(Exception):
    """Base class for code search errors"""

    pass


class SearchToolError(CodeSearchError):
    """Raised when a text search strategy cannot produce results"""

    pass


class FileOutlineError(CodeSearchError):
    """Raised when a file outline cannot be built"""

    pass
