"""
Error handling decorators and path helpers.

Per-file failures are absorbed where they happen; tool entry points turn any
remaining exception into a uniform error response.
"""

import logging
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, cast

logger = logging.getLogger(__name__)


def safe_file_operation(func: Callable) -> Callable:
    """
    File operation error handler - fail silently.

    A failure on one file must not interrupt the whole walk, so the wrapped
    function returns None instead of raising.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OSError, ValueError, UnicodeError) as e:
            logger.debug(f"{func.__name__} failed: {e}")
            return None

    return wrapper


def handle_tool_errors(func: Callable) -> Callable:
    """
    Uniform error handling for tool entry points.

    Successful dict results get a ``success`` flag; exceptions become
    ``{"success": False, "error": ...}``.
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except Exception as e:
            logger.warning(f"Tool {func.__name__} failed: {e}")
            return {"success": False, "error": str(e), "function": func.__name__}

    return wrapper


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of platform"""
    return str(path).replace("\\", "/")


def get_file_extension(file_path: str) -> str:
    """Get normalized file extension"""
    return Path(file_path).suffix.lower()
