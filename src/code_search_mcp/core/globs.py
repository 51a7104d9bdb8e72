"""
Glob helpers for text search file filters.
"""

import re
from functools import lru_cache
from typing import List, Pattern

_BRACE_RE = re.compile(r"^(.*?)\{([^{}]+)\}(.*)$")


def expand_glob_braces(glob: str) -> List[str]:
    """
    Expand a ``{a,b,c}`` group into one pattern per alternative.

    ``"src/**/*.{ts,tsx}"`` -> ``["src/**/*.ts", "src/**/*.tsx"]``; a pattern
    without braces expands to itself.
    """
    match = _BRACE_RE.match(glob)
    if not match:
        return [glob]

    prefix, alternatives, suffix = match.groups()
    return [f"{prefix}{alternative}{suffix}" for alternative in alternatives.split(",")]


def _translate(glob: str) -> str:
    parts: List[str] = []
    i = 0
    n = len(glob)

    while i < n:
        char = glob[i]
        if char == "*":
            if glob.startswith("**/", i):
                parts.append("(?:.*/)?")
                i += 3
                continue
            if glob.startswith("**", i):
                parts.append(".*")
                i += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            end = glob.find("]", i + 1)
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = glob[i + 1:end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                i = end + 1
                continue
        elif char == "{":
            end = glob.find("}", i + 1)
            if end == -1:
                parts.append(re.escape(char))
            else:
                alternatives = glob[i + 1:end].split(",")
                parts.append("(?:" + "|".join(_translate(alt) for alt in alternatives) + ")")
                i = end + 1
                continue
        else:
            parts.append(re.escape(char))
        i += 1

    return "".join(parts)


@lru_cache(maxsize=512)
def glob_to_regex(glob: str) -> Pattern:
    """
    Compile a glob into a case-insensitive regex matched against relative paths.

    Supports ``*``, ``**``, ``?``, ``[abc]`` and ``{js,ts}``. The pattern must
    match a whole path suffix starting at a ``/`` boundary, so ``*.ts`` matches
    ``src/a.ts`` but not ``src/a.tsx``.
    """
    return re.compile(r"(?:^|/)" + _translate(glob) + r"$", re.IGNORECASE)


def matches_any_glob(rel_path: str, globs: List[str]) -> bool:
    """True when the relative path matches at least one glob"""
    normalized = rel_path.replace("\\", "/")
    return any(glob_to_regex(glob).search(normalized) for glob in globs)
