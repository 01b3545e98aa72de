"""
Filename pattern matching — the ``*`` / ``?`` subset of glob.

Patterns are compiled to an anchored regex: ``*`` matches any run of
characters (including none), ``?`` exactly one, and every other
character only itself. Matching is case-sensitive.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Patterns that accept any filename without compiling anything
_MATCH_ALL = frozenset({"*", "*.*"})


def has_wildcard(text: str) -> bool:
    """Whether a string contains a glob wildcard character."""
    return "*" in text or "?" in text


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a wildcard pattern into a compiled, fully-anchored regex."""
    parts: list[str] = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def matches(file_name: str, pattern: str) -> bool:
    """Check whether a filename matches a wildcard pattern.

    Args:
        file_name: Base name of the file (no directory part).
        pattern: Pattern using ``*`` and ``?`` wildcards.

    Returns:
        True if the whole filename matches.
    """
    if pattern in _MATCH_ALL:
        return True
    return compile_pattern(pattern).fullmatch(file_name) is not None
