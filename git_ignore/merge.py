"""Merge new patterns into ignore-file text, producing the canonical form."""

from __future__ import annotations

from collections.abc import Iterable


def _lines(text: str) -> list[str]:
    return text.split("\n")


def _sort_key(line: str) -> tuple[bool, str]:
    # Negations must come after the rules they re-include.
    return (line.startswith("!"), line)


def normalize(lines: Iterable[str]) -> set[str]:
    """Strip every line and drop blanks and ``#`` comments."""
    patterns: set[str] = set()
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.add(line)
    return patterns


def merge(text: str, patterns: Iterable[str]) -> str:
    """Combine the lines of *text* with *patterns*.

    Comments and blank lines are dropped, duplicates removed, positive
    patterns sorted first and ``!`` negations sorted after them.  The result
    ends with a single newline, or is empty.
    """
    lines = set(_lines(text))
    for pattern in patterns:
        lines.update(_lines(pattern))

    ordered = sorted(normalize(lines), key=_sort_key)
    if not ordered:
        return ""
    return "\n".join(ordered) + "\n"
