"""Read, merge and rewrite an ignore file."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .core import atomic_write_text, logger
from .merge import merge


def read_ignore_file(path: Path) -> str:
    """Return the file's text, creating an empty file if it does not exist.

    Line endings are kept as they are on disk so that a CRLF file is seen
    as different from its canonical LF form.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        path.touch()
        return ""


def update_ignore_file(path: Path, patterns: Iterable[str]) -> bool:
    """Merge *patterns* into the ignore file at *path*.

    Returns ``True`` when the file was rewritten, ``False`` when the merged
    text already matched the file.
    """
    old = read_ignore_file(path)

    logger.info(f"Updating {path}...")
    new = merge(old, patterns)

    if new == old:
        logger.info("Nothing to do!")
        return False

    atomic_write_text(path, new)
    logger.info("Done!")
    return True
