"""Core helpers: logger, error types, platform paths, settings, atomic write."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import os
import platform
import shutil
import tempfile
from pathlib import Path
from typing import Any

import yaml
from colorama import Fore, Style


# ── Logging ──────────────────────────────────────────────────────────


def _level_color(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return Fore.RED
    if levelno >= logging.WARNING:
        return Fore.YELLOW
    return Fore.CYAN


class ToolFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _level_color(record.levelno)
        message = record.getMessage()
        return f"{color}[{record.levelname.lower()}]{Style.RESET_ALL} {message}"


logger = logging.getLogger("git_ignore")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(ToolFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


# ── Errors ───────────────────────────────────────────────────────────


class GitIgnoreError(Exception):
    """Base class for errors reported by git-ignore."""


class GitError(GitIgnoreError):
    """A git invocation failed.  The message is git's own stderr."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class BareRepositoryError(GitError):
    """The enclosing repository has no working tree."""


class ConfigDirError(GitIgnoreError):
    """No user configuration directory could be determined."""


# ── Platform ─────────────────────────────────────────────────────────


def user_config_dir() -> Path:
    """Return the platform's per-user configuration directory.

    Windows uses ``%APPDATA%``, macOS ``~/Library/Application Support``,
    everything else ``$XDG_CONFIG_HOME`` (when absolute) or ``~/.config``.
    """
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigDirError("Could not find APPDATA")
        return Path(appdata)

    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigDirError("Could not find XDG_CONFIG_HOME") from exc

    if system == "Darwin":
        return home / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config"


# ── Settings ─────────────────────────────────────────────────────────

CONFIG_ENV = "GIT_IGNORE_CONFIG"


@dataclasses.dataclass(frozen=True)
class Settings:
    """User settings read from ``git-ignore/config.yaml``."""

    default_file: str = ".gitignore"
    git: str = "git"


def config_path() -> Path:
    """Location of the settings file (``$GIT_IGNORE_CONFIG`` wins)."""
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override)
    return user_config_dir() / "git-ignore" / "config.yaml"


def load_config(path: Path | None = None) -> Settings:
    """Load settings from *path*, falling back to defaults when absent."""
    if path is None:
        path = config_path()
    if not path.exists():
        return Settings()
    data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise TypeError("config.yaml must contain a top-level mapping.")

    known = {f.name for f in dataclasses.fields(Settings)}
    values = {k: str(v) for k, v in data.items() if k in known and v is not None}
    logger.debug(f"Loaded settings from {path}: {values}")
    return Settings(**values)


# ── Filesystem ───────────────────────────────────────────────────────


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace *path* with *content* via a sibling temp file and ``os.replace``.

    Readers see either the old file or the complete new one.  If anything
    fails before the rename, the original file is left untouched.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content.encode(encoding))
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise

