"""Target file resolution for the four ignore-file modes."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Union

from . import git
from .core import logger, user_config_dir

EXCLUDES_KEY = "core.excludesFile"


@dataclasses.dataclass(frozen=True)
class ExplicitFile:
    """A file named on the command line, relative to the working directory."""

    name: str


@dataclasses.dataclass(frozen=True)
class Global:
    """The user-wide excludes file (``core.excludesFile``)."""


@dataclasses.dataclass(frozen=True)
class Internal:
    """The repository's private ``info/exclude`` file."""


@dataclasses.dataclass(frozen=True)
class Root:
    """The ``.gitignore`` at the top of the working tree."""


TargetMode = Union[ExplicitFile, Global, Internal, Root]


def global_ignore_file(cwd: Path | None = None, git_exe: str = "git") -> Path:
    """Path named by ``core.excludesFile``, else ``<config dir>/git/ignore``."""
    configured = git.config_path(EXCLUDES_KEY, cwd=cwd, git=git_exe)
    if configured is not None:
        return configured

    directory = user_config_dir() / "git"
    logger.debug(f"{EXCLUDES_KEY} not set; falling back to {directory / 'ignore'}")
    directory.mkdir(parents=True, exist_ok=True)
    return directory / "ignore"


def internal_ignore_file(cwd: Path | None = None, git_exe: str = "git") -> Path:
    directory = git.git_dir(cwd=cwd, git=git_exe) / "info"
    directory.mkdir(parents=True, exist_ok=True)
    return directory / "exclude"


def root_ignore_file(cwd: Path | None = None, git_exe: str = "git") -> Path:
    return git.work_tree(cwd=cwd, git=git_exe) / ".gitignore"


def resolve(mode: TargetMode, cwd: Path | None = None, git_exe: str = "git") -> Path:
    """Return the absolute path of the ignore file selected by *mode*.

    Directories leading up to the file may be created; the file itself is
    never touched here.
    """
    if cwd is None:
        cwd = Path.cwd()

    if isinstance(mode, ExplicitFile):
        return cwd / mode.name
    if isinstance(mode, Global):
        return global_ignore_file(cwd, git_exe)
    if isinstance(mode, Internal):
        return internal_ignore_file(cwd, git_exe)
    if isinstance(mode, Root):
        return root_ignore_file(cwd, git_exe)
    raise TypeError(f"Unknown target mode: {mode!r}")
