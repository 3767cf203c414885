"""Queries against the git executable: config lookup and repository discovery."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .core import BareRepositoryError, GitError, logger

# Scopes consulted for core.excludesFile, highest precedence first.
CONFIG_SCOPES = ("--global", "--system")

# ``git config --get`` exits with 1 when the key is not set.
_CONFIG_KEY_MISSING = 1


def _run_git(args: list[str], cwd: Path | None = None, git: str = "git") -> subprocess.CompletedProcess[str]:
    cmd = [git, *args]
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        return subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise GitError(f"git executable not found: {git}") from exc


def _check(result: subprocess.CompletedProcess[str]) -> str:
    if result.returncode != 0:
        message = result.stderr.strip() or f"git exited with status {result.returncode}"
        raise GitError(message, result.returncode)
    return result.stdout.strip()


def native_path(raw: str) -> Path:
    """Rebuild *raw* with the platform's separators.

    git reports paths with forward slashes on every platform.
    """
    return Path(os.path.normpath(raw))


def config_path(key: str, cwd: Path | None = None, git: str = "git") -> Path | None:
    """Look up a path-valued config *key* in the user and system scopes.

    Returns ``None`` when no scope sets the key.  Any other failure of
    ``git config`` raises :class:`GitError`.
    """
    for scope in CONFIG_SCOPES:
        result = _run_git(["config", scope, "--path", "--get", key], cwd=cwd, git=git)
        if result.returncode == _CONFIG_KEY_MISSING:
            logger.debug(f"{key} not set in {scope.lstrip('-')} config")
            continue
        value = _check(result)
        return Path(value)
    return None


def git_dir(cwd: Path | None = None, git: str = "git") -> Path:
    """Absolute path of the enclosing repository's metadata directory."""
    out = _check(_run_git(["rev-parse", "--absolute-git-dir"], cwd=cwd, git=git))
    return native_path(out)


def work_tree(cwd: Path | None = None, git: str = "git") -> Path:
    """Top-level working directory of the enclosing repository.

    Raises :class:`BareRepositoryError` when the repository is bare.
    """
    bare = _check(_run_git(["rev-parse", "--is-bare-repository"], cwd=cwd, git=git))
    if bare == "true":
        raise BareRepositoryError("Repository is bare")

    inside = _check(_run_git(["rev-parse", "--is-inside-git-dir"], cwd=cwd, git=git))
    if inside == "true":
        return _work_tree_from_git_dir(cwd=cwd, git=git)

    out = _check(_run_git(["rev-parse", "--show-toplevel"], cwd=cwd, git=git))
    return native_path(out)


def _work_tree_from_git_dir(cwd: Path | None = None, git: str = "git") -> Path:
    # --show-toplevel refuses to run from inside the metadata directory.
    meta = git_dir(cwd=cwd, git=git)
    result = _run_git(["config", "--get", "core.worktree"], cwd=cwd, git=git)
    if result.returncode == _CONFIG_KEY_MISSING:
        return meta.parent
    configured = Path(_check(result))
    # A relative core.worktree is relative to the metadata directory.
    return native_path(str(meta / configured))
