"""Shared fixtures for git-ignore tests."""

from __future__ import annotations

import io
import logging
import os
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every user/system config location into a scratch directory.

    Returns the scratch home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_SYSTEM", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_IGNORE_CONFIG", str(home / "git-ignore.yaml"))
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_COMMON_DIR"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_logger_level():
    """main() changes the logger level; restore it around each test."""
    logger = logging.getLogger("git_ignore")
    saved = logger.level
    yield
    logger.setLevel(saved)


@pytest.fixture
def capture_logs():
    """Capture git_ignore logger output into a StringIO buffer.

    The logger has propagate=False and its own StreamHandler bound to the
    original sys.stderr, so capsys/caplog cannot see it.
    """
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("git_ignore")
    logger.addHandler(handler)
    yield buf
    logger.removeHandler(handler)


@pytest.fixture
def git_repo(tmp_path: Path):
    """Factory that runs ``git init`` in a fresh directory under tmp_path.

    Usage::

        repo = git_repo()
        bare = git_repo(bare=True)
    """
    _counter = 0

    def _make(bare: bool = False) -> Path:
        nonlocal _counter
        path = tmp_path / f"repo_{_counter}"
        _counter += 1
        cmd = ["git", "init", "-q"]
        if bare:
            cmd.append("--bare")
        cmd.append(str(path))
        subprocess.run(cmd, check=True, capture_output=True)
        return path

    return _make


@pytest.fixture
def write_global_config(isolated_env: Path):
    """Write the scratch global git config file."""

    def _write(text: str) -> Path:
        path = isolated_env / ".gitconfig"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
