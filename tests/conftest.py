"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import stat
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from pish.core.bridge import ScriptBridge
from pish.core.config import ShellConfig
from pish.core.executables import ExecutableIndex
from pish.core.history import HistoryStore
from pish.core.runtime import ScriptRuntime
from pish.core.session import ShellSession
from pish.core.themes import DEFAULT_THEME


def _write_executable(directory: Path, name: str, body: str = "exit 0") -> Path:
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch):
    """Point HOME at a temp dir and clear PISH_* overrides for every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("PISH_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def make_executable():
    """Factory creating an executable shell script in a directory."""
    return _write_executable


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding a few fake executables."""
    directory = tmp_path / "bin"
    directory.mkdir()
    _write_executable(directory, "git")
    _write_executable(directory, "grep")
    _write_executable(directory, "ls")
    return directory


@pytest.fixture
def config(tmp_path: Path) -> ShellConfig:
    return ShellConfig(
        startup_file=str(tmp_path / "pishrc.py"),
        history_file=str(tmp_path / "history"),
    )


@pytest.fixture
def session(config: ShellConfig, bin_dir: Path) -> ShellSession:
    return ShellSession(
        config=config,
        history=HistoryStore(path=config.history_path),
        executables=ExecutableIndex.build(str(bin_dir)),
    )


@pytest.fixture
def runtime() -> ScriptRuntime:
    return ScriptRuntime()


@pytest.fixture
def console() -> Console:
    return Console(file=StringIO(), theme=DEFAULT_THEME, width=120, soft_wrap=True)


@pytest.fixture
def error_console() -> Console:
    return Console(file=StringIO(), theme=DEFAULT_THEME, width=120, soft_wrap=True)


@pytest.fixture
def bridge(session, runtime, console, error_console) -> ScriptBridge:
    bridge = ScriptBridge(session, runtime, console=console, error_console=error_console)
    bridge.install()
    return bridge
