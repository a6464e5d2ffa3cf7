"""Tests for logging configuration and console themes."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from pish.core.logging_config import JsonFormatter, configure_logging
from pish.core.themes import DEFAULT_THEME, MONO_THEME, get_theme, make_console


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_default_level_is_warning(self):
        configure_logging(force=True)

        assert logging.getLogger().level == logging.WARNING

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("PISH_LOG_LEVEL", "debug")

        configure_logging(force=True)

        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("PISH_LOG_LEVEL", "DEBUG")

        configure_logging(level="ERROR", force=True)

        assert logging.getLogger().level == logging.ERROR

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "pish.log"

        configure_logging(level="INFO", file_path=str(log_file), force=True)
        logging.getLogger("pish.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "written to file" in log_file.read_text()

    def test_second_call_ignored_without_force(self):
        configure_logging(level="ERROR", force=True)
        configure_logging(level="DEBUG")

        assert logging.getLogger().level == logging.ERROR


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_fields(self):
        record = logging.LogRecord("pish.core", logging.INFO, __file__, 1, "hello %s", ("x",), None)

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "pish.core"
        assert data["message"] == "hello x"
        assert "extra" not in data

    def test_extra_fields(self):
        record = logging.LogRecord("pish", logging.DEBUG, __file__, 1, "spawn", None, None)
        record.argv = ["ls", "-la"]

        data = json.loads(JsonFormatter().format(record))

        assert data["extra"] == {"argv": ["ls", "-la"]}


class TestThemes:
    """Tests for console themes."""

    def test_lookup(self):
        assert get_theme("mono") is MONO_THEME
        assert get_theme("MONO") is MONO_THEME

    def test_unknown_falls_back(self):
        assert get_theme("neon") is DEFAULT_THEME

    @pytest.mark.parametrize("name", ["default", "mono"])
    def test_every_message_style_defined(self, name):
        console = make_console(name)

        for style in ["prompt", "result", "warning", "error", "hint"]:
            console.get_style(style)
