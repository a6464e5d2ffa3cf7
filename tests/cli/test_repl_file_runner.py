"""Tests for non-interactive script execution."""

from __future__ import annotations

from pathlib import Path

import pytest

from pish.core.config import ShellConfig
from pish.frontends.cli.repl.file_runner import run_from_file


@pytest.fixture
def script(tmp_path: Path) -> Path:
    return tmp_path / "script.py"


class TestRunFromFile:
    """Tests for run_from_file."""

    def test_file_not_found(self, config: ShellConfig, capsys):
        assert run_from_file("nonexistent_file.py", config=config) == 1

        captured = capsys.readouterr()
        assert "Error: File not found: nonexistent_file.py" in captured.err

    def test_success(self, config: ShellConfig, script: Path, tmp_path: Path, bin_dir: Path):
        out = tmp_path / "out.txt"
        script.write_text(
            f"set_env('PISH_RUNNER', 'yes')\n"
            f"open({str(out)!r}, 'w').write(get_env('PISH_RUNNER'))\n"
        )

        assert run_from_file(str(script), config=config, search_path=str(bin_dir)) == 0
        assert out.read_text() == "yes"

    def test_executables_bound(
        self, config: ShellConfig, script: Path, bin_dir: Path, monkeypatch
    ):
        monkeypatch.setenv("PATH", str(bin_dir))
        script.write_text("status = git()\nassert status == 0\n")

        assert run_from_file(str(script), config=config, search_path=str(bin_dir)) == 0

    def test_compilation_error(self, config: ShellConfig, script: Path, bin_dir: Path, capsys):
        script.write_text("def broken(:\n")

        assert run_from_file(str(script), config=config, search_path=str(bin_dir)) == 1
        assert "Compilation Error" in capsys.readouterr().err

    def test_runtime_error(self, config: ShellConfig, script: Path, bin_dir: Path, capsys):
        script.write_text("x = 1\nraise RuntimeError('stop here')\n")

        assert run_from_file(str(script), config=config, search_path=str(bin_dir)) == 1
        assert "Runtime Error: RuntimeError: stop here" in capsys.readouterr().err

    def test_history_not_written(self, config: ShellConfig, script: Path, bin_dir: Path):
        script.write_text("x = 1\n")

        run_from_file(str(script), config=config, search_path=str(bin_dir))

        assert not config.history_path.exists()

    def test_default_config(self, script: Path, bin_dir: Path):
        script.write_text("x = 1\n")

        assert run_from_file(str(script), search_path=str(bin_dir)) == 0
