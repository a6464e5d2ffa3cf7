"""Interactive shell loop.

Public API:
    run_interactive: Run the interactive shell until exit
    run_from_file: Run a script file non-interactively
    LineEditor: Keystroke-driven line editor
    Shell: Read-evaluate loop over a LineEditor
"""

from __future__ import annotations

from pish.frontends.cli.repl.core import LoopCode, Shell, evaluate, run_interactive
from pish.frontends.cli.repl.editor import LineEditor, LineResult, LineStatus
from pish.frontends.cli.repl.file_runner import run_from_file

__all__ = [
    "run_interactive",
    "run_from_file",
    "evaluate",
    "Shell",
    "LoopCode",
    "LineEditor",
    "LineResult",
    "LineStatus",
]
