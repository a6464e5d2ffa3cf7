"""Display and output formatting for the shell loop."""

from __future__ import annotations

from typing import Any

from rich.console import Console

from pish.__version__ import __version__
from pish.core.errors import PishError, ScriptCompilationError, ScriptRuntimeError


def print_welcome(console: Console) -> None:
    """Print the startup banner."""
    console.print(f"pish {__version__}", style="prompt")
    console.print("Python is the shell language. exit() or Ctrl-D to leave.", style="hint")


def print_result(console: Console, value: Any) -> None:
    """Print the value of an evaluated expression."""
    console.print(repr(value), style="result", markup=False)


def print_compilation_error(console: Console, error: ScriptCompilationError) -> None:
    cause = error.cause
    detail = f": {error}"
    if cause.offset:
        detail += f" (column {cause.offset})"
    console.print(f"Compilation Error{detail}", style="error", markup=False)


def print_runtime_error(console: Console, error: ScriptRuntimeError) -> None:
    console.print(f"Runtime Error: {error}", style="error", markup=False)


def print_startup_error(console: Console, path: str, error: BaseException) -> None:
    """Report a failure while sourcing the startup file."""
    if isinstance(error, PishError):
        message = str(error)
    else:
        message = f"{type(error).__name__}: {error}"
    console.print(f"Startup file {path} failed: {message}", style="warning", markup=False)
