"""Embedded Python runtime: a global namespace plus compile/run helpers.

A submitted line is compiled as an expression when possible (its value is
returned for display) and as statements otherwise. Compilation and execution
failures are reported as two distinct error types.
"""

from __future__ import annotations

import builtins
import logging
from dataclasses import dataclass
from pathlib import Path
from types import CodeType
from typing import Any

from pish.core.errors import ScriptCompilationError, ScriptRuntimeError

logger = logging.getLogger(__name__)

NAMESPACE_NAME = "__pish__"


@dataclass(frozen=True)
class CompiledScript:
    """Compiled source and whether it evaluates to a value."""

    code: CodeType
    is_expression: bool
    filename: str


class ScriptRuntime:
    """Owns the global namespace scripts run in."""

    def __init__(self) -> None:
        self.namespace: dict[str, Any] = {
            "__name__": NAMESPACE_NAME,
            "__builtins__": builtins,
        }

    # -------------------------------------------------------------------------
    # Namespace access
    # -------------------------------------------------------------------------

    def set_global(self, name: str, value: Any) -> None:
        self.namespace[name] = value

    def delete_global(self, name: str) -> bool:
        """Remove a name from the namespace. Returns False if it was absent."""
        return self.namespace.pop(name, _MISSING) is not _MISSING

    def __contains__(self, name: object) -> bool:
        return name in self.namespace

    # -------------------------------------------------------------------------
    # Compilation and execution
    # -------------------------------------------------------------------------

    def compile(self, source: str, filename: str = "<pish>") -> CompiledScript:
        """Compile source as an expression, falling back to statements.

        Raises:
            ScriptCompilationError: If the source is not valid Python.
        """
        try:
            return CompiledScript(compile(source, filename, "eval"), True, filename)
        except (SyntaxError, ValueError):
            pass
        try:
            return CompiledScript(compile(source, filename, "exec"), False, filename)
        except (SyntaxError, ValueError) as e:
            if not isinstance(e, SyntaxError):
                e = SyntaxError(str(e))
            raise ScriptCompilationError(source, e) from e

    def run(self, script: CompiledScript) -> Any:
        """Execute compiled code in the namespace.

        Returns:
            The expression value, or None for statements.

        Raises:
            ScriptRuntimeError: If the code raised.
        """
        try:
            if script.is_expression:
                return eval(script.code, self.namespace)
            exec(script.code, self.namespace)
            return None
        except Exception as e:
            raise ScriptRuntimeError(e) from e

    def evaluate(self, source: str, filename: str = "<pish>") -> Any:
        """Compile and run source in one step."""
        return self.run(self.compile(source, filename))

    def exec_file(self, path: Path) -> None:
        """Read, compile and run a file as statements in the namespace.

        Errors propagate unchanged so callers inside a running script see the
        original exception type.
        """
        source = path.read_text()
        code = compile(source, str(path), "exec")
        exec(code, self.namespace)

    def release(self) -> None:
        """Drop every binding so objects held by scripts can be collected."""
        self.namespace.clear()
        logger.debug("Runtime namespace released")


_MISSING = object()
