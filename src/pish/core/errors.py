"""Shell error types.

Every error raised by pish derives from PishError so callers can catch the
whole family at the read-evaluate loop boundary.
"""

from __future__ import annotations


class PishError(Exception):
    """Base error for pish operations."""


class ConfigError(PishError):
    """Configuration file could not be parsed or has the wrong shape."""


class HistoryError(PishError):
    """History file could not be read or written."""


class InvalidArgumentError(PishError, TypeError):
    """A host function received an argument of the wrong type or arity.

    Raised inside script evaluation, so scripts can catch it as a TypeError.
    """

    def __init__(self, function: str, message: str) -> None:
        super().__init__(f"{function}(): {message}")
        self.function = function


class ProcessSpawnError(PishError):
    """An external program could not be started or waited on."""

    def __init__(self, program: str, cause: OSError) -> None:
        super().__init__(f"{program}: {cause.strerror or cause}")
        self.program = program
        self.cause = cause


class ScriptCompilationError(PishError):
    """Source text could not be compiled."""

    def __init__(self, source: str, cause: SyntaxError) -> None:
        super().__init__(cause.msg or str(cause))
        self.source = source
        self.cause = cause


class ScriptRuntimeError(PishError):
    """Compiled source raised while executing."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


class UnsupportedColorError(PishError):
    """Highlighting theme produced a colour outside the eight ANSI colours."""
