"""Host functions exposed to scripts.

The bridge is the only code that crosses between the shell and the script
namespace. ``ScriptBridge.install`` registers, in order:

1. one ExecutableCommand per indexed executable, except names that would
   hide a Python builtin or keyword
2. the fixed host functions (exit, find, set_env, get_env, history, source,
   run, drop)
3. ``env``, with one attribute binding per environment variable
4. ``cd``, last, so the directory builtin wins any name collision

Host functions validate their arguments and raise InvalidArgumentError (a
TypeError) into the calling script on a mismatch.
"""

from __future__ import annotations

import builtins
import inspect
import keyword
import logging
import os
import sys
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Protocol

from rich.console import Console

from pish.core.errors import InvalidArgumentError, ProcessSpawnError
from pish.core.paths import expand, expand_path
from pish.core.process import build_argv, spawn_and_wait
from pish.core.runtime import ScriptRuntime
from pish.core.session import ShellSession
from pish.core.themes import make_console

logger = logging.getLogger(__name__)


class TerminalMode(Protocol):
    """Hands the terminal to a foreground child and takes it back."""

    def cooked(self) -> AbstractContextManager[None]: ...


class NullTerminal:
    """Terminal stand-in for non-interactive runs."""

    def cooked(self) -> AbstractContextManager[None]:
        return nullcontext()


def expect_str(function: str, value: Any, position: int = 1) -> str:
    """Return value if it is a str, else raise InvalidArgumentError."""
    if not isinstance(value, str):
        raise InvalidArgumentError(
            function, f"argument {position} must be str, not {type(value).__name__}"
        )
    return value


class HostFunction:
    """A shell builtin callable from scripts.

    Arity is checked against the callback's signature before the call so
    a wrong argument count surfaces as InvalidArgumentError.
    """

    def __init__(self, name: str, callback: Callable[..., Any]) -> None:
        self.name = name
        self._callback = callback
        self._signature = inspect.signature(callback)
        self.__doc__ = callback.__doc__

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            self._signature.bind(*args, **kwargs)
        except TypeError as e:
            raise InvalidArgumentError(self.name, str(e)) from None
        return self._callback(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<host function {self.name}>"


class ExecutableCommand:
    """Callable binding for one program on the search path.

    ``ls("-la", "~/src")`` runs ``ls`` with the tokenized arguments.
    """

    def __init__(self, name: str, launcher: Callable[..., int]) -> None:
        self.name = name
        self._launcher = launcher

    def __call__(self, *args: Any) -> int:
        return self._launcher(self.name, *args)

    def __repr__(self) -> str:
        return f"<executable {self.name}>"


class EnvironmentBindings:
    """Attribute view over environment variables.

    Each variable set at startup gets a binding: reading ``env.HOME`` returns
    the current value, assigning ``env.HOME = "..."`` sets it. Assigning a
    new name binds it too.
    """

    def __init__(self, bridge: ScriptBridge) -> None:
        object.__setattr__(self, "_bridge", bridge)
        object.__setattr__(self, "_names", set())

    def bind(self, name: str) -> None:
        self._names.add(name)

    def __getattr__(self, name: str) -> Any:
        if name in self._names:
            return self._bridge.get_env(name)
        raise AttributeError(f"environment variable {name!r} is not bound")

    def __setattr__(self, name: str, value: Any) -> None:
        self._bridge.set_env(name, value)
        self._names.add(name)

    def __dir__(self) -> list[str]:
        return sorted(self._names)

    def __repr__(self) -> str:
        return f"<env: {len(self._names)} variables>"


class ScriptBridge:
    """Registers and implements the shell's host functions."""

    def __init__(
        self,
        session: ShellSession,
        runtime: ScriptRuntime,
        terminal: TerminalMode | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self.session = session
        self.runtime = runtime
        self.terminal: TerminalMode = terminal or NullTerminal()
        self.console = console or make_console()
        self.error_console = error_console or make_console(stderr=True)

    def install(self) -> None:
        """Install every binding into the runtime namespace."""
        with self.session.lock:
            executables = self.session.executables.names
        bound = 0
        for name in executables:
            if name in vars(builtins) or keyword.iskeyword(name):
                # Reachable through run() instead.
                logger.debug("Not binding executable %r over a Python name", name)
                continue
            self.runtime.set_global(name, ExecutableCommand(name, self.run_program))
            bound += 1

        host_functions: list[tuple[str, Callable[..., Any]]] = [
            ("exit", self.exit),
            ("find", self.find),
            ("set_env", self.set_env),
            ("get_env", self.get_env),
            ("history", self.history),
            ("source", self.source),
            ("run", self.run),
            ("drop", self.drop),
        ]
        for name, callback in host_functions:
            self.register(name, callback)

        env = EnvironmentBindings(self)
        for key in os.environ:
            env.bind(key)
        self.runtime.set_global("env", env)

        # Must stay last: a directory builtin beats executables named "cd".
        self.register("cd", self.cd)

        logger.debug(
            "Installed %d executable bindings and %d builtins",
            bound,
            len(host_functions) + 2,
        )

    def register(self, name: str, callback: Callable[..., Any]) -> HostFunction:
        function = HostFunction(name, callback)
        self.runtime.set_global(name, function)
        return function

    # -------------------------------------------------------------------------
    # Host functions
    # -------------------------------------------------------------------------

    def exit(self) -> None:
        """Leave the shell after the current line finishes."""
        self.session.stop()

    def find(self, pattern: Any) -> None:
        """Print executables fuzzy-matching pattern, best match first."""
        pattern = expect_str("find", pattern)
        for name in self.session.find_executables(pattern):
            self.console.print(name, markup=False, highlight=False)

    def set_env(self, key: Any, value: Any) -> None:
        """Set a process environment variable."""
        key = expect_str("set_env", key, 1)
        value = expect_str("set_env", value, 2)
        if not key or "=" in key:
            raise InvalidArgumentError("set_env", f"invalid variable name {key!r}")
        os.environ[key] = value

    def get_env(self, key: Any) -> str | None:
        """Return an environment variable, or None if it is not set."""
        key = expect_str("get_env", key)
        return os.environ.get(key)

    def history(self) -> list[str]:
        """Return every history entry, oldest first."""
        return self.session.history_snapshot()

    def source(self, path: Any) -> None:
        """Run a script file in the shell namespace."""
        path = expect_str("source", path)
        file_path = expand_path(path)
        if not file_path.exists():
            logger.warning("source: %s does not exist", file_path)
            self.error_console.print(
                f"File {path} does not exist or missing permissions",
                style="warning",
                markup=False,
            )
        self.runtime.exec_file(file_path)

    def run(self, *arguments: Any) -> int:
        """Run a program; arguments are split into words, first word is the program."""
        argv = build_argv(self._string_arguments("run", arguments))
        if not argv:
            raise InvalidArgumentError("run", "missing program name")
        return self._spawn(argv)

    def run_program(self, program: str, *arguments: Any) -> int:
        """Run a known program with split arguments."""
        argv = [program, *build_argv(self._string_arguments(program, arguments))]
        return self._spawn(argv)

    def drop(self, *names: Any) -> None:
        """Delete names bound directly in the shell namespace."""
        for name in names:
            if not isinstance(name, str):
                logger.debug("drop: skipping non-string argument %r", name)
                continue
            self.runtime.delete_global(name)

    def cd(self, path: Any = None) -> None:
        """Change the working directory; no argument means home."""
        if path is None:
            path = "~"
        path = expect_str("cd", path)
        target = expand(path)
        try:
            os.chdir(target)
        except OSError as e:
            logger.warning("cd: %s: %s", target, e)
            self.error_console.print(str(e), style="error", markup=False)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _string_arguments(self, function: str, arguments: tuple[Any, ...]) -> list[str]:
        strings = []
        for argument in arguments:
            if isinstance(argument, str):
                strings.append(argument)
            else:
                logger.debug("%s: skipping non-string argument %r", function, argument)
        return strings

    def _spawn(self, argv: list[str]) -> int:
        try:
            with self.terminal.cooked():
                return spawn_and_wait(argv)
        except OSError as e:
            raise ProcessSpawnError(argv[0], e) from e
        finally:
            sys.stdout.flush()
