"""Read-evaluate loop and session lifecycle."""

from __future__ import annotations

import atexit
import logging
import signal
from enum import Enum
from types import FrameType

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.output import Output, create_output
from rich.console import Console

from pish.core.bridge import ScriptBridge
from pish.core.config import ShellConfig, ensure_startup_file
from pish.core.errors import ScriptCompilationError, ScriptRuntimeError
from pish.core.runtime import ScriptRuntime
from pish.core.session import ShellSession
from pish.core.themes import make_console
from pish.frontends.cli.repl.cleanup import Teardown
from pish.frontends.cli.repl.display import (
    print_compilation_error,
    print_result,
    print_runtime_error,
    print_startup_error,
    print_welcome,
)
from pish.frontends.cli.repl.editor import LineEditor, LineStatus
from pish.frontends.cli.repl.render import Renderer
from pish.frontends.cli.repl.terminal import Terminal

logger = logging.getLogger(__name__)


class LoopCode(Enum):
    """Outcome of one read-evaluate step."""

    OK = 0
    EXIT = 1
    CANCELLED = 2
    COMPILATION_FAILED = 10
    RUNTIME_FAILED = 11


def evaluate(runtime: ScriptRuntime, source: str, console: Console, error_console: Console) -> LoopCode:
    """Compile and run one submitted line, reporting the outcome.

    Expression values other than None are printed and kept in ``_``.
    """
    try:
        script = runtime.compile(source)
    except ScriptCompilationError as e:
        logger.debug("Compilation failed: %r", source)
        print_compilation_error(error_console, e)
        return LoopCode.COMPILATION_FAILED

    try:
        value = runtime.run(script)
    except ScriptRuntimeError as e:
        logger.debug("Runtime failure: %s", e)
        print_runtime_error(error_console, e)
        return LoopCode.RUNTIME_FAILED

    if value is not None:
        runtime.set_global("_", value)
        print_result(console, value)
    return LoopCode.OK


class Shell:
    """Ties the line editor, the runtime and the session together."""

    def __init__(
        self,
        session: ShellSession,
        runtime: ScriptRuntime,
        bridge: ScriptBridge,
        editor: LineEditor,
        console: Console,
        error_console: Console,
    ) -> None:
        self.session = session
        self.runtime = runtime
        self.bridge = bridge
        self.editor = editor
        self.console = console
        self.error_console = error_console

    def source_startup(self, path: str) -> None:
        """Source the startup script; failures are reported, not fatal."""
        try:
            self.bridge.source(path)
        except Exception as e:
            logger.warning("Startup file %s failed: %s", path, e)
            print_startup_error(self.error_console, path, e)

    def step(self) -> LoopCode:
        """Read one line and evaluate it."""
        result = self.editor.read_line()
        if result.status is LineStatus.EXIT:
            return LoopCode.EXIT
        if result.status is LineStatus.CANCELLED:
            return LoopCode.CANCELLED
        if not result.text.strip():
            return LoopCode.OK
        return evaluate(self.runtime, result.text, self.console, self.error_console)

    def loop(self) -> None:
        """Run until exit() is called or input ends."""
        while self.session.running:
            code = self.step()
            if code is LoopCode.EXIT:
                break


def _raise_system_exit(signum: int, frame: FrameType | None) -> None:
    raise SystemExit(128 + signum)


def run_interactive(
    config: ShellConfig,
    input: Input | None = None,
    output: Output | None = None,
    source_startup: bool = True,
    search_path: str | None = None,
) -> None:
    """Run the interactive shell until exit.

    Args:
        config: Resolved shell configuration.
        input: Key source. Defaults to the controlling terminal.
        output: Terminal output. Defaults to stdout.
        source_startup: Source the startup file before the first prompt.
        search_path: Directories to index instead of $PATH.
    """
    session = ShellSession.create(config, search_path=search_path)
    runtime = ScriptRuntime()

    input = input or create_input(always_prefer_tty=True)
    output = output or create_output()
    terminal = Terminal(input, output)

    console = make_console(config.theme)
    error_console = make_console(config.theme, stderr=True)

    bridge = ScriptBridge(session, runtime, terminal, console, error_console)
    editor = LineEditor(session, input, Renderer(output, prompt=config.prompt))
    shell = Shell(session, runtime, bridge, editor, console, error_console)

    teardown = Teardown(terminal, runtime, session.history)
    atexit.register(teardown)
    original_sigterm = signal.signal(signal.SIGTERM, _raise_system_exit)

    try:
        terminal.enable_raw_mode()
        terminal.push_features()
        bridge.install()

        print_welcome(console)
        if source_startup:
            shell.source_startup(str(ensure_startup_file(config)))

        shell.loop()
    finally:
        signal.signal(signal.SIGTERM, original_sigterm)
        atexit.unregister(teardown)
        teardown()
