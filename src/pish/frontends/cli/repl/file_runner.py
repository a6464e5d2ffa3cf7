"""Non-interactive script execution."""

from __future__ import annotations

import logging

from pish.core.bridge import ScriptBridge
from pish.core.config import ShellConfig
from pish.core.errors import ScriptCompilationError, ScriptRuntimeError
from pish.core.paths import expand_path
from pish.core.runtime import ScriptRuntime
from pish.core.session import ShellSession
from pish.core.themes import make_console
from pish.frontends.cli.repl.display import print_compilation_error, print_runtime_error

logger = logging.getLogger(__name__)


def run_from_file(
    filepath: str,
    config: ShellConfig | None = None,
    search_path: str | None = None,
) -> int:
    """Run a pish script from a file with the full set of host functions.

    The terminal stays cooked and history is read but never written.

    Args:
        filepath: Path to the script.
        config: Resolved configuration. Defaults to built-in values.
        search_path: Directories to index instead of $PATH.

    Returns:
        Process exit status: 0 on success, 1 on any failure.
    """
    config = config or ShellConfig()
    error_console = make_console(config.theme, stderr=True)

    path = expand_path(filepath)
    try:
        source = path.read_text()
    except FileNotFoundError:
        error_console.print(f"Error: File not found: {filepath}", style="error", markup=False)
        return 1
    except OSError as e:
        error_console.print(f"Error: {e}", style="error", markup=False)
        return 1

    session = ShellSession.create(config, search_path=search_path)
    runtime = ScriptRuntime()
    bridge = ScriptBridge(
        session,
        runtime,
        console=make_console(config.theme),
        error_console=error_console,
    )
    bridge.install()
    logger.debug("Running %s", path)

    try:
        runtime.run(runtime.compile(source, str(path)))
    except ScriptCompilationError as e:
        print_compilation_error(error_console, e)
        return 1
    except ScriptRuntimeError as e:
        print_runtime_error(error_console, e)
        return 1
    finally:
        runtime.release()

    return 0
