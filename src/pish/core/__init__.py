"""Core - shell state and the embedded runtime.

Nothing in this package touches the terminal directly; the line editor in
``pish.frontends.cli.repl`` drives it.

Modules:
    runtime       Namespace plus compile/run helpers
    bridge        Host functions installed into the namespace
    session       Shared state for one shell process
    history       Persisted input history with navigation
    executables   Index of programs on the search path
    config        YAML configuration and the startup script
"""

from pish.core.bridge import ScriptBridge
from pish.core.config import ShellConfig, ensure_startup_file, load_config
from pish.core.errors import (
    ConfigError,
    HistoryError,
    InvalidArgumentError,
    PishError,
    ProcessSpawnError,
    ScriptCompilationError,
    ScriptRuntimeError,
    UnsupportedColorError,
)
from pish.core.executables import ExecutableIndex
from pish.core.history import HistoryStore
from pish.core.runtime import ScriptRuntime
from pish.core.session import ShellSession

__all__ = [
    "ScriptBridge",
    "ScriptRuntime",
    "ShellSession",
    "ShellConfig",
    "load_config",
    "ensure_startup_file",
    "ExecutableIndex",
    "HistoryStore",
    "PishError",
    "ConfigError",
    "HistoryError",
    "InvalidArgumentError",
    "ProcessSpawnError",
    "ScriptCompilationError",
    "ScriptRuntimeError",
    "UnsupportedColorError",
]
