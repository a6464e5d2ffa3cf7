"""Shell session state shared by the line editor and the script bridge."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from pish.core.config import ShellConfig
from pish.core.executables import ExecutableIndex
from pish.core.history import HistoryStore


@dataclass
class ShellSession:
    """Everything the shell keeps for the life of the process.

    Built once at startup and passed by reference to the editor and the
    bridge. Access to history, the running flag, and the executable index
    goes through ``lock`` in short critical sections; the lock is never held
    across terminal, process, or file I/O.
    """

    config: ShellConfig = field(default_factory=ShellConfig)
    history: HistoryStore = field(default_factory=HistoryStore)
    executables: ExecutableIndex = field(default_factory=ExecutableIndex)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _running: bool = field(default=True, repr=False)

    @classmethod
    def create(
        cls,
        config: ShellConfig,
        search_path: str | None = None,
    ) -> ShellSession:
        """Load history and index executables for a new session."""
        return cls(
            config=config,
            history=HistoryStore.load(config.history_path),
            executables=ExecutableIndex.build(search_path),
        )

    @property
    def running(self) -> bool:
        with self.lock:
            return self._running

    def stop(self) -> None:
        """Clear the running flag; the read-evaluate loop exits after this line."""
        with self.lock:
            self._running = False

    def record(self, line: str) -> None:
        """Reset history navigation and append a submitted line."""
        with self.lock:
            self.history.reset_pointer()
            self.history.append(line)

    def history_snapshot(self) -> list[str]:
        with self.lock:
            return self.history.all()

    def find_executables(self, pattern: str) -> list[str]:
        with self.lock:
            return self.executables.fuzzy_find(pattern)
