"""Shell teardown.

Teardown restores the terminal, releases the script namespace, and
persists history, in that order, exactly once. Terminal restoration comes
first so a failure to write history never leaves the user's terminal raw.
It runs from the loop's ``finally`` block and is also registered with
atexit as a last resort.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pish.core.history import HistoryStore
    from pish.core.runtime import ScriptRuntime
    from pish.frontends.cli.repl.terminal import Terminal

logger = logging.getLogger(__name__)


class Teardown:
    """Idempotent shutdown sequence for one shell session."""

    def __init__(self, terminal: Terminal, runtime: ScriptRuntime, history: HistoryStore) -> None:
        self.terminal = terminal
        self.runtime = runtime
        self.history = history
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __call__(self) -> None:
        """Run the shutdown steps; later calls do nothing.

        Raises:
            HistoryError: If history cannot be written. The terminal is
                already restored by then.
        """
        if self._done:
            return
        self._done = True
        logger.debug("Tearing down shell session")

        try:
            self.terminal.restore()
        finally:
            try:
                self.runtime.release()
            finally:
                self.history.persist()
