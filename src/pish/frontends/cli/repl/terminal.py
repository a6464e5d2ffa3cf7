"""Terminal mode control.

The shell keeps the terminal raw from startup to teardown and hands it
over in cooked mode to foreground child processes. Bracketed paste is
requested at startup so pasted text arrives as one event instead of a
stream of keystrokes (including Enter).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

from prompt_toolkit.input import Input
from prompt_toolkit.output import Output

logger = logging.getLogger(__name__)


class Terminal:
    """Owns the raw-mode state of one input/output pair."""

    def __init__(self, input: Input, output: Output) -> None:
        self.input = input
        self.output = output
        self._raw: AbstractContextManager[None] | None = None
        self._paste_enabled = False

    @property
    def is_raw(self) -> bool:
        return self._raw is not None

    def enable_raw_mode(self) -> None:
        if self._raw is not None:
            return
        raw = self.input.raw_mode()
        raw.__enter__()
        self._raw = raw

    def disable_raw_mode(self) -> None:
        if self._raw is None:
            return
        raw, self._raw = self._raw, None
        raw.__exit__(None, None, None)

    @contextmanager
    def cooked(self) -> Iterator[None]:
        """Hand the terminal over as the shell found it, then take it back.

        Raw mode and bracketed paste are both switched off for the block so
        a child sees plain keystrokes and unwrapped pastes.
        """
        was_raw = self.is_raw
        had_paste = self._paste_enabled
        self.pop_features()
        self.disable_raw_mode()
        try:
            yield
        finally:
            if was_raw:
                self.enable_raw_mode()
            if had_paste:
                self.push_features()

    def push_features(self) -> None:
        """Request bracketed paste from the terminal."""
        if not self._paste_enabled:
            self.output.enable_bracketed_paste()
            self.output.flush()
            self._paste_enabled = True

    def pop_features(self) -> None:
        if self._paste_enabled:
            self.output.disable_bracketed_paste()
            self.output.flush()
            self._paste_enabled = False

    def restore(self) -> None:
        """Return the terminal to the state it was in before the shell."""
        try:
            self.pop_features()
        finally:
            self.disable_raw_mode()
        logger.debug("Terminal restored")
