"""Keystroke-driven line editor.

LineEditor turns key presses into one finished line. Keys are dispatched
by identity:

    enter            submit the buffer
    up / down        browse history (the live line is stashed and restored)
    left / right     move the cursor
    printable char   insert at the cursor
    backspace        delete before the cursor
    delete           delete after the cursor
    ctrl-c           cancel the line
    ctrl-d           exit, on an empty line only
    tab              reserved
    bracketed paste  insert the pasted text as one line

Any other key is ignored. Every change redraws the line.
"""

from __future__ import annotations

import logging
import select
import textwrap
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto

from prompt_toolkit.input import Input
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from pish.core.session import ShellSession
from pish.frontends.cli.repl.buffer import EditBuffer
from pish.frontends.cli.repl.render import Renderer

logger = logging.getLogger(__name__)

# Bounded wait per poll so the loop never blocks indefinitely on input.
POLL_INTERVAL = 0.05

ENTER_KEYS = frozenset({Keys.ControlM, Keys.ControlJ})


class LineStatus(Enum):
    """How a read_line call ended."""

    SUBMITTED = auto()
    CANCELLED = auto()
    EXIT = auto()


@dataclass(frozen=True)
class LineResult:
    status: LineStatus
    text: str = ""


def _compiles(source: str) -> bool:
    try:
        compile(source, "<paste>", "exec")
    except (SyntaxError, ValueError):
        return False
    return True


def _join_pasted(text: str) -> str:
    """Fold pasted lines into one editable line.

    Simple statements are joined with "; ". A block that only compiles with
    its line structure intact (a def, a for loop) is kept verbatim inside an
    exec() call instead, so it still fits on one line.
    """
    block = textwrap.dedent(text.replace("\r\n", "\n").replace("\r", "\n")).strip("\n")
    lines = [line.strip() for line in block.split("\n")]
    joined = "; ".join(line for line in lines if line)
    if len(lines) > 1 and not _compiles(joined) and _compiles(block):
        return f"exec({block!r})"
    return joined


class LineEditor:
    """Reads one line at a time from a prompt_toolkit Input."""

    def __init__(
        self,
        session: ShellSession,
        input: Input,
        renderer: Renderer,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self.session = session
        self.input = input
        self.renderer = renderer
        self.poll_interval = poll_interval
        self.buffer = EditBuffer()
        self._pending: deque[KeyPress] = deque()

    def read_line(self) -> LineResult:
        """Block until a line is submitted, cancelled, or input ends."""
        self.buffer = EditBuffer()
        self.renderer.draw_prompt()

        while True:
            if not self._pending:
                if self.input.closed:
                    self.renderer.newline()
                    return LineResult(LineStatus.EXIT)
                self._pending.extend(self._poll())
                continue

            result = self.handle_key(self._pending.popleft())
            if result is not None:
                return result

    def _poll(self) -> list[KeyPress]:
        ready, _, _ = select.select([self.input.fileno()], [], [], self.poll_interval)
        if not ready:
            # A lone escape is only reported once input goes quiet.
            return self.input.flush_keys()
        return self.input.read_keys()

    def handle_key(self, key_press: KeyPress) -> LineResult | None:
        """Apply one key press. Returns a result when the line is finished."""
        key = key_press.key

        if key in ENTER_KEYS:
            return self._submit()

        if key == Keys.ControlC:
            self.renderer.newline()
            self._reset_history_pointer()
            return LineResult(LineStatus.CANCELLED)

        if key == Keys.ControlD:
            if self.buffer:
                return None
            self.renderer.newline()
            return LineResult(LineStatus.EXIT)

        if key == Keys.Up:
            with self.session.lock:
                entry = self.session.history.navigate_up(self.buffer.text)
            if entry is not None:
                self.buffer.replace(entry)
                self.redraw()
        elif key == Keys.Down:
            with self.session.lock:
                entry = self.session.history.navigate_down()
            if entry is not None:
                self.buffer.replace(entry)
                self.redraw()
        elif key == Keys.Left:
            if self.buffer.move_left():
                self.redraw()
        elif key == Keys.Right:
            if self.buffer.move_right():
                self.redraw()
        elif key == Keys.Backspace:
            if not self.buffer:
                self._reset_history_pointer()
            elif self.buffer.backspace():
                self.redraw()
        elif key == Keys.Delete:
            if not self.buffer or self.buffer.at_start() or self.buffer.at_end():
                self._reset_history_pointer()
            else:
                self.buffer.delete()
                self.redraw()
        elif key == Keys.Tab:
            # TODO: complete executable and namespace names here.
            pass
        elif key == Keys.BracketedPaste:
            pasted = _join_pasted(key_press.data)
            if pasted:
                self.buffer.insert(pasted)
                self.redraw()
        elif not isinstance(key, Keys) and key.isprintable():
            self.buffer.insert(key)
            self.redraw()
        else:
            logger.debug("Ignoring key %r", key)

        return None

    def redraw(self) -> None:
        self.renderer.redraw(self.buffer)

    def _reset_history_pointer(self) -> None:
        with self.session.lock:
            self.session.history.reset_pointer()

    def _submit(self) -> LineResult:
        text = self.buffer.text
        self.renderer.newline()
        self.session.record(text)
        return LineResult(LineStatus.SUBMITTED, text)
