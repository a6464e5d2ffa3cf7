"""Redraws the prompt line from the current edit state."""

from __future__ import annotations

from prompt_toolkit.output import Output
from prompt_toolkit.utils import get_cwidth

from pish.frontends.cli.repl.buffer import EditBuffer
from pish.frontends.cli.repl.highlight import Highlighter


def screen_position(text: str, columns: int) -> tuple[int, int]:
    """Row and column just past text written from the top-left of a line.

    Widths are screen columns, so wide characters count twice and a wide
    character that does not fit at the end of a row starts the next one.

    Example:
        >>> screen_position("abcdefghijk", 10)
        (1, 1)
    """
    columns = max(columns, 1)
    row = col = 0
    for char in text:
        width = get_cwidth(char)
        if col + width > columns:
            row, col = row + 1, 0
        col += width
    if col >= columns:
        row, col = row + 1, 0
    return row, col


class Renderer:
    """Writes the prompt and highlighted buffer in place.

    Every redraw starts from the beginning of the input line and depends only
    on the buffer passed in, so redrawing twice shows the same thing. A line
    longer than the terminal wraps onto further rows; the renderer remembers
    which of them the cursor is on so the next redraw can climb back to the
    prompt before erasing.
    """

    def __init__(self, output: Output, prompt: str = ">", highlighter: Highlighter | None = None):
        self.output = output
        self.prompt = f"{prompt} "
        self.highlighter = highlighter or Highlighter()
        # Rows below the prompt's first row
        self._cursor_row = 0
        self._end_row = 0

    def draw_prompt(self) -> None:
        """Write the prompt for a fresh, empty line."""
        self._cursor_row = self._end_row = 0
        self.redraw(EditBuffer())

    def redraw(self, buffer: EditBuffer) -> None:
        columns = self.output.get_size().columns

        self.output.write_raw("\r")
        self.output.cursor_up(self._cursor_row)
        self.output.erase_down()
        self.output.write_raw(self.prompt)
        self.output.write_raw(self.highlighter.highlight(buffer.text))

        end_row, end_col = screen_position(self.prompt + buffer.text, columns)
        if end_col == 0 and end_row > 0:
            # The terminal holds the cursor on the full row until the next
            # character arrives, so step onto the new row explicitly.
            self.output.write_raw("\r\n")

        row, col = screen_position(self.prompt + buffer.text[: buffer.insertion_index], columns)
        if row == end_row:
            self.output.cursor_backward(end_col - col)
        else:
            self.output.cursor_up(end_row - row)
            self.output.write_raw("\r")
            self.output.cursor_forward(col)

        self._cursor_row = row
        self._end_row = end_row
        self.output.flush()

    def newline(self) -> None:
        """Finish the current line."""
        self.output.cursor_down(self._end_row - self._cursor_row)
        self.output.write_raw("\r\n")
        self.output.flush()
        self._cursor_row = self._end_row = 0
