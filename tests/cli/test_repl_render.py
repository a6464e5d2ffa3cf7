"""Tests for syntax highlighting and line rendering."""

from __future__ import annotations

import re
from io import StringIO

import pytest
from prompt_toolkit.data_structures import Size
from prompt_toolkit.output.vt100 import Vt100_Output
from pygments.style import Style
from pygments.token import Keyword

from pish.core.errors import UnsupportedColorError
from pish.frontends.cli.repl.buffer import EditBuffer
from pish.frontends.cli.repl.highlight import Highlighter, ansi_code
from pish.frontends.cli.repl.render import Renderer, screen_position

SGR = re.compile(r"\x1b\[\d+m")


@pytest.fixture
def stdout() -> StringIO:
    return StringIO()


@pytest.fixture
def output(stdout: StringIO) -> Vt100_Output:
    return Vt100_Output(stdout, lambda: Size(rows=24, columns=80))


@pytest.fixture
def narrow(stdout: StringIO) -> Vt100_Output:
    return Vt100_Output(stdout, lambda: Size(rows=24, columns=10))


def take(stdout: StringIO) -> str:
    """Return what was written so far and start over."""
    written = stdout.getvalue()
    stdout.seek(0)
    stdout.truncate()
    return written


class TestHighlighter:
    """Tests for Highlighter."""

    @pytest.mark.parametrize(
        "source",
        ["x = 1", "def f(a): return a  # done", "run('ls -la')", "if True: pass", ""],
    )
    def test_stripping_codes_returns_source(self, source):
        assert SGR.sub("", Highlighter().highlight(source)) == source

    def test_number_is_yellow(self):
        assert Highlighter().highlight("42") == "\x1b[33m42\x1b[0m"

    def test_keyword_is_magenta(self):
        assert "\x1b[35mdef\x1b[0m" in Highlighter().highlight("def f(): pass")

    def test_string_is_green(self):
        assert "\x1b[32m" in Highlighter().highlight("'hello'")

    def test_comment_is_blue(self):
        assert "\x1b[34m# note\x1b[0m" in Highlighter().highlight("# note")

    def test_plain_name_uncoloured(self):
        assert Highlighter().highlight("value") == "value"

    def test_only_basic_colours_emitted(self):
        codes = re.findall(r"\x1b\[(\d+)m", Highlighter().highlight("class A: x = [1, 'a', None]"))

        assert codes
        assert all(code == "0" or 30 <= int(code) <= 37 for code in codes)

    def test_unsupported_colour_raises(self):
        class PastelStyle(Style):
            styles = {Keyword: "#123456"}

        with pytest.raises(UnsupportedColorError):
            Highlighter(PastelStyle).highlight("if x: pass")

    def test_ansi_code(self):
        assert ansi_code("FF0000") == 31
        with pytest.raises(UnsupportedColorError):
            ansi_code("808080")


class TestRenderer:
    """Tests for Renderer."""

    def test_redraw_cursor_at_end(self, output, stdout):
        Renderer(output).redraw(EditBuffer("ab"))

        assert stdout.getvalue() == "\r\x1b[J> ab"

    def test_redraw_moves_cursor_back_by_offset(self, output, stdout):
        Renderer(output).redraw(EditBuffer("abc", offset=2))

        assert stdout.getvalue() == "\r\x1b[J> abc\x1b[2D"

    def test_redraw_single_step_back(self, output, stdout):
        Renderer(output).redraw(EditBuffer("abc", offset=1))

        assert stdout.getvalue().endswith("abc\b")

    def test_redraw_is_idempotent(self, output, stdout):
        renderer = Renderer(output)
        buffer = EditBuffer("print(1)", offset=3)

        renderer.redraw(buffer)
        first = stdout.getvalue()
        renderer.redraw(buffer)

        assert stdout.getvalue() == first * 2

    def test_custom_prompt(self, output, stdout):
        Renderer(output, prompt="$").draw_prompt()

        assert stdout.getvalue() == "\r\x1b[J$ "

    def test_newline(self, output, stdout):
        Renderer(output).newline()

        assert stdout.getvalue() == "\r\n"

    def test_wide_characters_move_by_columns(self, output, stdout):
        Renderer(output).redraw(EditBuffer("日本語", offset=1))

        assert stdout.getvalue().endswith("\x1b[2D")

    def test_wide_characters_two_back(self, output, stdout):
        Renderer(output).redraw(EditBuffer("a日本", offset=2))

        assert stdout.getvalue().endswith("\x1b[4D")


class TestScreenPosition:
    """Tests for screen_position."""

    def test_single_row(self):
        assert screen_position("> abc", 80) == (0, 5)

    def test_wraps_onto_next_rows(self):
        assert screen_position("x" * 25, 10) == (2, 5)

    def test_full_row_moves_to_next(self):
        assert screen_position("x" * 20, 10) == (2, 0)

    def test_wide_character_counts_twice(self):
        assert screen_position("日本", 80) == (0, 4)

    def test_wide_character_not_split_across_rows(self):
        assert screen_position("> abcdefg日", 10) == (1, 2)


class TestWrappedRedraw:
    """Tests for lines longer than the terminal is wide."""

    def test_redraw_climbs_to_prompt_row(self, narrow, stdout):
        renderer = Renderer(narrow)
        renderer.redraw(EditBuffer("x" * 23))
        take(stdout)

        renderer.redraw(EditBuffer("x" * 24))

        assert stdout.getvalue() == "\r\x1b[2A\x1b[J> " + "x" * 24

    def test_cursor_on_earlier_row(self, narrow, stdout):
        renderer = Renderer(narrow)

        renderer.redraw(EditBuffer("x" * 23, offset=20))

        assert take(stdout) == "\r\x1b[J> " + "x" * 23 + "\x1b[2A\r\x1b[5C"

        renderer.redraw(EditBuffer("x" * 23, offset=20))

        assert stdout.getvalue().startswith("\r\x1b[J> ")

    def test_full_last_row_steps_down(self, narrow, stdout):
        renderer = Renderer(narrow)

        renderer.redraw(EditBuffer("x" * 18))

        assert take(stdout) == "\r\x1b[J> " + "x" * 18 + "\r\n"

        renderer.redraw(EditBuffer("x" * 17))

        assert stdout.getvalue().startswith("\r\x1b[2A\x1b[J")

    def test_wide_character_wrap(self, narrow, stdout):
        renderer = Renderer(narrow)
        renderer.redraw(EditBuffer("abcdefg日"))
        take(stdout)

        renderer.redraw(EditBuffer("abcdefg"))

        assert stdout.getvalue().startswith("\r\x1b[A\x1b[J")

    def test_newline_leaves_from_last_row(self, narrow, stdout):
        renderer = Renderer(narrow)
        renderer.redraw(EditBuffer("x" * 23, offset=20))
        take(stdout)

        renderer.newline()

        assert take(stdout) == "\x1b[2B\r\n"

        renderer.draw_prompt()

        assert stdout.getvalue() == "\r\x1b[J> "

    def test_wrapped_redraw_is_idempotent(self, narrow, stdout):
        renderer = Renderer(narrow)
        buffer = EditBuffer("x" * 23, offset=4)
        renderer.redraw(buffer)
        take(stdout)

        renderer.redraw(buffer)
        second = take(stdout)
        renderer.redraw(buffer)

        assert stdout.getvalue() == second
