"""Syntax highlighting for the edit buffer.

Tokens come from pygments' Python lexer. ShellStyle only ever assigns one
of the eight basic terminal colours, each written as a plain SGR code
(30-37) so the line renders identically on every terminal palette.
"""

from __future__ import annotations

from pygments.lexers import PythonLexer
from pygments.style import Style
from pygments.token import (
    Comment,
    Error,
    Keyword,
    Name,
    Number,
    Operator,
    String,
    _TokenType,
)

from pish.core.errors import UnsupportedColorError

RESET = "\x1b[0m"

ANSI_FOREGROUND = {
    "000000": 30,
    "ff0000": 31,
    "00ff00": 32,
    "ffff00": 33,
    "0000ff": 34,
    "ff00ff": 35,
    "00ffff": 36,
    "ffffff": 37,
}


class ShellStyle(Style):
    """Eight-colour style for the line editor."""

    styles = {
        Comment: "#0000ff",
        Keyword: "#ff00ff",
        Keyword.Constant: "#00ffff",
        Name.Builtin: "#00ffff",
        Name.Function: "#ffff00",
        Name.Class: "#ffff00",
        Name.Decorator: "#00ffff",
        String: "#00ff00",
        Number: "#ffff00",
        Operator.Word: "#ff00ff",
        Error: "#ff0000",
    }


def ansi_code(color: str) -> int:
    """Map a style colour ("rrggbb") to its SGR foreground code.

    Raises:
        UnsupportedColorError: If the colour is not one of the eight.
    """
    try:
        return ANSI_FOREGROUND[color.lower()]
    except KeyError:
        raise UnsupportedColorError(f"Colour #{color} has no ANSI equivalent") from None


class Highlighter:
    """Turns source text into ANSI-coloured text."""

    def __init__(self, style: type[Style] = ShellStyle) -> None:
        self._lexer = PythonLexer(stripnl=False, ensurenl=False)
        self._style = style

    def _color_for(self, token_type: _TokenType) -> str | None:
        # Lexers may emit subtypes the style class never registered.
        while not self._style.styles_token(token_type) and token_type.parent is not None:
            token_type = token_type.parent
        return self._style.style_for_token(token_type)["color"] or None

    def highlight(self, source: str) -> str:
        """Return source with SGR colour codes around coloured tokens.

        Stripping the escape codes gives back source unchanged.
        """
        parts: list[str] = []
        for token_type, value in self._lexer.get_tokens(source):
            if not value:
                continue
            color = self._color_for(token_type)
            if color is None:
                parts.append(value)
            else:
                parts.append(f"\x1b[{ansi_code(color)}m{value}{RESET}")
        return "".join(parts)
