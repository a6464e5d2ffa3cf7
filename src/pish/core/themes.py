"""Console themes for shell messages.

Themes name the styles used for prompts, results, warnings and errors.
The line editor's syntax colours are separate (see the highlighter).
"""

from rich.console import Console
from rich.theme import Theme


def create_theme(
    *,
    prompt: str = "bold green",
    result: str = "default",
    warning: str = "bold yellow",
    error: str = "bold red",
    hint: str = "dim",
) -> Theme:
    """Create a theme with the given styles.

    Every style the shell prints with is defined, so a partial theme can
    never raise a missing-style error at runtime.
    """
    return Theme(
        {
            "prompt": prompt,
            "result": result,
            "warning": warning,
            "error": error,
            "hint": hint,
        }
    )


DEFAULT_THEME = create_theme()

MONO_THEME = create_theme(
    prompt="bold",
    result="default",
    warning="bold",
    error="bold reverse",
    hint="dim",
)

THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "mono": MONO_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name, falling back to the default theme."""
    return THEMES.get(name.lower(), DEFAULT_THEME)


def make_console(theme: str = "default", stderr: bool = False) -> Console:
    """Console for shell output; soft wrap keeps long lines intact."""
    return Console(theme=get_theme(theme), stderr=stderr, soft_wrap=True)
