"""CLI entry point."""

from __future__ import annotations

import sys


def main() -> None:
    """Main entry point for the CLI."""
    import importlib.util

    if importlib.util.find_spec("rich_click") is None:
        print("CLI dependencies not installed. Run: pip install pish")
        sys.exit(1)

    _run_cli()


def _run_cli() -> None:
    """CLI definition and runner."""
    import rich_click as click

    # Configure rich-click styling
    click.rich_click.USE_RICH_MARKUP = True
    click.rich_click.USE_MARKDOWN = True
    click.rich_click.SHOW_ARGUMENTS = True
    click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
    click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
    click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
    click.rich_click.ERRORS_EPILOGUE = ""
    click.rich_click.MAX_WIDTH = 100

    cli = build_cli(click)
    cli()


def build_cli(click):
    """Build the root command. Split out so tests can invoke it directly."""

    @click.command()
    @click.argument("file", required=False)
    @click.option("--config", "-c", "config_path", default=None, help="Config file path")
    @click.option("--startup-file", default=None, help="Script sourced before the first prompt")
    @click.option("--history-file", default=None, help="History file path")
    @click.option("--no-startup", is_flag=True, help="Skip the startup script")
    @click.option(
        "--log-level",
        "-l",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
        default=None,
        help="Log level (default: WARNING, or PISH_LOG_LEVEL)",
    )
    @click.version_option(package_name="pish")
    def cli(
        file: str | None,
        config_path: str | None,
        startup_file: str | None,
        history_file: str | None,
        no_startup: bool,
        log_level: str | None,
    ):
        """pish - a shell that speaks Python.

        Every line is Python, run in one persistent namespace. Programs on
        **$PATH** are callables, so `ls("-la")` lists a directory and
        `git("log", "--oneline")` runs git.

        **Builtins:** cd, run, source, find, history, drop, get_env,
        set_env, exit. Environment variables are bound on `env`.

        Input is one line at a time. A pasted multi-line block is folded
        onto one line, wrapped in `exec(...)` when it holds a `def` or loop.

        **Examples:**

            pish                          # Interactive shell

            pish build.py                 # Run a script with the builtins

            pish --no-startup             # Skip ~/.pishrc.py
        """
        from pish.core.config import load_config
        from pish.core.errors import ConfigError, HistoryError
        from pish.core.logging_config import configure_logging

        configure_logging(level=log_level)

        try:
            config = load_config(config_path)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if startup_file:
            config.startup_file = startup_file
        if history_file:
            config.history_file = history_file

        from pish.frontends.cli.repl import run_from_file, run_interactive

        try:
            if file:
                sys.exit(run_from_file(file, config=config))
            run_interactive(config, source_startup=not no_startup)
        except HistoryError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    return cli


if __name__ == "__main__":
    main()
