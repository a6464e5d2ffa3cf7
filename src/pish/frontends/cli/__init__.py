"""CLI frontend for pish.

Example:
    $ pish                  # interactive shell
    $ pish deploy.py        # run a script with the shell builtins
"""

from pish.frontends.cli.main import main

__all__ = ["main"]
