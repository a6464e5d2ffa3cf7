"""pish - an interactive shell whose scripting language is Python.

Every line typed at the prompt is compiled and run in one persistent Python
namespace. Programs on $PATH are bound as callables, and a small set of
builtins covers the rest of what a shell does.

Layers:
    core/       Runtime, bridge, history, executable index, configuration
    frontends/  Terminal line editor and command-line entry point

Example:
    > ls("-la")
    > cd("~/src")
    > [f for f in history() if f.startswith("git")]
"""

from pish.__version__ import __version__

__all__ = ["__version__"]
