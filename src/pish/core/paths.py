"""Tilde and environment expansion for user supplied paths."""

from __future__ import annotations

import os
from pathlib import Path


def expand(path: str) -> str:
    """Expand ``~`` and ``$VAR``/``${VAR}`` references in a string.

    Unknown variables are left untouched.

    Example:
        >>> expand("~/notes")  # doctest: +SKIP
        '/home/me/notes'
    """
    return os.path.expanduser(os.path.expandvars(path))


def expand_path(path: str) -> Path:
    """Expand a string and return it as a Path."""
    return Path(expand(path))
