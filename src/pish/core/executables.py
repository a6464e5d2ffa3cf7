"""Index of executables found on the search path.

Built once at startup. Later PATH changes made through ``set_env`` are not
reflected; the index is read-only for the life of the shell.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator

from pish.core.fuzzy import fuzzy_filter

logger = logging.getLogger(__name__)


def _is_executable(entry: os.DirEntry[str]) -> bool:
    try:
        if not entry.is_file():
            return False
        mode = entry.stat().st_mode
    except OSError:
        return False
    return bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)) and os.access(
        entry.path, os.X_OK
    )


def scan_directory(directory: str) -> list[str]:
    """List executable file names in one directory.

    Missing or unreadable directories yield nothing.
    """
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if _is_executable(entry)]
    except OSError as e:
        logger.debug("Skipping search path entry %r: %s", directory, e)
        return []


class ExecutableIndex:
    """Sorted, deduplicated set of executable names."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = sorted(set(names))
        self._lookup = frozenset(self._names)

    @classmethod
    def build(cls, search_path: str | None = None) -> ExecutableIndex:
        """Scan every directory of a colon-delimited search path.

        Args:
            search_path: Directories to scan. Defaults to $PATH.
        """
        if search_path is None:
            search_path = os.environ.get("PATH", "")
        directories = [d for d in dict.fromkeys(search_path.split(os.pathsep)) if d]

        names: list[str] = []
        for directory in directories:
            names.extend(scan_directory(directory))

        index = cls(names)
        logger.debug(
            "Indexed %d executables from %d directories", len(index), len(directories)
        )
        return index

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def fuzzy_find(self, pattern: str) -> list[str]:
        """Names matching pattern as a fuzzy subsequence, best first."""
        return fuzzy_filter(pattern, self._names)
