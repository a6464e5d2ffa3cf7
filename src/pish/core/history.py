"""Input line history.

HistoryStore keeps submitted lines oldest first and a navigation pointer
counting steps back from the live buffer:

- pointer 0: not navigating, the editor shows the live buffer
- pointer n (1..len): the editor shows entries[len - n]

When navigation starts (0 -> 1) the live buffer is stashed; it comes back
when navigation returns to 0. Navigation never modifies the entries.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pish.core.errors import HistoryError

logger = logging.getLogger(__name__)


class HistoryStore:
    """Ordered, persisted log of submitted lines with up/down navigation."""

    def __init__(self, entries: list[str] | None = None, path: Path | None = None) -> None:
        self._entries: list[str] = list(entries or [])
        self._path = path
        self._pointer = 0
        self._stashed = ""

    @classmethod
    def load(cls, path: Path) -> HistoryStore:
        """Read the history file if present; otherwise start empty.

        Blank lines in the file are skipped.

        Raises:
            HistoryError: If the file exists but cannot be read.
        """
        entries: list[str] = []
        if path.exists():
            try:
                entries = [line for line in path.read_text().splitlines() if line]
            except (OSError, UnicodeDecodeError) as e:
                raise HistoryError(f"Failed to read history {path}: {e}") from e
        logger.debug("Loaded %d history entries from %s", len(entries), path)
        return cls(entries, path=path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def pointer(self) -> int:
        return self._pointer

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, line: str) -> None:
        """Append a submitted line. Empty lines are ignored."""
        if not line:
            return
        self._entries.append(line)

    def all(self) -> list[str]:
        """Snapshot of all entries, oldest first."""
        return list(self._entries)

    def persist(self) -> None:
        """Overwrite the backing file with all entries joined by newlines.

        Raises:
            HistoryError: If the file cannot be written.
        """
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("\n".join(self._entries))
        except OSError as e:
            raise HistoryError(f"Failed to write history {self._path}: {e}") from e
        logger.debug("Persisted %d history entries to %s", len(self._entries), self._path)

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate_up(self, current: str) -> str | None:
        """Step one entry older.

        Args:
            current: The live buffer text, stashed when navigation starts.

        Returns:
            The entry to show, or None if already at the oldest entry.
        """
        if self._pointer == len(self._entries):
            return None
        self._pointer += 1
        if self._pointer == 1:
            self._stashed = current
        return self._entries[len(self._entries) - self._pointer]

    def navigate_down(self) -> str | None:
        """Step one entry newer.

        Returns:
            The entry to show (the stashed line when reaching the bottom),
            or None if not navigating.
        """
        if self._pointer == 0:
            return None
        self._pointer -= 1
        if self._pointer == 0:
            return self._stashed
        return self._entries[len(self._entries) - self._pointer]

    def reset_pointer(self) -> None:
        self._pointer = 0
