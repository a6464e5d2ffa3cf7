"""Editable input line with a cursor counted from the end."""

from __future__ import annotations


class EditBuffer:
    """Line being composed plus a cursor offset measured from the end.

    Invariant: ``0 <= offset <= len(text)``. Offset 0 puts the cursor after
    the last character; moving left increases the offset. Keeping the
    cursor relative to the end means typing never moves it away from the
    text that follows it. ``insertion_index`` converts to an absolute index.
    """

    def __init__(self, text: str = "", offset: int = 0) -> None:
        self._text = text
        self._offset = 0
        self.offset = offset

    @property
    def text(self) -> str:
        return self._text

    @property
    def offset(self) -> int:
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        self._offset = max(0, min(value, len(self._text)))

    @property
    def insertion_index(self) -> int:
        """Absolute index new characters are inserted at."""
        return len(self._text) - self._offset

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def at_start(self) -> bool:
        return self._offset == len(self._text)

    def at_end(self) -> bool:
        return self._offset == 0

    def move_left(self) -> bool:
        """Move one character towards the start. Returns False at the bound."""
        if self.at_start():
            return False
        self._offset += 1
        return True

    def move_right(self) -> bool:
        """Move one character towards the end. Returns False at the bound."""
        if self.at_end():
            return False
        self._offset -= 1
        return True

    def insert(self, chars: str) -> None:
        """Insert at the cursor; trailing text keeps its offset."""
        index = self.insertion_index
        self._text = self._text[:index] + chars + self._text[index:]

    def backspace(self) -> bool:
        """Remove the character before the cursor. Returns False if none."""
        index = self.insertion_index
        if index == 0:
            return False
        self._text = self._text[: index - 1] + self._text[index:]
        return True

    def delete(self) -> bool:
        """Remove the character after the cursor. Returns False if none."""
        if self.at_end():
            return False
        index = self.insertion_index
        self._text = self._text[:index] + self._text[index + 1 :]
        self._offset -= 1
        return True

    def replace(self, text: str) -> None:
        """Swap in new text with the cursor at the end."""
        self._text = text
        self._offset = 0

    def __repr__(self) -> str:
        return f"EditBuffer(text={self._text!r}, offset={self._offset})"
