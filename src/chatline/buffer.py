"""Single-line text buffer with a cursor and space-delimited word motion."""

from __future__ import annotations

from chatline.errors import InvariantViolation

WORD_SEPARATOR = " "


class TextBuffer:
    """Editable sequence of code points with an insertion cursor.

    The cursor always satisfies ``0 <= cursor <= len(text)``. Words are
    separated by the space character only.
    """

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self._cursor: int = len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._chars)

    def clear(self) -> None:
        self._chars.clear()
        self._cursor = 0

    def replace(self, text: str) -> None:
        """Replace the whole content and move the cursor to the end."""
        self._chars = list(text)
        self._cursor = len(self._chars)

    # -- Editing -------------------------------------------------------------

    def insert(self, char: str) -> None:
        if self._cursor > len(self._chars):
            raise InvariantViolation(f"cursor {self._cursor} > length {len(self._chars)}")
        self._chars.insert(self._cursor, char)
        self._cursor += 1

    def remove_before(self) -> None:
        """Backspace: remove the character left of the cursor."""
        if self._cursor > 0:
            del self._chars[self._cursor - 1]
            self._cursor -= 1

    def remove_at(self) -> None:
        """Forward delete: remove the character under the cursor."""
        if self._cursor < len(self._chars):
            del self._chars[self._cursor]

    def remove_word_before(self) -> None:
        """Delete back to the start of the previous word.

        Scans like :meth:`move_word_left` but removes each character it
        passes; the space that ends the scan is kept.
        """
        found_non_space = False
        while self._cursor > 0:
            char = self._chars[self._cursor - 1]
            if char == WORD_SEPARATOR and found_non_space:
                break
            if char != WORD_SEPARATOR:
                found_non_space = True
            del self._chars[self._cursor - 1]
            self._cursor -= 1

    # -- Cursor movement -----------------------------------------------------

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._chars):
            self._cursor += 1

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._chars)

    def move_word_left(self) -> None:
        # The terminating space is stepped over too, so the cursor lands
        # just before it.
        found_non_space = False
        while self._cursor > 0:
            char = self._chars[self._cursor - 1]
            self._cursor -= 1
            if char == WORD_SEPARATOR and found_non_space:
                break
            if char != WORD_SEPARATOR:
                found_non_space = True

    def move_word_right(self) -> None:
        found_space = False
        while self._cursor < len(self._chars):
            char = self._chars[self._cursor]
            if char != WORD_SEPARATOR and found_space:
                break
            if char == WORD_SEPARATOR:
                found_space = True
            self._cursor += 1
