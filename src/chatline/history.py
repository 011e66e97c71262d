"""Submitted-message history with Up/Down navigation."""

from __future__ import annotations


class ChatHistory:
    """Append-only list of submitted messages, oldest first.

    ``position`` is 0 while the live buffer is shown and N while the N-th most
    recent entry is shown. The live buffer is snapshotted when navigation
    starts so that returning to position 0 restores it.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._position: int = 0
        self._restore: str | None = None

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def position(self) -> int:
        return self._position

    @property
    def restore(self) -> str | None:
        return self._restore

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, text: str) -> None:
        self._entries.append(text)

    def reset_navigation(self) -> None:
        self._position = 0
        self._restore = None

    def older(self, live_text: str) -> str | None:
        """Step to an older entry.

        Returns the text to show, or None when already at the oldest entry
        (the buffer is left as it is).
        """
        if self._position == 0:
            self._restore = live_text

        if self._position < len(self._entries):
            self._position += 1
            return self._entries[len(self._entries) - self._position]
        return None

    def newer(self, live_text: str) -> str:
        """Step to a more recent entry, or back to the live buffer."""
        if self._position > 1:
            self._position -= 1
            return self._entries[len(self._entries) - self._position]

        if self._position == 1:
            self._position = 0
            return self._restore if self._restore is not None else live_text

        return self._restore if self._restore is not None else ""
