"""Keeps the host's own chat input in step with the engine's buffer."""

from __future__ import annotations

from chatline.host import Host
from chatline.keys import Key
from chatline.search import MAX_CHAT_INPUT


class KeystrokeMirror:
    """Rewrites the host's visible input by replaying keystrokes.

    The host input is cleared with an End press followed by enough Backspace
    presses to empty a full-length message, then the new text is typed one
    character at a time. ``simulating`` is True while the replay runs so that
    the host's echoes of these keystrokes can be told apart from real input.
    """

    def __init__(self, host: Host) -> None:
        self._host = host
        self.simulating: bool = False

    def set_text(self, text: str) -> None:
        self.simulating = True
        try:
            self._host.simulate_key(Key.end)
            for _ in range(MAX_CHAT_INPUT):
                self._host.simulate_key(Key.backspace)
            for char in text:
                self._host.simulate_char(char)
        finally:
            self.simulating = False
