"""Raw-mode terminal host for the chat input.

Reads stdin in raw mode, turns the bytes into the key-down / character /
key-up events a game client would deliver, and draws the input line with the
hint status line below it. Terminals report modifiers as part of the key
sequence, so ``ctrl+left`` becomes a left-ctrl press wrapped around the
arrow key.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from dataclasses import dataclass

from chatline.chat import ChatInput
from chatline.keys import Key, KeyId
from chatline.markup import markup_to_ansi, truncate_to_width

logger = logging.getLogger(__name__)

_CLEAR_LINE = "\x1b[2K\r"
_CURSOR_UP = "\x1b[1A"
_CURSOR_COLUMN_FMT = "\x1b[{}G"

PROMPT = "> "

# Escape sequences -> (key, modifier held around it)
ESCAPE_SEQUENCES: dict[str, tuple[KeyId, KeyId | None]] = {
    "\x1b[A": (Key.up, None),
    "\x1b[B": (Key.down, None),
    "\x1b[C": (Key.right, None),
    "\x1b[D": (Key.left, None),
    "\x1b[H": (Key.home, None),
    "\x1b[F": (Key.end, None),
    "\x1bOA": (Key.up, None),
    "\x1bOB": (Key.down, None),
    "\x1bOC": (Key.right, None),
    "\x1bOD": (Key.left, None),
    "\x1bOH": (Key.home, None),
    "\x1bOF": (Key.end, None),
    "\x1bOM": (Key.kp_enter, None),
    "\x1b[1~": (Key.home, None),
    "\x1b[4~": (Key.end, None),
    "\x1b[3~": (Key.delete, None),
    "\x1b[Z": (Key.tab, Key.lshift),
    "\x1b[1;5A": (Key.up, Key.lctrl),
    "\x1b[1;5B": (Key.down, Key.lctrl),
    "\x1b[1;5C": (Key.right, Key.lctrl),
    "\x1b[1;5D": (Key.left, Key.lctrl),
}

CONTROL_CHARACTERS: dict[str, tuple[KeyId, KeyId | None]] = {
    "\r": (Key.enter, None),
    "\n": (Key.enter, None),
    "\t": (Key.tab, None),
    "\x7f": (Key.backspace, None),
    "\x08": (Key.backspace, Key.lctrl),
    "\x17": (Key.backspace, Key.lctrl),
    "\x1b": (Key.escape, None),
}

QUIT_CHARACTERS = frozenset({"\x03", "\x04"})


@dataclass(frozen=True)
class KeyStroke:
    """One key press decoded from terminal input."""

    key: KeyId
    modifier: KeyId | None = None
    char: str | None = None


# Characters whose key has a host input name other than the character itself,
# so bindings such as "Number1" or "Minus" match what the terminal types.
CHARACTER_KEYS: dict[str, KeyId] = {
    **{str(n): f"number{n}" for n in range(10)},
    " ": "space",
    "/": Key.slash,
    "-": "minus",
    "_": "minus",
    "=": "plus",
    "+": "plus",
    "`": "tilde",
    "~": "tilde",
    "[": "bracketleft",
    "]": "bracketright",
    "\\": "backslash",
    ";": "semicolon",
    "'": "quote",
    ",": "comma",
    ".": "period",
}


def key_for_char(char: str) -> KeyId:
    return CHARACTER_KEYS.get(char, char.lower())


def split_input(data: str) -> list[str]:
    """Split a chunk of terminal input into individual key sequences."""
    tokens: list[str] = []
    i = 0
    while i < len(data):
        if data[i] == "\x1b":
            for length in (6, 4, 3):
                if data[i : i + length] in ESCAPE_SEQUENCES:
                    tokens.append(data[i : i + length])
                    i += length
                    break
            else:
                tokens.append("\x1b")
                i += 1
        else:
            tokens.append(data[i])
            i += 1
    return tokens


def decode_token(token: str) -> KeyStroke | None:
    if token in ESCAPE_SEQUENCES:
        key, modifier = ESCAPE_SEQUENCES[token]
        return KeyStroke(key, modifier)
    if token in CONTROL_CHARACTERS:
        key, modifier = CONTROL_CHARACTERS[token]
        return KeyStroke(key, modifier)
    if token.isprintable():
        return KeyStroke(key_for_char(token), char=token)
    return None


async def deliver(chat: ChatInput, stroke: KeyStroke) -> None:
    """Feed one key stroke to the chat input as host events."""
    if stroke.modifier is not None:
        await chat.on_key_down(stroke.modifier)
    await chat.on_key_down(stroke.key)
    if stroke.char is not None:
        await chat.on_character_press(stroke.char)
    await chat.on_key_up(stroke.key)
    if stroke.modifier is not None:
        await chat.on_key_up(stroke.modifier)


class TerminalHost:
    """Host implementation drawing to a terminal.

    The input line shown is the chat input's own buffer, so simulated
    keystrokes have no separate widget to update and are only logged.
    """

    def __init__(self) -> None:
        self.chat: ChatInput | None = None
        self._status: str = ""
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._original_termios: list | None = None
        self._sent_count: int = 0

    # -- Host protocol -----------------------------------------------------

    def emit_status(self, text: str, persistent: bool) -> None:
        self._status = text

    def emit_diagnostic(self, message: str) -> None:
        self._write(f"{_CLEAR_LINE}\x1b[31m{message}\x1b[0m\r\n")

    def simulate_key(self, key: KeyId) -> None:
        logger.debug("simulate key %s", key)

    def simulate_char(self, char: str) -> None:
        logger.debug("simulate char %r", char)

    # -- Terminal ----------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    def _write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()

    def start(self) -> None:
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        asyncio.get_running_loop().add_reader(fd, self._on_readable)

    def stop(self) -> None:
        fd = sys.stdin.fileno()
        asyncio.get_running_loop().remove_reader(fd)
        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        self._write(f"{_CLEAR_LINE}\r\n{_CLEAR_LINE}")

    def _on_readable(self) -> None:
        data = os.read(sys.stdin.fileno(), 4096).decode("utf-8", errors="replace")
        if not data:
            self._queue.put_nowait(None)
            return
        for token in split_input(data):
            self._queue.put_nowait(None if token in QUIT_CHARACTERS else token)

    async def run(self, chat: ChatInput) -> None:
        """Process input until ctrl+c or ctrl+d."""
        self.chat = chat
        self.start()
        try:
            self.render()
            while True:
                token = await self._queue.get()
                if token is None:
                    break
                stroke = decode_token(token)
                if stroke is None:
                    continue
                await deliver(chat, stroke)
                self._print_sent()
                self.render()
        finally:
            self.stop()

    def _print_sent(self) -> None:
        history = self.chat.history
        for message in history[self._sent_count :]:
            self._write(f"{_CLEAR_LINE}\r\n{_CLEAR_LINE}{_CURSOR_UP}{message}\r\n")
        self._sent_count = len(history)

    def render(self) -> None:
        chat = self.chat
        width = self.columns
        if chat.is_open:
            line = PROMPT + chat.text
            status = markup_to_ansi(self._status)
            column = len(PROMPT) + chat.cursor + 1
        else:
            line = "press t or / to chat, ctrl+c to quit"
            status = ""
            column = 1
        self._write(
            _CLEAR_LINE
            + truncate_to_width(line, width)
            + "\r\n"
            + _CLEAR_LINE
            + truncate_to_width(status, width)
            + _CURSOR_UP
            + _CURSOR_COLUMN_FMT.format(min(column, width))
        )
