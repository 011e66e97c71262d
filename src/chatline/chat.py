"""Chat input engine: line editing, history and autocomplete hints.

The engine mirrors the host's chat input. It is fed the same key events the
host sees, keeps its own copy of the text being typed, searches for hints
whenever that text changes, and shows the selected hint on the host's status
line. Tab and Shift+Tab cycle through hints by rewriting the host's input.

Events must be delivered one at a time: each handler is awaited to
completion, including any hint search, before the next event is passed in.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from chatline.buffer import TextBuffer
from chatline.config import ChatOptions
from chatline.errors import InvariantViolation
from chatline.hints import HintSet, compose_status
from chatline.history import ChatHistory
from chatline.host import Host, LoggingHost
from chatline.keys import Key, KeyId, ModifierState
from chatline.mirror import KeystrokeMirror
from chatline.search import SearchProvider, run_search, search_query

logger = logging.getLogger(__name__)


class ChatInput:
    """Line editor state machine for the host's chat input."""

    def __init__(
        self,
        options: ChatOptions,
        search: SearchProvider,
        host: Host | None = None,
    ) -> None:
        self._open_key: KeyId = options.open_key
        self._send_key: KeyId = options.send_key
        self._search = search
        self._host: Host = host or LoggingHost()
        self._mirror = KeystrokeMirror(self._host)

        self._open: bool = False
        self._dedupe_open_key: bool = False
        self._buffer = TextBuffer()
        self._history = ChatHistory()
        self._hints: HintSet | None = None
        self._modifiers = ModifierState()

        self._handlers: dict[KeyId, Callable[[], Awaitable[None]]] = {
            Key.left: self._on_left,
            Key.right: self._on_right,
            Key.backspace: self._on_backspace,
            Key.delete: self._on_delete,
            Key.home: self._on_home,
            Key.end: self._on_end,
            Key.up: self._on_up,
            Key.down: self._on_down,
            Key.tab: self._on_tab,
        }

    # -- State -------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def history(self) -> list[str]:
        return self._history.entries

    @property
    def history_position(self) -> int:
        return self._history.position

    @property
    def hints(self) -> HintSet | None:
        return self._hints

    @property
    def modifiers(self) -> ModifierState:
        return self._modifiers

    @property
    def simulating(self) -> bool:
        """True while keystrokes are being replayed into the host."""
        return self._mirror.simulating

    # -- Host events -------------------------------------------------------

    async def on_key_down(self, key: KeyId, repeat: bool = False) -> None:
        if self._mirror.simulating:
            return

        if not repeat:
            if not self._open and self._is_open_trigger(key):
                self._open_chat(key)
                return

            # Send and escape only close an open chat; while closed they are
            # ordinary keys and leave history alone.
            if self._open and key != Key.none:
                if key in (self._send_key, Key.kp_enter):
                    self._close_chat(submit=True)
                    return
                if key == Key.escape:
                    self._close_chat(submit=False)
                    return

            self._modifiers.update(key, True)

        if self._open:
            handler = self._handlers.get(key)
            if handler is not None:
                await handler()

    async def on_key_up(self, key: KeyId) -> None:
        if self._mirror.simulating:
            return
        self._modifiers.update(key, False)

    async def on_character_press(self, char: str) -> None:
        if self._mirror.simulating or not self._open:
            return

        if self._dedupe_open_key:
            self._dedupe_open_key = False
            return

        if self._insert(char):
            await self._refresh_hints()

    # -- Open / close ------------------------------------------------------

    def _is_open_trigger(self, key: KeyId) -> bool:
        return key == Key.slash or (key != Key.none and key == self._open_key)

    def _reset(self) -> None:
        self._buffer.clear()
        self._history.reset_navigation()
        self._hints = None

    def _open_chat(self, key: KeyId) -> None:
        self._open = True
        self._reset()

        if key == Key.slash:
            self._insert("/")

        # The host also delivers a character for the key that opened chat,
        # except for Enter which has none.
        if key != Key.enter:
            self._dedupe_open_key = True

        logger.debug("Chat opened by %s", key)
        self._render_hints()

    def _close_chat(self, submit: bool) -> None:
        if submit:
            self._history.append(self._buffer.text)
            logger.debug("Chat sent: %r", self._buffer.text)
        else:
            logger.debug("Chat cancelled")

        self._open = False
        self._reset()
        self._render_hints()

    # -- Editing keys ------------------------------------------------------

    async def _on_left(self) -> None:
        if self._modifiers.ctrl:
            self._buffer.move_word_left()
        else:
            self._buffer.move_left()

    async def _on_right(self) -> None:
        if self._modifiers.ctrl:
            self._buffer.move_word_right()
        else:
            self._buffer.move_right()

    async def _on_backspace(self) -> None:
        if self._modifiers.ctrl:
            self._buffer.remove_word_before()
        else:
            self._buffer.remove_before()
        await self._refresh_hints()

    async def _on_delete(self) -> None:
        self._buffer.remove_at()
        await self._refresh_hints()

    async def _on_home(self) -> None:
        self._buffer.move_home()

    async def _on_end(self) -> None:
        self._buffer.move_end()

    async def _on_up(self) -> None:
        if self._modifiers.ctrl:
            return

        text = self._history.older(self._buffer.text)
        if text is not None:
            self._buffer.replace(text)
        await self._refresh_hints()

    async def _on_down(self) -> None:
        if self._modifiers.ctrl:
            self._buffer.move_end()
            return

        self._buffer.replace(self._history.newer(self._buffer.text))
        await self._refresh_hints()

    async def _on_tab(self) -> None:
        if self._hints is not None:
            hint = self._hints.cycle(reverse=self._modifiers.shift)
            self._set_text(hint.text)
        self._render_hints()

    # -- Helpers -----------------------------------------------------------

    def _insert(self, char: str) -> bool:
        try:
            self._buffer.insert(char)
        except InvariantViolation as e:
            self._report(e)
            return False
        return True

    def _set_text(self, text: str) -> None:
        self._mirror.set_text(text)
        self._buffer.replace(text)

    async def _refresh_hints(self) -> None:
        self._hints = None

        query = search_query(self._buffer.text)
        if query is not None:
            hints = await run_search(self._search, query)
            if hints:
                self._hints = HintSet(query=query, candidates=hints)

        self._render_hints()

    def _render_hints(self) -> None:
        try:
            status = compose_status(self._hints)
        except InvariantViolation as e:
            self._report(e)
            return
        self._host.emit_status(status, True)

    def _report(self, error: InvariantViolation) -> None:
        logger.warning("Invariant violation: %s", error)
        self._host.emit_diagnostic(str(error))
