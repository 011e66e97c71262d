"""Tests for chatline.terminal -- decoding terminal input into host events."""

from __future__ import annotations

import pytest

from chatline.chat import ChatInput
from chatline.config import ChatOptions
from chatline.keys import Key, key_from_name
from chatline.terminal import KeyStroke, decode_token, deliver, key_for_char, split_input

from .fake_host import FakeSearch, RecordingHost


class TestSplitInput:
    def test_plain_characters(self) -> None:
        assert split_input("ab") == ["a", "b"]

    def test_arrow_between_characters(self) -> None:
        assert split_input("a\x1b[Db") == ["a", "\x1b[D", "b"]

    def test_ctrl_arrow(self) -> None:
        assert split_input("\x1b[1;5D\x1b[1;5C") == ["\x1b[1;5D", "\x1b[1;5C"]

    def test_delete_sequence(self) -> None:
        assert split_input("\x1b[3~") == ["\x1b[3~"]

    def test_lone_escape(self) -> None:
        assert split_input("\x1b") == ["\x1b"]

    def test_unknown_sequence_splits_after_escape(self) -> None:
        assert split_input("\x1b[99x") == ["\x1b", "[", "9", "9", "x"]


class TestDecodeToken:
    @pytest.mark.parametrize(
        "token, stroke",
        [
            ("\x1b[A", KeyStroke(Key.up)),
            ("\x1b[1;5D", KeyStroke(Key.left, Key.lctrl)),
            ("\x1b[Z", KeyStroke(Key.tab, Key.lshift)),
            ("\x7f", KeyStroke(Key.backspace)),
            ("\x17", KeyStroke(Key.backspace, Key.lctrl)),
            ("\r", KeyStroke(Key.enter)),
            ("\x1b", KeyStroke(Key.escape)),
            ("/", KeyStroke(Key.slash, char="/")),
            ("K", KeyStroke("k", char="K")),
            (" ", KeyStroke("space", char=" ")),
        ],
    )
    def test_known_tokens(self, token: str, stroke: KeyStroke) -> None:
        assert decode_token(token) == stroke

    def test_unprintable_ignored(self) -> None:
        assert decode_token("\x01") is None

    def test_key_for_char(self) -> None:
        assert key_for_char("/") == Key.slash
        assert key_for_char("A") == "a"
        assert key_for_char("1") == "number1"
        assert key_for_char("_") == "minus"


class TestDeliver:
    """Decoded strokes drive the chat input like a game client would."""

    @pytest.mark.asyncio
    async def test_typing_session(self) -> None:
        host = RecordingHost()
        chat = ChatInput(ChatOptions("t", Key.enter), FakeSearch(["hello world"]), host)

        for token in split_input("thello world\x17\x1b[1;5D"):
            await deliver(chat, decode_token(token))

        assert chat.is_open
        assert chat.text == "hello "
        assert chat.cursor == 0
        assert not chat.modifiers.ctrl

        await deliver(chat, decode_token("\r"))
        assert chat.history == ["hello "]
        assert chat.is_open is False

    @pytest.mark.asyncio
    async def test_shift_tab_cycles_backwards(self) -> None:
        host = RecordingHost()
        chat = ChatInput(
            ChatOptions("t", Key.enter), FakeSearch(["abc 1", "abc 2", "abc 3"]), host
        )
        for token in split_input("tabc\x1b[Z"):
            await deliver(chat, decode_token(token))
        assert chat.text == "abc 2"


class TestBoundKeys:
    """Keys bound by input name open chat when typed at the terminal."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("name", "typed"), [("Number1", "1"), ("Minus", "-")])
    async def test_named_open_key(self, name: str, typed: str) -> None:
        chat = ChatInput(ChatOptions(key_from_name(name), Key.enter), FakeSearch([]), RecordingHost())

        await deliver(chat, decode_token(typed))

        assert chat.is_open
        assert chat.text == ""
