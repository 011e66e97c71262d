"""chatline: chat input line editor with incremental-search autocomplete."""

from chatline.buffer import TextBuffer
from chatline.chat import ChatInput
from chatline.config import ChatOptions, load_options, options_from_dict
from chatline.errors import ChatlineError, ConfigError, InvariantViolation
from chatline.hints import Hint, HintSet, compose_status
from chatline.history import ChatHistory
from chatline.host import Host, LoggingHost
from chatline.keys import Key, KeyId, ModifierState, key_from_name
from chatline.mirror import KeystrokeMirror
from chatline.search import MAX_CHAT_INPUT, SearchProvider, SoundIndex

__all__ = [
    "MAX_CHAT_INPUT",
    "ChatHistory",
    "ChatInput",
    "ChatOptions",
    "ChatlineError",
    "ConfigError",
    "Hint",
    "HintSet",
    "Host",
    "InvariantViolation",
    "Key",
    "KeyId",
    "KeystrokeMirror",
    "LoggingHost",
    "ModifierState",
    "SearchProvider",
    "SoundIndex",
    "TextBuffer",
    "compose_status",
    "key_from_name",
    "load_options",
    "options_from_dict",
]
