"""Chat key bindings. Stored at ~/.chatline/options.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from chatline.errors import ConfigError
from chatline.keys import Key, KeyId, key_from_name

logger = logging.getLogger(__name__)

OPEN_CHAT_OPTION = "key-Chat"
SEND_CHAT_OPTION = "key-SendChat"


@dataclass
class ChatOptions:
    """Resolved key bindings; None when the option is unset or unknown."""

    open_chat_key: KeyId | None = None
    send_chat_key: KeyId | None = None

    @property
    def open_key(self) -> KeyId:
        return self.open_chat_key or Key.none

    @property
    def send_key(self) -> KeyId:
        return self.send_chat_key or Key.none


def _resolve(data: dict, option: str) -> KeyId | None:
    name = data.get(option)
    if not name:
        return None
    key = key_from_name(name)
    if key is None:
        logger.warning("Unknown key name %r for %s", name, option)
    return key


def options_from_dict(data: dict) -> ChatOptions:
    """Resolve host key names from a JSON-compatible dict."""
    return ChatOptions(
        open_chat_key=_resolve(data, OPEN_CHAT_OPTION),
        send_chat_key=_resolve(data, SEND_CHAT_OPTION),
    )


def get_config_dir() -> Path:
    return Path(os.environ.get("CHATLINE_CONFIG_DIR", Path.home() / ".chatline"))


def read_options(path: Path) -> ChatOptions:
    """Read an options file, raising ConfigError if it is unreadable."""
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return options_from_dict(data)


def load_options(config_dir: Path | None = None) -> ChatOptions:
    """Load options, falling back to unbound keys on any problem."""
    path = (config_dir or get_config_dir()) / "options.json"
    if not path.exists():
        return ChatOptions()
    try:
        return read_options(path)
    except ConfigError as e:
        logger.error("%s", e)
        return ChatOptions()
