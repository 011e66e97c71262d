"""Tests for chatline.config -- key binding options."""

from __future__ import annotations

import json
import logging

import pytest

from chatline.config import ChatOptions, load_options, options_from_dict, read_options
from chatline.errors import ConfigError
from chatline.keys import Key


class TestOptionsFromDict:
    def test_resolves_key_names(self) -> None:
        options = options_from_dict({"key-Chat": "T", "key-SendChat": "Enter"})
        assert options.open_chat_key == "t"
        assert options.send_chat_key == Key.enter

    def test_missing_options_are_unbound(self) -> None:
        options = options_from_dict({})
        assert options.open_chat_key is None
        assert options.send_chat_key is None
        assert options.open_key == Key.none
        assert options.send_key == Key.none

    def test_unknown_name_is_unbound(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="chatline.config"):
            options = options_from_dict({"key-Chat": "Hyper"})
        assert options.open_chat_key is None
        assert "Unknown key name" in caplog.text

    def test_empty_name_is_unbound(self) -> None:
        assert options_from_dict({"key-Chat": ""}).open_chat_key is None


class TestLoadOptions:
    """Options file handling and fallbacks."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_options(tmp_path) == ChatOptions()

    def test_reads_file(self, tmp_path) -> None:
        (tmp_path / "options.json").write_text(
            json.dumps({"key-Chat": "Y", "key-SendChat": "KeypadEnter"})
        )
        options = load_options(tmp_path)
        assert options.open_key == "y"
        assert options.send_key == Key.kp_enter

    def test_env_config_dir(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "options.json").write_text(json.dumps({"key-Chat": "Slash"}))
        monkeypatch.setenv("CHATLINE_CONFIG_DIR", str(tmp_path))
        assert load_options().open_key == Key.slash

    def test_malformed_file_falls_back(self, tmp_path, caplog) -> None:
        (tmp_path / "options.json").write_text("{not json")
        with caplog.at_level(logging.ERROR, logger="chatline.config"):
            assert load_options(tmp_path) == ChatOptions()
        assert "Cannot read" in caplog.text

    def test_read_options_rejects_non_object(self, tmp_path) -> None:
        path = tmp_path / "options.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            read_options(path)
