"""Key identifiers understood by the chat input engine.

Keys are plain strings (``KeyId``). The host resolves its own key codes to
these names before delivering events; configuration files refer to keys by
the host's input names (``"T"``, ``"Enter"``, ``"ControlLeft"``...), which
:func:`key_from_name` maps onto the same identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass

KeyId = str


class Key:
    """Named key constants."""

    none = "none"

    # Editing keys
    left = "left"
    right = "right"
    up = "up"
    down = "down"
    home = "home"
    end = "end"
    backspace = "backspace"
    delete = "delete"
    tab = "tab"

    # Open / close triggers
    enter = "enter"
    kp_enter = "kp_enter"
    escape = "escape"
    slash = "slash"

    # Modifiers
    lctrl = "lctrl"
    rctrl = "rctrl"
    lshift = "lshift"
    rshift = "rshift"


MODIFIER_KEYS: frozenset[KeyId] = frozenset({
    Key.lctrl, Key.rctrl, Key.lshift, Key.rshift,
})

# Host input names, in host key-code order. Names not listed in _NAME_TO_KEY
# map to their lower-cased name so any key can be bound to open or send chat.
INPUT_NAMES: tuple[str, ...] = (
    "None",
    *(f"F{n}" for n in range(1, 36)),
    "ShiftLeft", "ShiftRight", "ControlLeft", "ControlRight",
    "AltLeft", "AltRight", "WinLeft", "WinRight",
    "Up", "Down", "Left", "Right",
    *(f"Number{n}" for n in range(10)),
    "Insert", "Delete", "Home", "End", "PageUp", "PageDown", "Menu",
    *(chr(c) for c in range(ord("A"), ord("Z") + 1)),
    "Enter", "Escape", "Space", "BackSpace", "Tab", "CapsLock", "ScrollLock",
    "PrintScreen", "Pause", "NumLock",
    *(f"Keypad{n}" for n in range(10)),
    "KeypadDivide", "KeypadMultiply", "KeypadSubtract", "KeypadAdd",
    "KeypadDecimal", "KeypadEnter",
    "Tilde", "Minus", "Plus", "BracketLeft", "BracketRight", "Slash",
    "Semicolon", "Quote", "Comma", "Period", "BackSlash",
    "XButton1", "XButton2", "LeftMouse", "RightMouse", "MiddleMouse",
)

_NAME_TO_KEY: dict[str, KeyId] = {
    "None": Key.none,
    "ShiftLeft": Key.lshift,
    "ShiftRight": Key.rshift,
    "ControlLeft": Key.lctrl,
    "ControlRight": Key.rctrl,
    "Up": Key.up,
    "Down": Key.down,
    "Left": Key.left,
    "Right": Key.right,
    "Delete": Key.delete,
    "Home": Key.home,
    "End": Key.end,
    "Enter": Key.enter,
    "Escape": Key.escape,
    "BackSpace": Key.backspace,
    "Tab": Key.tab,
    "KeypadEnter": Key.kp_enter,
    "Slash": Key.slash,
}


def key_from_name(name: str) -> KeyId | None:
    """Resolve a host input name (``"ControlLeft"``, ``"T"``) to a key id.

    Returns None for names the host does not know.
    """
    if name not in INPUT_NAMES:
        return None
    return _NAME_TO_KEY.get(name, name.lower())


@dataclass
class ModifierState:
    """Held state of the four tracked modifier keys."""

    lctrl: bool = False
    rctrl: bool = False
    lshift: bool = False
    rshift: bool = False

    def update(self, key: KeyId, down: bool) -> None:
        """Record a press or release; keys other than modifiers are ignored."""
        if key in MODIFIER_KEYS:
            setattr(self, key, down)

    @property
    def ctrl(self) -> bool:
        return self.lctrl or self.rctrl

    @property
    def shift(self) -> bool:
        return self.lshift or self.rshift
