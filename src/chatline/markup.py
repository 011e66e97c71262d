"""Conversion of ``&x`` colour markup to ANSI, and width-aware truncation."""

from __future__ import annotations

import re

import grapheme
import wcwidth as _wcwidth

_MARKUP_RE = re.compile(r"&([0-9a-fA-F])")
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\x1b[0m"

# Host colour codes to ANSI foreground colours.
_ANSI_COLOURS: dict[str, str] = {
    "0": "\x1b[30m",
    "1": "\x1b[34m",
    "2": "\x1b[32m",
    "3": "\x1b[36m",
    "4": "\x1b[31m",
    "5": "\x1b[35m",
    "6": "\x1b[33m",
    "7": "\x1b[37m",
    "8": "\x1b[90m",
    "9": "\x1b[94m",
    "a": "\x1b[92m",
    "b": "\x1b[96m",
    "c": "\x1b[91m",
    "d": "\x1b[95m",
    "e": "\x1b[93m",
    "f": "\x1b[97m",
}


def strip_markup(text: str) -> str:
    return _MARKUP_RE.sub("", text)


def markup_to_ansi(text: str) -> str:
    """Replace colour codes with ANSI escapes, resetting at the end."""
    if not _MARKUP_RE.search(text):
        return text
    converted = _MARKUP_RE.sub(lambda m: _ANSI_COLOURS[m.group(1).lower()], text)
    return converted + _RESET


def _grapheme_width(g: str) -> int:
    cp = ord(g[0])
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    if len(g) > 1 and ("\ufe0f" in g or "\u200d" in g):
        return 2
    return max(_wcwidth.wcswidth(g), 0)


def visible_width(text: str) -> int:
    """Terminal columns taken by ``text``, ignoring ANSI escapes."""
    stripped = _ANSI_RE.sub("", text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Cut ``text`` to ``max_width`` columns, keeping ANSI escapes intact."""
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - len(ellipsis)
    if target <= 0:
        return ellipsis[:max_width]

    result: list[str] = []
    cols = 0
    pos = 0
    for match in _ANSI_RE.finditer(text):
        cols = _take(text[pos : match.start()], target, cols, result)
        if cols >= target:
            break
        result.append(match.group(0))
        pos = match.end()
    else:
        _take(text[pos:], target, cols, result)

    has_ansi = any(part.startswith("\x1b") for part in result)
    return "".join(result) + (_RESET if has_ansi else "") + ellipsis


def _take(segment: str, target: int, cols: int, out: list[str]) -> int:
    for g in grapheme.graphemes(segment):
        w = _grapheme_width(g)
        if cols + w > target:
            return target
        out.append(g)
        cols += w
    return cols
