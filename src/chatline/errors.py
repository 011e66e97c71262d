"""Exception types raised by chatline."""

from __future__ import annotations


class ChatlineError(Exception):
    """Base class for chatline errors."""


class InvariantViolation(ChatlineError):
    """Internal state disagrees with itself.

    Raised by the buffer and hint renderer; the chat engine reports it through
    the host's diagnostic sink and abandons the current event.
    """


class ConfigError(ChatlineError):
    """An options file exists but cannot be read or parsed."""
