"""Interface to the application that embeds the chat input."""

from __future__ import annotations

import logging
from typing import Protocol

from chatline.keys import KeyId

logger = logging.getLogger(__name__)


class Host(Protocol):
    """Rendering sinks and keystroke simulation provided by the host."""

    def emit_status(self, text: str, persistent: bool) -> None: ...

    def emit_diagnostic(self, message: str) -> None: ...

    def simulate_key(self, key: KeyId) -> None: ...

    def simulate_char(self, char: str) -> None: ...


class LoggingHost:
    """Host that only logs. Useful when no UI is attached."""

    def __init__(self) -> None:
        self.status: str = ""

    def emit_status(self, text: str, persistent: bool) -> None:
        self.status = text
        logger.debug("status (persistent=%s): %r", persistent, text)

    def emit_diagnostic(self, message: str) -> None:
        logger.warning("chat input: %s", message)

    def simulate_key(self, key: KeyId) -> None:
        pass

    def simulate_char(self, char: str) -> None:
        pass
