"""Search providers for autocomplete hints.

A provider takes the trimmed chat input and returns ``(offset, text)`` pairs,
where ``offset`` is the position of the query inside ``text``. Providers may
be plain callables or coroutine functions.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import re
from collections.abc import Awaitable, Iterable, Sequence
from typing import Callable, Union

from chatline.hints import Hint

logger = logging.getLogger(__name__)

# Longest message the host's chat input accepts.
MAX_CHAT_INPUT = 192

# Shortest trimmed input that triggers a search.
MIN_QUERY_LENGTH = 2

SearchResults = Sequence[tuple[int, str]]
SearchProvider = Callable[[str], Union[SearchResults, Awaitable[SearchResults]]]

_WORD_BOUNDARY_RE = re.compile(r"[\s\-_./:]")


def search_query(text: str) -> str | None:
    """Return the query to search for, or None when the input is too short."""
    query = text.strip(" ")
    if len(query) < MIN_QUERY_LENGTH:
        return None
    return query


def fit_results(results: Iterable[tuple[int, str]]) -> list[Hint]:
    """Drop candidates that could not be typed back into the chat input."""
    return [
        Hint(offset=offset, text=text)
        for offset, text in results
        if len(text) <= MAX_CHAT_INPUT
    ]


async def run_search(provider: SearchProvider, query: str) -> list[Hint]:
    """Call the provider once and return the usable hints.

    A provider that raises is logged and treated as having found nothing.
    """
    try:
        results = provider(query)
        if inspect.isawaitable(results):
            results = await results
    except Exception:
        logger.exception("Search provider failed for %r", query)
        return []
    hints = fit_results(results)
    logger.debug("Search %r: %d hints", query, len(hints))
    return hints


def _match_score(text: str, offset: int) -> float:
    """Lower is better: word-start matches first, then earlier, then shorter."""
    score = offset * 0.1 + len(text) * 0.01
    if offset == 0 or _WORD_BOUNDARY_RE.match(text[offset - 1]):
        score -= 10
    return score


class SoundIndex:
    """In-memory substring index over sound names.

    Searches are serialised behind a lock so the index can be reloaded while
    the chat input is awaiting a search.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = []
        self._lock = asyncio.Lock()
        self._load(names)

    def _load(self, names: Iterable[str]) -> None:
        seen: set[str] = set()
        self._names = []
        for name in names:
            name = name.strip()
            if name and name not in seen:
                seen.add(name)
                self._names.append(name)

    @classmethod
    def from_file(cls, path: str) -> SoundIndex:
        """Build an index from a file with one sound name per line."""
        with open(path, encoding="utf-8") as f:
            return cls(f.read().splitlines())

    def __len__(self) -> int:
        return len(self._names)

    async def reload(self, names: Iterable[str]) -> None:
        async with self._lock:
            self._load(names)
            logger.info("Sound index loaded with %d names", len(self._names))

    async def search(self, query: str) -> list[tuple[int, str]]:
        """Return ``(offset, name)`` for every name containing ``query``."""
        if not query:
            return []
        async with self._lock:
            matches: list[tuple[float, int, str]] = []
            for name in self._names:
                offset = name.find(query)
                if offset != -1:
                    matches.append((_match_score(name, offset), offset, name))
        matches.sort(key=lambda m: m[0])
        return [(offset, name) for _, offset, name in matches]
