"""Autocomplete hint set, Tab cycling and status-line composition."""

from __future__ import annotations

from dataclasses import dataclass

from chatline.errors import InvariantViolation

# Host colour codes: muted grey for context around the match, white for the
# typed query.
MUTED = "&7"
BRIGHT = "&f"

# Status lines wider than this are cut off by the host.
STATUS_WIDTH = 64


@dataclass(frozen=True)
class Hint:
    offset: int
    text: str


@dataclass
class HintSet:
    """Search results for ``query`` and the currently selected candidate."""

    query: str
    candidates: list[Hint]
    position: int = 0

    def cycle(self, reverse: bool = False) -> Hint:
        """Advance (or with ``reverse`` go back) one candidate, wrapping.

        Returns the candidate whose text should replace the input: the one
        just before the new position. A forward step therefore fills in the
        candidate that was highlighted before the step.
        """
        count = len(self.candidates)
        step = -1 if reverse else 1
        self.position = (self.position + step) % count
        return self.candidates[(self.position - 1) % count]

    def current(self) -> Hint:
        if not 0 <= self.position < len(self.candidates):
            raise InvariantViolation(
                f"hint position {self.position} out of range for {len(self.candidates)} hints"
            )
        return self.candidates[self.position]


def compose_status(hints: HintSet | None) -> str:
    """Build the coloured status line that shows the selected hint.

    The query is shown bright with the rest of the candidate muted around it.
    Raises InvariantViolation when the stored match offset no longer agrees
    with where the query occurs in the candidate.
    """
    if hints is None:
        return ""

    query = hints.query
    query_len = len(query)
    hint = hints.current()

    found = hint.text.find(query)
    actual = found if found != -1 else None
    if hint.offset != actual:
        raise InvariantViolation(f"hint offset {hint.offset} != {actual}")

    if hint.offset == 0 and len(hint.text) == query_len:
        return query

    left = hint.text[: hint.offset]
    right = hint.text[hint.offset + query_len :]

    status = query
    if left:
        status = f"{MUTED}{left}{BRIGHT}{status}"
    if right:
        status = f"{status}{MUTED}{right}"

    # Keep the match near the front when the line will be cut off.
    if len(status) > STATUS_WIDTH and not left and query_len > 2:
        status = status[query_len - 2 :]

    return status
