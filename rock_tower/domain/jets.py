"""Jet pattern parsing and the cyclic jet cursor."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class JetParseError(ValueError):
    """Raised when a jet pattern contains anything other than ``<`` and ``>``."""


class Direction(str, Enum):
    """Horizontal push applied by a jet."""

    LEFT = "<"
    RIGHT = ">"

    @property
    def offset(self) -> int:
        """Column delta of a push in this direction."""
        return -1 if self is Direction.LEFT else 1


def parse_jets(text: str) -> tuple[Direction, ...]:
    """Parse one line of ``<``/``>`` characters; surrounding whitespace is ignored."""
    pattern = text.strip()
    if not pattern:
        raise JetParseError("jet pattern must not be empty")
    directions: list[Direction] = []
    for position, char in enumerate(pattern):
        try:
            directions.append(Direction(char))
        except ValueError as exc:
            raise JetParseError(
                f"invalid jet character {char!r} at position {position}; expected '<' or '>'"
            ) from exc
    return tuple(directions)


class JetSequence:
    """Read-only cyclic sequence of directions with a wrapping cursor."""

    def __init__(self, directions: Sequence[Direction]) -> None:
        if not directions:
            raise ValueError("directions must not be empty")
        self._directions = tuple(directions)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._directions)

    @property
    def cursor(self) -> int:
        """Index of the direction the next tick will consume."""
        return self._cursor

    def next(self) -> Direction:
        """Return the direction under the cursor and advance one step."""
        direction = self._directions[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._directions)
        return direction
