"""Rock shape catalog and the falling-rock value type.

Every shape is a fixed table of (row, col) offsets from its anchor, the
bottom-left corner of its bounding box. Rows grow upward. Movement and
collision code works against these tables only; nothing branches per shape.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from rock_tower.config.constants import SPAWN_COLUMN, SPAWN_GAP

Cell = tuple[int, int]
"""Absolute (row, col) position in the chamber."""


class RockShape(Enum):
    """The five rock shapes, in fall order."""

    HORIZONTAL_LINE = 0
    PLUS = 1
    CORNER = 2
    VERTICAL_LINE = 3
    SQUARE = 4

    @property
    def cells(self) -> tuple[Cell, ...]:
        return SHAPE_CELLS[self]

    @property
    def width(self) -> int:
        return max(col for _, col in SHAPE_CELLS[self]) + 1

    @property
    def height(self) -> int:
        return max(row for row, _ in SHAPE_CELLS[self]) + 1


SHAPE_CELLS: dict[RockShape, tuple[Cell, ...]] = {
    # ####
    RockShape.HORIZONTAL_LINE: ((0, 0), (0, 1), (0, 2), (0, 3)),
    # .#.
    # ###
    # .#.
    RockShape.PLUS: ((0, 1), (1, 0), (1, 1), (1, 2), (2, 1)),
    # ..#
    # ..#
    # ###
    RockShape.CORNER: ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2)),
    # #
    # #
    # #
    # #
    RockShape.VERTICAL_LINE: ((0, 0), (1, 0), (2, 0), (3, 0)),
    # ##
    # ##
    RockShape.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
}

SHAPE_ORDER: tuple[RockShape, ...] = tuple(RockShape)
"""Fall order; wraps from SQUARE back to HORIZONTAL_LINE."""

MAX_ROCK_HEIGHT = max(shape.height for shape in SHAPE_ORDER)


@dataclass(frozen=True)
class FallingRock:
    """A rock's shape plus the chamber position of its anchor."""

    shape: RockShape
    row: int
    col: int

    def cells(self) -> list[Cell]:
        return [(self.row + dr, self.col + dc) for dr, dc in self.shape.cells]

    def shifted(self, d_row: int, d_col: int) -> FallingRock:
        return replace(self, row=self.row + d_row, col=self.col + d_col)

    @property
    def top_row(self) -> int:
        return self.row + self.shape.height - 1


def shape_after(previous: RockShape | None) -> RockShape:
    """Return the shape that falls after ``previous`` (the first shape for None)."""
    if previous is None:
        return SHAPE_ORDER[0]
    return SHAPE_ORDER[(SHAPE_ORDER.index(previous) + 1) % len(SHAPE_ORDER)]


def next_rock(previous: RockShape | None, tower_height: int) -> FallingRock:
    """Spawn the rock following ``previous`` above a tower of ``tower_height`` rows."""
    return FallingRock(
        shape=shape_after(previous),
        row=tower_height + SPAWN_GAP,
        col=SPAWN_COLUMN,
    )


class RockCatalog:
    """Cyclic rock source; its cursor is the shape phase of the simulation."""

    def __init__(self) -> None:
        self._previous: RockShape | None = None
        self._spawned = 0

    @property
    def cursor(self) -> int:
        """Position in the shape cycle of the next rock."""
        return self._spawned % len(SHAPE_ORDER)

    @property
    def next_shape(self) -> RockShape:
        return shape_after(self._previous)

    def spawn(self, tower_height: int) -> FallingRock:
        rock = next_rock(self._previous, tower_height)
        self._previous = rock.shape
        self._spawned += 1
        return rock
