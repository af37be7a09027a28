"""Bit-packed chamber of settled rock.

Each row is a 7-bit integer (RowBits); bit *i* set means column *i* holds
settled rock. Rows are append-only and keep their logical index even after
old rows are discarded with :meth:`Chamber.discard_below`.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from rock_tower.config.constants import CHAMBER_WIDTH, ROW_MASK
from rock_tower.domain.rocks import Cell, FallingRock

RowBits = int
"""Occupancy of one chamber row, one bit per column."""


class ChamberInvariantError(RuntimeError):
    """Raised when geometry code touches cells it can never legally reach."""


def row_has(bits: RowBits, col: int) -> bool:
    """Return True when column ``col`` is set in ``bits``."""
    return (bits >> col) & 1 == 1


def row_with(bits: RowBits, col: int) -> RowBits:
    """Return ``bits`` with column ``col`` set."""
    return (bits | (1 << col)) & ROW_MASK


class Chamber:
    """Growing shaft of settled rows plus the current tower height."""

    def __init__(self, width: int = CHAMBER_WIDTH) -> None:
        self.width = width
        self.height = 0
        self._rows: list[RowBits] = []
        self._base = 0  # logical index of self._rows[0]

    def __len__(self) -> int:
        """Number of rows currently held in memory."""
        return len(self._rows)

    @property
    def base_row(self) -> int:
        """Lowest row still held; everything below was discarded."""
        return self._base

    def row(self, row: int) -> RowBits:
        """Return the bits of logical ``row`` (0 for air above the content)."""
        if row < self._base:
            raise ChamberInvariantError(f"row {row} was discarded (base row {self._base})")
        index = row - self._base
        if index >= len(self._rows):
            return 0
        return self._rows[index]

    def is_occupied(self, row: int, col: int) -> bool:
        if row < 0 or not 0 <= col < self.width:
            return False
        return row_has(self.row(row), col)

    def is_blocked(self, row: int, col: int) -> bool:
        """Walls and floor block as well as settled rock."""
        if row < 0 or not 0 <= col < self.width:
            return True
        return row_has(self.row(row), col)

    def fits(self, cells: Iterable[Cell]) -> bool:
        return not any(self.is_blocked(row, col) for row, col in cells)

    def settle(self, rock: FallingRock) -> None:
        """Write the rock's footprint into the chamber and raise the height."""
        for row, col in rock.cells():
            if self.is_blocked(row, col):
                raise ChamberInvariantError(
                    f"{rock.shape.name} cannot settle on blocked cell ({row}, {col})"
                )
            index = row - self._base
            while len(self._rows) <= index:
                self._rows.append(0)
            self._rows[index] = row_with(self._rows[index], col)
        self.height = max(self.height, rock.top_row + 1)

    def top_k_snapshot(self, k: int) -> bytes:
        """Return the top ``k`` rows, bottom first, zero-padded below row 0."""
        if k < 1:
            raise ValueError("k must be >= 1")
        start = self.height - k
        padding = max(0, -start)
        rows = [self.row(r) for r in range(max(0, start), self.height)]
        return bytes(padding) + bytes(rows)

    def discard_below(self, row: int) -> int:
        """Forget rows below ``row``; returns how many rows were dropped."""
        if row <= self._base:
            return 0
        if row > self.height:
            raise ValueError("cannot discard rows above the tower height")
        dropped = min(row - self._base, len(self._rows))
        del self._rows[:dropped]
        self._base = row
        return dropped

    def to_array(self) -> np.ndarray:
        """Return a (rows held, width) bool occupancy array, lowest row first."""
        grid = np.zeros((len(self._rows), self.width), dtype=bool)
        for index, bits in enumerate(self._rows):
            for col in range(self.width):
                grid[index, col] = row_has(bits, col)
        return grid

    def render(self, rock: FallingRock | None = None, max_rows: int | None = None) -> str:
        """Text picture of the chamber, top row first.

        ``#`` is settled rock, ``@`` the falling rock, ``.`` air.
        """
        falling = set(rock.cells()) if rock is not None else set()
        top = self.height if rock is None else max(self.height, rock.top_row + 1)
        bottom = self._base
        if max_rows is not None:
            bottom = max(bottom, top - max_rows)
        lines = []
        for row in range(top - 1, bottom - 1, -1):
            chars = []
            for col in range(self.width):
                if (row, col) in falling:
                    chars.append("@")
                elif self.is_occupied(row, col):
                    chars.append("#")
                else:
                    chars.append(".")
            lines.append("|" + "".join(chars) + "|")
        if bottom == 0:
            lines.append("+" + "-" * self.width + "+")
        return "\n".join(lines)
