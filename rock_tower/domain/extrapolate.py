"""Skip whole repeated cycles arithmetically."""

from __future__ import annotations

from dataclasses import dataclass

from rock_tower.domain.cycles import Cycle


@dataclass(frozen=True)
class Skip:
    """Rocks and height accounted for without simulating them."""

    whole_cycles: int
    rocks: int
    height: int
    leftover: int


class Extrapolator:
    """Plan how many whole cycles fit between the current rock count and the target."""

    def __init__(self, target_rocks: int) -> None:
        if target_rocks < 0:
            raise ValueError("target_rocks must be >= 0")
        self.target_rocks = target_rocks

    def plan(self, rocks: int, cycle: Cycle) -> Skip | None:
        """Return the skip to apply, or None when no whole cycle fits."""
        if cycle.length_rocks < 1:
            raise ValueError("cycle must span at least one rock")
        remaining = self.target_rocks - rocks
        if remaining <= 0:
            return None
        whole_cycles, leftover = divmod(remaining, cycle.length_rocks)
        if whole_cycles == 0:
            return None
        return Skip(
            whole_cycles=whole_cycles,
            rocks=whole_cycles * cycle.length_rocks,
            height=whole_cycles * cycle.length_height,
            leftover=leftover,
        )
