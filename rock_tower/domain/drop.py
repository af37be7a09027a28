"""One rock's descent: alternate jet pushes and gravity until it settles."""

from __future__ import annotations

from enum import Enum

from rock_tower.domain.chamber import Chamber
from rock_tower.domain.jets import JetSequence
from rock_tower.domain.rocks import FallingRock


class DropState(str, Enum):
    """Lifecycle of a single drop."""

    FALLING = "falling"
    SETTLED = "settled"


class DropSimulator:
    """State machine for a single rock from spawn to settle.

    Every tick consumes exactly one jet direction, whether or not the push
    succeeds. A blocked push or fall is not an error, only a rejected move.
    """

    def __init__(self, chamber: Chamber, jets: JetSequence, rock: FallingRock) -> None:
        self.chamber = chamber
        self.jets = jets
        self.rock = rock
        self.state = DropState.FALLING
        self.ticks = 0
        self.blocked_pushes = 0

    def tick(self) -> DropState:
        """Apply one jet push then one gravity step."""
        if self.state is DropState.SETTLED:
            raise RuntimeError("rock has already settled")

        direction = self.jets.next()
        pushed = self.rock.shifted(0, direction.offset)
        if self.chamber.fits(pushed.cells()):
            self.rock = pushed
        else:
            self.blocked_pushes += 1

        lowered = self.rock.shifted(-1, 0)
        if self.chamber.fits(lowered.cells()):
            self.rock = lowered
        else:
            self.chamber.settle(self.rock)
            self.state = DropState.SETTLED

        self.ticks += 1
        return self.state

    def run(self) -> FallingRock:
        """Tick until the rock settles and return its resting position."""
        while self.state is DropState.FALLING:
            self.tick()
        return self.rock
