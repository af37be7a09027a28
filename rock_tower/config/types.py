"""Configuration dataclasses and result containers for tower simulations.

All frozen dataclasses that parameterise a simulation run or a full solve
live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rock_tower.config.constants import (
    PART_ONE_ROCKS,
    PART_TWO_ROCKS,
    SNAPSHOT_DEPTH,
    TALLEST_ROCK,
    VERIFY_CYCLE_MULTIPLE,
)

if TYPE_CHECKING:
    from rock_tower.domain.cycles import Cycle

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    "SolveConfig",
]

# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one run to a target rock count."""

    target_rocks: int
    height: int
    simulated_rocks: int
    skipped_rocks: int
    skipped_height: int
    ticks: int
    cycle: Cycle | None = None

    @property
    def extrapolated(self) -> bool:
        return self.skipped_rocks > 0


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Runtime knobs for a single tower simulation."""

    snapshot_depth: int = SNAPSHOT_DEPTH
    detect_cycles: bool = True
    retain_rows: int | None = None
    """Rows kept below the tower top; None keeps the whole history."""

    def __post_init__(self) -> None:
        if self.snapshot_depth < 1:
            raise ValueError("snapshot_depth must be >= 1")
        if self.retain_rows is not None and self.retain_rows <= self.snapshot_depth + TALLEST_ROCK:
            raise ValueError(
                f"retain_rows must be > snapshot_depth + {TALLEST_ROCK}, got {self.retain_rows}"
            )


@dataclass(frozen=True)
class SolveConfig:
    """Settings for the two-part solve driven from the CLI."""

    part_one_rocks: int = PART_ONE_ROCKS
    part_two_rocks: int = PART_TWO_ROCKS
    out_dir: Path | None = None
    render_path: Path | None = None
    verify: bool = False
    verify_multiple: int = VERIFY_CYCLE_MULTIPLE
    simulation: SimulationConfig = SimulationConfig()

    def __post_init__(self) -> None:
        if self.part_one_rocks < 0:
            raise ValueError("part_one_rocks must be >= 0")
        if self.part_two_rocks < 0:
            raise ValueError("part_two_rocks must be >= 0")
        if self.verify_multiple < 1:
            raise ValueError("verify_multiple must be >= 1")
