"""Configuration layer: constants and typed config dataclasses."""

from rock_tower.config.constants import (
    CHAMBER_WIDTH,
    FLUSH_THRESHOLD,
    PART_ONE_ROCKS,
    PART_TWO_ROCKS,
    ROW_MASK,
    SNAPSHOT_DEPTH,
    SPAWN_COLUMN,
    SPAWN_GAP,
    TALLEST_ROCK,
    VERIFY_CYCLE_MULTIPLE,
)
from rock_tower.config.types import SimulationConfig, SimulationResult, SolveConfig

__all__ = [
    "CHAMBER_WIDTH",
    "FLUSH_THRESHOLD",
    "PART_ONE_ROCKS",
    "PART_TWO_ROCKS",
    "ROW_MASK",
    "SNAPSHOT_DEPTH",
    "SPAWN_COLUMN",
    "SPAWN_GAP",
    "TALLEST_ROCK",
    "SimulationConfig",
    "SimulationResult",
    "SolveConfig",
    "VERIFY_CYCLE_MULTIPLE",
]
