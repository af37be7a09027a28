"""Domain layer: jets, rock shapes, chamber geometry, drops, and cycle detection."""

from rock_tower.domain.chamber import (
    Chamber,
    ChamberInvariantError,
    RowBits,
    row_has,
    row_with,
)
from rock_tower.domain.cycles import Cycle, CycleDetector, CycleRecord, Fingerprint
from rock_tower.domain.drop import DropSimulator, DropState
from rock_tower.domain.extrapolate import Extrapolator, Skip
from rock_tower.domain.jets import Direction, JetParseError, JetSequence, parse_jets
from rock_tower.domain.rocks import (
    SHAPE_CELLS,
    SHAPE_ORDER,
    FallingRock,
    RockCatalog,
    RockShape,
    next_rock,
    shape_after,
)

__all__ = [
    "Chamber",
    "ChamberInvariantError",
    "Cycle",
    "CycleDetector",
    "CycleRecord",
    "Direction",
    "DropSimulator",
    "DropState",
    "Extrapolator",
    "FallingRock",
    "Fingerprint",
    "JetParseError",
    "JetSequence",
    "RockCatalog",
    "RockShape",
    "RowBits",
    "SHAPE_CELLS",
    "SHAPE_ORDER",
    "Skip",
    "next_rock",
    "parse_jets",
    "row_has",
    "row_with",
    "shape_after",
]
