"""Simulation engine: tower driver, extrapolation checks, and Parquet persistence."""

from rock_tower.simulation.engine import (
    TowerSimulation,
    Verification,
    find_cycle,
    solve,
    tower_height,
    verify_extrapolation,
)
from rock_tower.simulation.persistence import (
    SettleLog,
    flush_settle_columns,
    write_run_summaries,
)

__all__ = [
    "SettleLog",
    "TowerSimulation",
    "Verification",
    "find_cycle",
    "flush_settle_columns",
    "solve",
    "tower_height",
    "verify_extrapolation",
    "write_run_summaries",
]
