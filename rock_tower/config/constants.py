"""Centralized domain constants for the rock tower simulation.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

CHAMBER_WIDTH = 7
"""Shaft width in columns; fixed for the whole system."""

ROW_MASK = (1 << CHAMBER_WIDTH) - 1
"""Bitmask of a completely filled row."""

SPAWN_COLUMN = 2
"""Columns of air between the left wall and a new rock's left edge."""

SPAWN_GAP = 3
"""Rows between the tower top and a new rock's bottom edge."""

SNAPSHOT_DEPTH = 40
"""Top rows of the chamber compared when fingerprinting a state."""

TALLEST_ROCK = 4
"""Row span of the tallest rock shape."""

PART_ONE_ROCKS = 2022
"""Rock count for the directly simulated answer."""

PART_TWO_ROCKS = 1_000_000_000_000
"""Rock count for the extrapolated answer."""

VERIFY_CYCLE_MULTIPLE = 3
"""Whole cycles simulated by brute force when verifying extrapolation."""

FLUSH_THRESHOLD = 8_192
"""Flush settle log rows to Parquet once this in-memory row count is reached."""
