"""Parquet schema definitions for simulation artifacts.

Every Arrow schema used for persisting settle logs and run summaries is
centralised here so that writers and readers agree on column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

SETTLE_LOG_SCHEMA_VERSION = 1
RUN_SUMMARY_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Settle log
# ---------------------------------------------------------------------------

SETTLE_LOG_SCHEMA = pa.schema(
    [
        ("rock_index", pa.int64()),
        ("shape", pa.string()),
        ("anchor_row", pa.int64()),
        ("anchor_col", pa.int64()),
        ("ticks", pa.int64()),
        ("blocked_pushes", pa.int64()),
        ("jet_cursor", pa.int64()),
        ("tower_height", pa.int64()),
    ]
)

# ---------------------------------------------------------------------------
# Run summaries
# ---------------------------------------------------------------------------

RUN_SUMMARY_SCHEMA = pa.schema(
    [
        ("label", pa.string()),
        ("target_rocks", pa.int64()),
        ("height", pa.int64()),
        ("simulated_rocks", pa.int64()),
        ("skipped_rocks", pa.int64()),
        ("skipped_height", pa.int64()),
        ("ticks", pa.int64()),
        ("cycle_start_rocks", pa.int64()),
        ("cycle_length_rocks", pa.int64()),
        ("cycle_length_height", pa.int64()),
    ]
)
