"""Parquet persistence helpers for settle logs and run summaries."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from rock_tower.config.constants import FLUSH_THRESHOLD
from rock_tower.config.types import SimulationResult
from rock_tower.domain.rocks import FallingRock
from rock_tower.io.schemas import RUN_SUMMARY_SCHEMA, SETTLE_LOG_SCHEMA


def flush_settle_columns(
    settle_columns: dict[str, list[int | str]],
    settle_log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated settle rows to Parquet and clear in-memory buffers."""
    if not settle_columns["rock_index"]:
        return writer
    table = pa.Table.from_pydict(settle_columns, schema=SETTLE_LOG_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(settle_log_path, SETTLE_LOG_SCHEMA)
    writer.write_table(table)
    for values in settle_columns.values():
        values.clear()
    return writer


class SettleLog:
    """Buffered per-rock settle log backed by a Parquet file."""

    def __init__(self, path: Path, flush_threshold: int = FLUSH_THRESHOLD) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.flush_threshold = flush_threshold
        self._writer: pq.ParquetWriter | None = None
        self._columns: dict[str, list[int | str]] = {
            field.name: [] for field in SETTLE_LOG_SCHEMA
        }

    def __enter__(self) -> SettleLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def record(
        self,
        rock_index: int,
        rock: FallingRock,
        ticks: int,
        blocked_pushes: int,
        jet_cursor: int,
        tower_height: int,
    ) -> None:
        self._columns["rock_index"].append(rock_index)
        self._columns["shape"].append(rock.shape.name)
        self._columns["anchor_row"].append(rock.row)
        self._columns["anchor_col"].append(rock.col)
        self._columns["ticks"].append(ticks)
        self._columns["blocked_pushes"].append(blocked_pushes)
        self._columns["jet_cursor"].append(jet_cursor)
        self._columns["tower_height"].append(tower_height)
        if len(self._columns["rock_index"]) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        self._writer = flush_settle_columns(self._columns, self.path, self._writer)

    def close(self) -> None:
        self.flush()
        if self._writer is None:
            # Nothing was recorded; still leave a readable empty file behind.
            pq.write_table(SETTLE_LOG_SCHEMA.empty_table(), self.path)
            return
        self._writer.close()
        self._writer = None


def write_run_summaries(
    labelled_results: Sequence[tuple[str, SimulationResult]], path: Path
) -> None:
    """Persist one summary row per labelled simulation result."""
    columns: dict[str, list[int | str | None]] = {field.name: [] for field in RUN_SUMMARY_SCHEMA}
    for label, result in labelled_results:
        cycle = result.cycle
        columns["label"].append(label)
        columns["target_rocks"].append(result.target_rocks)
        columns["height"].append(result.height)
        columns["simulated_rocks"].append(result.simulated_rocks)
        columns["skipped_rocks"].append(result.skipped_rocks)
        columns["skipped_height"].append(result.skipped_height)
        columns["ticks"].append(result.ticks)
        columns["cycle_start_rocks"].append(cycle.start_rocks if cycle else None)
        columns["cycle_length_rocks"].append(cycle.length_rocks if cycle else None)
        columns["cycle_length_height"].append(cycle.length_height if cycle else None)
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(pa.Table.from_pydict(columns, schema=RUN_SUMMARY_SCHEMA), path)
