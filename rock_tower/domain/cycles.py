"""Fingerprint memo that detects when the simulation starts repeating.

A fingerprint is (next shape, jet cursor, top-K rows). Two settles with the
same fingerprint have bit-identical futures, so the rocks and height between
them form one exactly repeatable period.
"""

from __future__ import annotations

from dataclasses import dataclass

from rock_tower.config.constants import SNAPSHOT_DEPTH
from rock_tower.domain.rocks import RockShape


@dataclass(frozen=True)
class Fingerprint:
    """Everything that determines how future rocks land."""

    shape: RockShape
    jet_cursor: int
    surface: bytes


@dataclass(frozen=True)
class CycleRecord:
    """Progress at the first sighting of a fingerprint."""

    rocks: int
    height: int


@dataclass(frozen=True)
class Cycle:
    """Two sightings of one fingerprint."""

    start_rocks: int
    start_height: int
    end_rocks: int
    end_height: int

    @property
    def length_rocks(self) -> int:
        return self.end_rocks - self.start_rocks

    @property
    def length_height(self) -> int:
        return self.end_height - self.start_height


class CycleDetector:
    """Map fingerprints to first sightings and report the first repeat."""

    def __init__(self, snapshot_depth: int = SNAPSHOT_DEPTH) -> None:
        if snapshot_depth < 1:
            raise ValueError("snapshot_depth must be >= 1")
        self.snapshot_depth = snapshot_depth
        self.enabled = True
        self._memo: dict[Fingerprint, CycleRecord] = {}

    def __len__(self) -> int:
        return len(self._memo)

    def ready(self, height: int) -> bool:
        """Only towers taller than the window give a meaningful snapshot."""
        return self.enabled and height > self.snapshot_depth

    def observe(self, fingerprint: Fingerprint, rocks: int, height: int) -> Cycle | None:
        """Record a first sighting, or return the cycle closed by a repeat."""
        record = self._memo.get(fingerprint)
        if record is None:
            self._memo[fingerprint] = CycleRecord(rocks=rocks, height=height)
            return None
        return Cycle(
            start_rocks=record.rocks,
            start_height=record.height,
            end_rocks=rocks,
            end_height=height,
        )

    def disable(self) -> None:
        """Stop searching and release the memo."""
        self.enabled = False
        self._memo.clear()
