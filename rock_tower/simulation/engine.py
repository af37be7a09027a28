"""Core simulation engine: drop rocks, detect the cycle, and extrapolate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from rock_tower.config.constants import PART_ONE_ROCKS, PART_TWO_ROCKS, VERIFY_CYCLE_MULTIPLE
from rock_tower.config.types import SimulationConfig, SimulationResult
from rock_tower.domain.chamber import Chamber
from rock_tower.domain.cycles import Cycle, CycleDetector, Fingerprint
from rock_tower.domain.drop import DropSimulator
from rock_tower.domain.extrapolate import Extrapolator
from rock_tower.domain.jets import Direction, JetSequence
from rock_tower.domain.rocks import MAX_ROCK_HEIGHT, FallingRock, RockCatalog
from rock_tower.simulation.persistence import SettleLog

logger = logging.getLogger(__name__)


class TowerSimulation:
    """Drive rocks into one chamber, fast-forwarding once a cycle is found.

    ``height`` counts both simulated rows and rows accounted for by skipped
    cycles. The jet and shape cursors are untouched by a skip: a cycle ends
    in the same fingerprint it started from.
    """

    def __init__(
        self,
        jets: Sequence[Direction],
        config: SimulationConfig | None = None,
        settle_log: SettleLog | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.chamber = Chamber()
        self.jets = JetSequence(jets)
        self.catalog = RockCatalog()
        self.detector = CycleDetector(snapshot_depth=self.config.snapshot_depth)
        if not self.config.detect_cycles:
            self.detector.disable()
        self.settle_log = settle_log
        self.rocks = 0
        self.ticks = 0
        self.skipped_rocks = 0
        self.skipped_height = 0
        self.cycle: Cycle | None = None

    @property
    def height(self) -> int:
        return self.chamber.height + self.skipped_height

    def fingerprint(self) -> Fingerprint:
        return Fingerprint(
            shape=self.catalog.next_shape,
            jet_cursor=self.jets.cursor,
            surface=self.chamber.top_k_snapshot(self.config.snapshot_depth),
        )

    def drop_rock(self) -> FallingRock:
        """Spawn the next rock and let it fall until it settles."""
        drop = DropSimulator(self.chamber, self.jets, self.catalog.spawn(self.chamber.height))
        rock = drop.run()
        self.ticks += drop.ticks
        if self.settle_log is not None:
            self.settle_log.record(
                rock_index=self.rocks,
                rock=rock,
                ticks=drop.ticks,
                blocked_pushes=drop.blocked_pushes,
                jet_cursor=self.jets.cursor,
                tower_height=self.chamber.height,
            )
        self.rocks += 1
        self._trim_history()
        return rock

    def _trim_history(self) -> None:
        retain = self.config.retain_rows
        if retain is None:
            return
        # Trim in batches so the row list is not shifted on every settle.
        if len(self.chamber) > 2 * retain + MAX_ROCK_HEIGHT:
            self.chamber.discard_below(self.chamber.height - retain)

    def _check_cycle(self, extrapolator: Extrapolator) -> None:
        if not self.detector.ready(self.chamber.height):
            return
        cycle = self.detector.observe(self.fingerprint(), self.rocks, self.chamber.height)
        if cycle is None:
            return
        skip = extrapolator.plan(self.rocks, cycle)
        if skip is None:
            logger.debug(
                "Cycle of %d rocks found at rock %d but no whole cycle fits",
                cycle.length_rocks,
                self.rocks,
            )
            return
        logger.info(
            "Cycle detected: %d rocks / %d rows starting at rock %d; skipping %d cycles",
            cycle.length_rocks,
            cycle.length_height,
            cycle.start_rocks,
            skip.whole_cycles,
        )
        self.cycle = cycle
        self.rocks += skip.rocks
        self.skipped_rocks += skip.rocks
        self.skipped_height += skip.height
        self.detector.disable()

    def run(self, target_rocks: int) -> SimulationResult:
        """Advance until ``target_rocks`` rocks have fallen in total."""
        if target_rocks < self.rocks:
            raise ValueError(f"target_rocks {target_rocks} is below rocks already dropped")
        extrapolator = Extrapolator(target_rocks)
        while self.rocks < target_rocks:
            self.drop_rock()
            if self.detector.enabled:
                self._check_cycle(extrapolator)
        result = SimulationResult(
            target_rocks=target_rocks,
            height=self.height,
            simulated_rocks=self.rocks - self.skipped_rocks,
            skipped_rocks=self.skipped_rocks,
            skipped_height=self.skipped_height,
            ticks=self.ticks,
            cycle=self.cycle,
        )
        logger.info(
            "Tower height after %d rocks: %d (%d simulated, %d skipped)",
            target_rocks,
            result.height,
            result.simulated_rocks,
            result.skipped_rocks,
        )
        return result


def tower_height(
    jets: Sequence[Direction], rocks: int, config: SimulationConfig | None = None
) -> int:
    """Return the tower height after ``rocks`` rocks have settled."""
    return TowerSimulation(jets, config).run(rocks).height


def solve(
    jets: Sequence[Direction],
    config: SimulationConfig | None = None,
    part_one_rocks: int = PART_ONE_ROCKS,
    part_two_rocks: int = PART_TWO_ROCKS,
) -> tuple[int, int]:
    """Return the heights after the part one and part two rock counts."""
    return (
        tower_height(jets, part_one_rocks, config),
        tower_height(jets, part_two_rocks, config),
    )


@dataclass(frozen=True)
class Verification:
    """Brute-force versus extrapolated height at one rock count."""

    rocks: int
    brute_force_height: int
    extrapolated_height: int
    cycle: Cycle

    @property
    def agrees(self) -> bool:
        return self.brute_force_height == self.extrapolated_height


def find_cycle(jets: Sequence[Direction], config: SimulationConfig | None = None) -> Cycle:
    """Simulate until the first fingerprint repeat and return it."""
    simulation = TowerSimulation(jets, config)
    detector = simulation.detector
    if not detector.enabled:
        raise ValueError("cycle detection is disabled in config")
    while True:
        simulation.drop_rock()
        if not detector.ready(simulation.chamber.height):
            continue
        cycle = detector.observe(
            simulation.fingerprint(), simulation.rocks, simulation.chamber.height
        )
        if cycle is not None:
            return cycle


def verify_extrapolation(
    jets: Sequence[Direction],
    config: SimulationConfig | None = None,
    multiple: int = VERIFY_CYCLE_MULTIPLE,
) -> Verification:
    """Cross-check extrapolation against a full brute-force run.

    The rock count covers ``multiple`` whole cycles past the first sighting
    plus half a cycle, so both the skip and the leftover path are exercised.
    """
    if multiple < 1:
        raise ValueError("multiple must be >= 1")
    config = config or SimulationConfig()
    cycle = find_cycle(jets, config)
    rocks = cycle.end_rocks + multiple * cycle.length_rocks + cycle.length_rocks // 2
    brute_config = SimulationConfig(
        snapshot_depth=config.snapshot_depth,
        detect_cycles=False,
        retain_rows=config.retain_rows,
    )
    brute = tower_height(jets, rocks, brute_config)
    extrapolated = tower_height(jets, rocks, config)
    verification = Verification(
        rocks=rocks,
        brute_force_height=brute,
        extrapolated_height=extrapolated,
        cycle=cycle,
    )
    if verification.agrees:
        logger.info("Extrapolation verified at %d rocks (height %d)", rocks, brute)
    else:
        logger.error(
            "Extrapolation mismatch at %d rocks: brute force %d, extrapolated %d",
            rocks,
            brute,
            extrapolated,
        )
    return verification
