"""Tests for the tower simulation engine."""

from __future__ import annotations

import pytest

from rock_tower.config.types import SimulationConfig
from rock_tower.domain.jets import parse_jets
from rock_tower.simulation.engine import (
    TowerSimulation,
    find_cycle,
    solve,
    tower_height,
    verify_extrapolation,
)

SAMPLE_JETS = parse_jets(">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>")
BRUTE_FORCE = SimulationConfig(detect_cycles=False)


class TestKnownValues:
    def test_sample_after_2022_rocks(self) -> None:
        assert tower_height(SAMPLE_JETS, 2022) == 3068

    def test_sample_after_2022_rocks_brute_force(self) -> None:
        assert tower_height(SAMPLE_JETS, 2022, BRUTE_FORCE) == 3068

    def test_sample_after_one_trillion_rocks(self) -> None:
        assert tower_height(SAMPLE_JETS, 1_000_000_000_000) == 1514285714288

    def test_solve_reports_both_parts(self) -> None:
        assert solve(SAMPLE_JETS) == (3068, 1514285714288)

    def test_first_ten_rocks(self) -> None:
        simulation = TowerSimulation(SAMPLE_JETS, BRUTE_FORCE)
        simulation.run(1)
        assert simulation.height == 1
        simulation.run(10)
        assert simulation.height == 17


class TestProperties:
    def test_deterministic(self) -> None:
        first = TowerSimulation(SAMPLE_JETS).run(5000)
        second = TowerSimulation(SAMPLE_JETS).run(5000)
        assert first == second

    def test_height_is_non_decreasing(self) -> None:
        simulation = TowerSimulation(SAMPLE_JETS, BRUTE_FORCE)
        heights = []
        for _ in range(300):
            simulation.drop_rock()
            heights.append(simulation.height)
        assert all(b >= a for a, b in zip(heights, heights[1:], strict=False))
        assert heights[-1] > heights[0]

    @pytest.mark.parametrize("rocks", [100, 777, 2500])
    def test_extrapolated_matches_brute_force(self, rocks: int) -> None:
        assert tower_height(SAMPLE_JETS, rocks) == tower_height(SAMPLE_JETS, rocks, BRUTE_FORCE)

    def test_cycle_spans_whole_shape_periods(self) -> None:
        cycle = find_cycle(SAMPLE_JETS)
        assert cycle.length_rocks > 0
        assert cycle.length_rocks % 5 == 0
        assert cycle.length_height > 0

    def test_cycle_repeats_exactly_by_brute_force(self) -> None:
        cycle = find_cycle(SAMPLE_JETS)
        start = tower_height(SAMPLE_JETS, cycle.start_rocks, BRUTE_FORCE)
        one_later = tower_height(SAMPLE_JETS, cycle.end_rocks, BRUTE_FORCE)
        two_later = tower_height(
            SAMPLE_JETS, cycle.end_rocks + cycle.length_rocks, BRUTE_FORCE
        )
        assert one_later - start == cycle.length_height
        assert two_later - one_later == cycle.length_height


class TestTowerSimulation:
    def test_result_accounts_for_every_rock(self) -> None:
        result = TowerSimulation(SAMPLE_JETS).run(1_000_000)
        assert result.simulated_rocks + result.skipped_rocks == 1_000_000
        assert result.extrapolated
        assert result.cycle is not None
        assert result.skipped_rocks % result.cycle.length_rocks == 0

    def test_brute_force_never_skips(self) -> None:
        result = TowerSimulation(SAMPLE_JETS, BRUTE_FORCE).run(500)
        assert result.skipped_rocks == 0
        assert result.cycle is None
        assert not result.extrapolated

    def test_zero_rocks(self) -> None:
        result = TowerSimulation(SAMPLE_JETS).run(0)
        assert result.height == 0
        assert result.ticks == 0

    def test_run_is_resumable(self) -> None:
        simulation = TowerSimulation(SAMPLE_JETS, BRUTE_FORCE)
        simulation.run(1000)
        assert simulation.run(2022).height == 3068

    def test_target_below_progress_rejected(self) -> None:
        simulation = TowerSimulation(SAMPLE_JETS)
        simulation.run(10)
        with pytest.raises(ValueError):
            simulation.run(5)

    def test_retained_rows_do_not_change_heights(self) -> None:
        config = SimulationConfig(detect_cycles=False, retain_rows=100)
        simulation = TowerSimulation(SAMPLE_JETS, config)
        assert simulation.run(2022).height == 3068
        assert len(simulation.chamber) <= 2 * 100 + 4
        assert simulation.chamber.base_row > 0

    def test_fingerprint_tracks_phases(self) -> None:
        simulation = TowerSimulation(SAMPLE_JETS)
        simulation.drop_rock()
        fingerprint = simulation.fingerprint()
        assert fingerprint.jet_cursor == 4
        assert fingerprint.shape.name == "PLUS"
        assert len(fingerprint.surface) == simulation.config.snapshot_depth


class TestVerification:
    def test_sample_extrapolation_agrees(self) -> None:
        verification = verify_extrapolation(SAMPLE_JETS)
        assert verification.agrees
        cycle = verification.cycle
        assert verification.rocks > cycle.end_rocks + 3 * cycle.length_rocks

    def test_find_cycle_requires_detection(self) -> None:
        with pytest.raises(ValueError):
            find_cycle(SAMPLE_JETS, BRUTE_FORCE)

    def test_rejects_non_positive_multiple(self) -> None:
        with pytest.raises(ValueError):
            verify_extrapolation(SAMPLE_JETS, multiple=0)
