"""Tests for rock_tower.domain.cycles module."""

from __future__ import annotations

import pytest

from rock_tower.domain.cycles import Cycle, CycleDetector, Fingerprint
from rock_tower.domain.rocks import RockShape


def _fingerprint(jet_cursor: int = 0, surface: bytes = b"\x01\x7f") -> Fingerprint:
    return Fingerprint(shape=RockShape.PLUS, jet_cursor=jet_cursor, surface=surface)


def test_first_sighting_is_recorded() -> None:
    detector = CycleDetector(snapshot_depth=2)
    assert detector.observe(_fingerprint(), rocks=10, height=17) is None
    assert len(detector) == 1


def test_repeat_reports_cycle_lengths() -> None:
    detector = CycleDetector(snapshot_depth=2)
    detector.observe(_fingerprint(), rocks=10, height=17)
    detector.observe(_fingerprint(jet_cursor=3), rocks=11, height=19)

    cycle = detector.observe(_fingerprint(), rocks=45, height=70)

    assert cycle == Cycle(start_rocks=10, start_height=17, end_rocks=45, end_height=70)
    assert cycle.length_rocks == 35
    assert cycle.length_height == 53


def test_repeat_keeps_first_sighting() -> None:
    detector = CycleDetector(snapshot_depth=2)
    detector.observe(_fingerprint(), rocks=10, height=17)
    detector.observe(_fingerprint(), rocks=45, height=70)
    cycle = detector.observe(_fingerprint(), rocks=80, height=123)
    assert cycle is not None
    assert cycle.start_rocks == 10


def test_fingerprints_differ_by_each_component() -> None:
    base = _fingerprint()
    assert base == _fingerprint()
    assert base != _fingerprint(jet_cursor=1)
    assert base != _fingerprint(surface=b"\x01\x7e")
    assert base != Fingerprint(shape=RockShape.SQUARE, jet_cursor=0, surface=b"\x01\x7f")


def test_ready_requires_tower_taller_than_window() -> None:
    detector = CycleDetector(snapshot_depth=40)
    assert not detector.ready(40)
    assert detector.ready(41)


def test_disable_stops_and_clears() -> None:
    detector = CycleDetector(snapshot_depth=2)
    detector.observe(_fingerprint(), rocks=1, height=3)
    detector.disable()
    assert not detector.enabled
    assert not detector.ready(100)
    assert len(detector) == 0


def test_rejects_non_positive_depth() -> None:
    with pytest.raises(ValueError):
        CycleDetector(snapshot_depth=0)
