"""Tests for rock_tower.domain.drop module."""

from __future__ import annotations

import pytest

from rock_tower.domain.chamber import Chamber
from rock_tower.domain.drop import DropSimulator, DropState
from rock_tower.domain.jets import JetSequence, parse_jets
from rock_tower.domain.rocks import FallingRock, RockShape, next_rock

SAMPLE = ">>><<><>><<<>><>>><<<>>><<<><<<>><>><<>>"


class TestFirstSampleRock:
    def test_settles_on_floor(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets(SAMPLE))
        drop = DropSimulator(chamber, jets, next_rock(None, chamber.height))

        rock = drop.run()

        assert rock == FallingRock(RockShape.HORIZONTAL_LINE, row=0, col=2)
        assert drop.state is DropState.SETTLED
        assert chamber.height == 1

    def test_every_tick_consumes_one_jet(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets(SAMPLE))
        drop = DropSimulator(chamber, jets, next_rock(None, chamber.height))

        drop.run()

        assert drop.ticks == 4
        assert drop.blocked_pushes == 2
        assert jets.cursor == 4


class TestStateMachine:
    def test_tick_reports_falling_until_settled(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets("<"))
        drop = DropSimulator(chamber, jets, FallingRock(RockShape.SQUARE, row=1, col=0))
        assert drop.tick() is DropState.FALLING
        assert drop.rock.row == 0
        assert drop.tick() is DropState.SETTLED
        assert chamber.is_occupied(1, 1)

    def test_tick_after_settle_raises(self) -> None:
        chamber = Chamber()
        drop = DropSimulator(
            chamber, JetSequence(parse_jets("<")), FallingRock(RockShape.SQUARE, row=0, col=0)
        )
        drop.run()
        with pytest.raises(RuntimeError):
            drop.tick()

    def test_rock_lands_on_settled_rock(self) -> None:
        chamber = Chamber()
        chamber.settle(FallingRock(RockShape.HORIZONTAL_LINE, row=0, col=0))
        jets = JetSequence(parse_jets("<"))
        rock = DropSimulator(chamber, jets, FallingRock(RockShape.SQUARE, row=5, col=0)).run()
        assert rock.row == 1
        assert chamber.height == 3


class TestWalls:
    def test_right_wall_rejects_push(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets(">"))
        drop = DropSimulator(chamber, jets, FallingRock(RockShape.VERTICAL_LINE, row=10, col=6))
        drop.tick()
        assert drop.rock.col == 6
        assert drop.blocked_pushes == 1

    def test_left_wall_rejects_push(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets("<"))
        drop = DropSimulator(chamber, jets, FallingRock(RockShape.HORIZONTAL_LINE, row=10, col=0))
        drop.tick()
        assert drop.rock.col == 0
        assert drop.rock.row == 9

    def test_blocked_push_still_consumes_jet(self) -> None:
        chamber = Chamber()
        jets = JetSequence(parse_jets("<><"))
        drop = DropSimulator(chamber, jets, FallingRock(RockShape.PLUS, row=10, col=0))
        drop.tick()
        assert drop.blocked_pushes == 1
        assert jets.cursor == 1
        drop.tick()
        assert drop.rock.col == 1

    def test_push_into_settled_rock_is_rejected(self) -> None:
        chamber = Chamber()
        chamber.settle(FallingRock(RockShape.VERTICAL_LINE, row=0, col=3))
        jets = JetSequence(parse_jets(">"))
        drop = DropSimulator(chamber, jets, FallingRock(RockShape.SQUARE, row=1, col=1))
        drop.tick()
        assert drop.rock.col == 1
        assert drop.rock.row == 0
