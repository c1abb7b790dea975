import pytest

from driftwood.board.grid import Point
from driftwood.entities.animation import AnimationPhase, AnimationTiming
from driftwood.entities.models import LogOrientation
from driftwood.entities.registry import EntityRegistry
from driftwood.exceptions import RegistryError
from driftwood.levels.loader import parse_layers


def test_from_board_spawns_round_logs_on_stumps():
    board = parse_layers([["####", "####"], [".@..", "...@"]])
    registry = EntityRegistry.from_board(board, Point(0, 0))

    assert sorted(registry.log_positions(), key=lambda p: (p.y, p.x)) == [Point(1, 0), Point(3, 1)]
    assert len(registry) == 2
    for _, log in registry.logs():
        assert log.orientation is LogOrientation.ROUND
        assert log.animation.phase is AnimationPhase.IDLE
    assert registry.log_at(Point(0, 0)) is None


def test_relocate_log_marks_pending_with_origin():
    registry = EntityRegistry(Point(0, 0))
    log = registry.add_log(Point(2, 2))

    registry.relocate_log(Point(2, 2), Point(2, 3))

    assert registry.log_at(Point(2, 2)) is None
    assert registry.log_at(Point(2, 3)) is log
    assert log.animation.phase is AnimationPhase.PENDING
    assert log.animation.origin == (2.0, 2.0)


def test_relocate_missing_log_is_noop():
    registry = EntityRegistry(Point(0, 0))
    registry.add_log(Point(1, 1))
    registry.relocate_log(Point(5, 5), Point(6, 5))
    assert registry.log_positions() == [Point(1, 1)]


def test_relocate_onto_occupied_cell_fails_fast():
    registry = EntityRegistry(Point(0, 0))
    registry.add_log(Point(1, 1))
    registry.add_log(Point(2, 1))
    with pytest.raises(RegistryError):
        registry.relocate_log(Point(1, 1), Point(2, 1))
    # Nothing changed
    assert set(registry.log_positions()) == {Point(1, 1), Point(2, 1)}

    with pytest.raises(RegistryError):
        registry.add_log(Point(1, 1))


def test_off_board_positions_are_valid_keys():
    registry = EntityRegistry(Point(0, 0))
    registry.add_log(Point(0, 3))
    registry.relocate_log(Point(0, 3), Point(-1, 3))
    assert registry.log_at(Point(-1, 3)) is not None


def test_set_player_position_refused_while_animating():
    registry = EntityRegistry(Point(0, 0))
    assert registry.set_player_position(Point(1, 0)) is True
    assert registry.player.animation.phase is AnimationPhase.PENDING
    assert registry.player.animation.origin == (0.0, 0.0)

    registry.tick(0.01)
    assert registry.player.animation.phase is AnimationPhase.ANIMATING

    before = (registry.player.animation.elapsed, registry.player.animation.origin)
    assert registry.set_player_position(Point(2, 0)) is False
    assert registry.player_position == Point(1, 0)
    assert registry.player.animation.phase is AnimationPhase.ANIMATING
    assert (registry.player.animation.elapsed, registry.player.animation.origin) == before


def test_tick_advances_every_entity_independently():
    registry = EntityRegistry(Point(0, 0), AnimationTiming(player_duration=0.05, log_duration_per_cell=0.05))
    registry.add_log(Point(3, 0))
    registry.add_log(Point(5, 5))
    registry.relocate_log(Point(3, 0), Point(6, 0))
    registry.set_player_position(Point(1, 0))

    registry.tick(0.04)
    registry.tick(0.04)
    # Player (0.05 s) is done, the log crossing 3 cells (0.15 s) is not
    assert registry.player.animation.phase is AnimationPhase.IDLE
    assert registry.log_at(Point(6, 0)).animation.phase is AnimationPhase.ANIMATING
    assert registry.log_at(Point(5, 5)).animation.phase is AnimationPhase.IDLE
    assert registry.is_idle() is False

    for _ in range(3):
        registry.tick(0.04)
    assert registry.is_idle() is True
    assert registry.draw_position(registry.log_at(Point(6, 0))) == (6.0, 0.0)


def test_retriggered_log_restarts_from_drawn_position():
    registry = EntityRegistry(Point(0, 0), AnimationTiming(log_duration_per_cell=0.1))
    log = registry.add_log(Point(0, 2))
    registry.relocate_log(Point(0, 2), Point(2, 2))
    registry.tick(0.1)  # pending -> animating, halfway over 0.2 s
    assert registry.draw_position(log) == pytest.approx((1.0, 2.0))

    registry.relocate_log(Point(2, 2), Point(2, 3))
    assert log.animation.phase is AnimationPhase.PENDING
    assert log.animation.origin == pytest.approx((1.0, 2.0))
