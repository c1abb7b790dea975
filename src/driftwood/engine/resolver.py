from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ..board.grid import Board, Direction, Point
from ..board.tiles import TileMarker, is_open_water
from ..entities.models import LogOrientation
from ..entities.registry import EntityRegistry

logger = logging.getLogger(__name__)

_LOG_BLOCKERS = TileMarker.STUMP | TileMarker.ROCK


class MoveOutcome(Enum):
    """Which push/collision rule decided a move."""

    WALKED = auto()
    BLOCKED_BY_WATER = auto()
    BOARDED_LOG = auto()
    BLOCKED_BY_FLOATING_LOG = auto()
    BLOCKED_BY_OBSTACLE = auto()
    TIPPED_ROUND_LOG = auto()
    BLOCKED_ROUND_LOG = auto()
    STEPPED_ONTO_LOG_AT_SHORE = auto()
    BLOCKED_BY_LOG_AHEAD = auto()
    SLID_LOG = auto()
    ROLLED_INTO_WATER = auto()
    ROLLED_LOG = auto()
    BLOCKED_ROLL = auto()


@dataclass(frozen=True)
class LogMove:
    source: Point
    destination: Point
    orientation: LogOrientation


@dataclass(frozen=True)
class MoveVerdict:
    """Result of resolving one player move.

    Attributes:
        allowed: Whether the player may step onto the target cell.
        outcome: The rule that decided it.
        log_move: The single log relocation the move causes, if any.
    """

    allowed: bool
    outcome: MoveOutcome
    log_move: Optional[LogMove] = None


def _blocked(outcome: MoveOutcome, log_move: Optional[LogMove] = None) -> MoveVerdict:
    return MoveVerdict(False, outcome, log_move)


def _allowed(outcome: MoveOutcome) -> MoveVerdict:
    return MoveVerdict(True, outcome)


def _is_water_or_off_board(board: Board, pos: Point) -> bool:
    cell = board.safe_cell_at(pos)
    return cell is None or is_open_water(cell)


def _roll_destination(board: Board, registry: EntityRegistry, start: Point, step: Point) -> Point:
    """Scan forward from the land cell ``start`` for where a rolling log stops.

    The log keeps rolling over clear land, drops into the first water cell
    (everything past the edge counts as water) and halts just before rocks,
    stumps and other logs. ``start`` itself is only a fallback: when nothing
    past it is free, the result is ``start`` even if a log lies there.
    """
    current = start
    candidate = current + step
    while True:
        if registry.log_at(candidate) is not None:
            break
        cell = board.safe_cell_at(candidate)
        if cell is None or TileMarker.LAND not in cell:
            current = candidate
            break
        if cell & _LOG_BLOCKERS:
            break
        current = candidate
        candidate = current + step
    return current


def resolve_move(board: Board, registry: EntityRegistry, position: Point, target: Point) -> MoveVerdict:
    """Decide the outcome of the player at ``position`` stepping onto ``target``.

    ``target`` must be orthogonally adjacent, in bounds, and free of rocks;
    those checks belong to the caller. Nothing is mutated here: the verdict
    carries at most one log relocation for apply_verdict to commit.

    Rules, in priority order:
      1. no log on target: blocked only by water
      2. floating log: boardable when approached along its axis
      3. log on land: blocked when a stump or rock lies behind it; otherwise a
         round log tips over, an aligned log slides one cell, a crosswise log
         rolls until it hits an obstruction or drops into water. The player
         never follows a pushed log.
    """
    step = target - position
    direction = Direction.from_delta(step.x, step.y)
    if direction is None:
        raise ValueError(f"Target {target} is not orthogonally adjacent to {position}")

    cell = board.cell_at(target)
    log = registry.log_at(target)

    if log is None:
        if is_open_water(cell):
            return _blocked(MoveOutcome.BLOCKED_BY_WATER)
        return _allowed(MoveOutcome.WALKED)

    if is_open_water(cell):
        if log.orientation.is_aligned_with(direction):
            return _allowed(MoveOutcome.BOARDED_LOG)
        return _blocked(MoveOutcome.BLOCKED_BY_FLOATING_LOG)

    ahead = target + step
    ahead_cell = board.safe_cell_at(ahead)
    if ahead_cell is not None and ahead_cell & _LOG_BLOCKERS:
        return _blocked(MoveOutcome.BLOCKED_BY_OBSTACLE)

    if log.orientation is LogOrientation.ROUND:
        if registry.log_at(ahead) is not None:
            return _blocked(MoveOutcome.BLOCKED_ROUND_LOG)
        return _blocked(MoveOutcome.TIPPED_ROUND_LOG, LogMove(target, ahead, LogOrientation.along(direction)))

    if log.orientation.is_aligned_with(direction):
        if _is_water_or_off_board(board, ahead):
            # The log stays registered on the target, under the player.
            return _allowed(MoveOutcome.STEPPED_ONTO_LOG_AT_SHORE)
        if registry.log_at(ahead) is not None:
            return _blocked(MoveOutcome.BLOCKED_BY_LOG_AHEAD)
        return _blocked(MoveOutcome.SLID_LOG, LogMove(target, ahead, LogOrientation.ROUND))

    if _is_water_or_off_board(board, ahead):
        if registry.log_at(ahead) is not None:
            return _blocked(MoveOutcome.BLOCKED_ROLL)
        return _blocked(MoveOutcome.ROLLED_INTO_WATER, LogMove(target, ahead, log.orientation))
    destination = _roll_destination(board, registry, ahead, step)
    # A log lying on the first cell ahead is rolled over; landing on it is not allowed.
    if registry.log_at(destination) is not None:
        return _blocked(MoveOutcome.BLOCKED_ROLL)
    return _blocked(MoveOutcome.ROLLED_LOG, LogMove(target, destination, log.orientation))


def apply_verdict(registry: EntityRegistry, verdict: MoveVerdict) -> None:
    """Commit the log relocation carried by ``verdict``, if any."""
    move = verdict.log_move
    if move is None:
        return
    logger.debug("%s: log %s -> %s (%s)", verdict.outcome.name, move.source, move.destination, move.orientation.name)
    registry.relocate_log(move.source, move.destination)
    log = registry.log_at(move.destination)
    if log is not None:
        log.orientation = move.orientation


__all__ = ["LogMove", "MoveOutcome", "MoveVerdict", "apply_verdict", "resolve_move"]
