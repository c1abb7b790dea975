from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple

from ..board.grid import Point

logger = logging.getLogger(__name__)

Vec2 = Tuple[float, float]


class AnimationPhase(Enum):
    """Lifecycle of one grid move on screen.

    - IDLE: drawn at its logical cell
    - PENDING: a move was committed; animation starts on the next tick
    - ANIMATING: interpolating from origin to the logical cell
    """

    IDLE = auto()
    PENDING = auto()
    ANIMATING = auto()


@dataclass(frozen=True)
class AnimationTiming:
    """Animation durations, in seconds.

    Attributes:
        player_duration: Time for the player to cross one cell.
        log_duration_per_cell: Time for a log to cross one cell; a log that
            rolls N cells animates for N times this long.
    """

    player_duration: float = 0.06
    log_duration_per_cell: float = 0.06


def as_vec(pos: Point) -> Vec2:
    return (float(pos.x), float(pos.y))


@dataclass
class AnimationState:
    """Per-entity timer and interpolation state, advanced once per frame."""

    phase: AnimationPhase = AnimationPhase.IDLE
    elapsed: float = 0.0
    duration: float = 0.06
    origin: Vec2 = field(default=(0.0, 0.0))

    @property
    def is_busy(self) -> bool:
        return self.phase is AnimationPhase.ANIMATING

    def begin(self, origin: Vec2) -> None:
        """Mark a committed move; timing restarts on the next tick."""
        self.phase = AnimationPhase.PENDING
        self.origin = origin

    def advance(self, dt: float, logical: Point) -> None:
        if self.phase is AnimationPhase.IDLE:
            return
        if self.phase is AnimationPhase.PENDING:
            # The tick that starts the animation also counts towards it.
            self.phase = AnimationPhase.ANIMATING
            self.elapsed = dt
            return
        self.elapsed += dt
        if self.elapsed > self.duration:
            self.phase = AnimationPhase.IDLE
            self.origin = as_vec(logical)

    def interpolate(self, logical: Point) -> Vec2:
        """Return the draw position between ``origin`` and ``logical``.

        Linear in ``elapsed / duration``; IDLE entities (and zero-length
        animations) sit on their logical cell, PENDING ones on their origin.
        """
        if self.phase is AnimationPhase.IDLE or self.duration <= 0:
            return as_vec(logical)
        if self.phase is AnimationPhase.PENDING:
            return self.origin
        t = self.elapsed / self.duration
        ox, oy = self.origin
        return (ox + (logical.x - ox) * t, oy + (logical.y - oy) * t)


def manhattan(origin: Vec2, logical: Point) -> float:
    return abs(logical.x - origin[0]) + abs(logical.y - origin[1])


__all__ = [
    "AnimationPhase",
    "AnimationState",
    "AnimationTiming",
    "Vec2",
    "as_vec",
    "manhattan",
]
