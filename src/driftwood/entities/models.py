from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple

from ..board.grid import Direction, Point
from .animation import AnimationState, AnimationTiming, Vec2, as_vec, manhattan

Color = Tuple[int, int, int]

PLAYER_COLOR: Color = (255, 255, 255)
LOG_COLOR: Color = (219, 128, 98)


class EntityKind(Enum):
    PLAYER = auto()
    LOG = auto()


class LogOrientation(Enum):
    """Shape of a log within its cell.

    ROUND logs sit upright like a ball; HORIZONTAL and VERTICAL logs lie along
    an axis. Pushing along that axis slides the log, across it rolls the log.
    """

    ROUND = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()

    @classmethod
    def along(cls, direction: Direction) -> "LogOrientation":
        return cls.HORIZONTAL if direction.is_horizontal else cls.VERTICAL

    def is_aligned_with(self, direction: Direction) -> bool:
        return direction.is_horizontal == (self is LogOrientation.HORIZONTAL)


@dataclass
class Entity:
    """A movable thing on the board, tagged by ``kind``.

    Players and logs share the same animation record; only how long an
    animation lasts depends on the kind. ``orientation`` is only meaningful
    for logs. Positions are owned by the EntityRegistry, not the entity.
    """

    kind: EntityKind
    color: Color = PLAYER_COLOR
    animation: AnimationState = field(default_factory=AnimationState)
    orientation: LogOrientation = LogOrientation.ROUND

    @classmethod
    def player(cls, start: Point, color: Color = PLAYER_COLOR) -> "Entity":
        return cls(EntityKind.PLAYER, color, AnimationState(origin=as_vec(start)))

    @classmethod
    def log(cls, start: Point, color: Color = LOG_COLOR) -> "Entity":
        return cls(EntityKind.LOG, color, AnimationState(origin=as_vec(start)))

    @property
    def is_log(self) -> bool:
        return self.kind is EntityKind.LOG

    def animation_duration(self, logical: Point, timing: AnimationTiming) -> float:
        if self.kind is EntityKind.PLAYER:
            return timing.player_duration
        # A single roll can cross several cells; keep the speed constant.
        return timing.log_duration_per_cell * manhattan(self.animation.origin, logical)

    def tick(self, dt: float, logical: Point, timing: AnimationTiming) -> None:
        self.animation.duration = self.animation_duration(logical, timing)
        self.animation.advance(dt, logical)

    def draw_position(self, logical: Point) -> Vec2:
        return self.animation.interpolate(logical)
