from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from ..board.grid import Board, Point
from ..exceptions import RegistryError
from .animation import AnimationPhase, AnimationTiming, Vec2, as_vec
from .models import Entity, EntityKind

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Owns the player and every log, keyed by grid position.

    This is the only authority for "which movable entity is on cell (x, y)".
    At most one log is stored per position; positions outside the board are
    valid keys (a log that rolled off the edge stays registered there).
    """

    def __init__(self, player_start: Point, timing: Optional[AnimationTiming] = None) -> None:
        self.timing = timing or AnimationTiming()
        self.player: Entity = Entity.player(player_start)
        self._player_pos: Point = player_start
        self._logs: Dict[Point, Entity] = {}

    @classmethod
    def from_board(
        cls, board: Board, player_start: Point, timing: Optional[AnimationTiming] = None
    ) -> "EntityRegistry":
        """Create a registry with one round log on every stump of ``board``."""
        registry = cls(player_start, timing)
        for pos in board.stump_positions():
            registry.add_log(pos)
        logger.info("Registry created with %d logs, player at %s", len(registry._logs), player_start)
        return registry

    # ---- Player ------------------------------------------------------------
    @property
    def player_position(self) -> Point:
        return self._player_pos

    def set_player_position(self, to: Point) -> bool:
        """Commit a new logical player position.

        Refused while the player is still animating a previous move.

        Returns:
            True if the position was committed.
        """
        anim = self.player.animation
        if anim.is_busy:
            logger.debug("Player still animating; refusing move to %s", to)
            return False
        anim.begin(as_vec(self._player_pos))
        self._player_pos = to
        return True

    # ---- Logs --------------------------------------------------------------
    def add_log(self, pos: Point) -> Entity:
        if pos in self._logs:
            raise RegistryError(f"A log already occupies {pos}")
        log = Entity.log(pos)
        self._logs[pos] = log
        return log

    def log_at(self, pos: Point) -> Optional[Entity]:
        return self._logs.get(pos)

    def relocate_log(self, source: Point, destination: Point) -> None:
        """Move the log keyed at ``source`` to ``destination`` and mark it pending.

        No-op when there is no log at ``source``. A log caught mid-animation
        restarts from where it is currently drawn.
        """
        log = self._logs.get(source)
        if log is None:
            logger.debug("No log at %s to relocate", source)
            return
        if destination != source and destination in self._logs:
            raise RegistryError(f"Cannot move log from {source} onto occupied {destination}")
        if log.animation.is_busy:
            origin: Vec2 = log.draw_position(source)
        else:
            origin = as_vec(source)
        del self._logs[source]
        self._logs[destination] = log
        log.animation.begin(origin)
        logger.debug("Log moved %s -> %s", source, destination)

    def logs(self) -> Iterator[Tuple[Point, Entity]]:
        return iter(list(self._logs.items()))

    def log_positions(self) -> List[Point]:
        return list(self._logs)

    def __len__(self) -> int:
        return len(self._logs)

    # ---- Animation ---------------------------------------------------------
    def entities(self) -> Iterator[Tuple[Point, Entity]]:
        """Every entity with its logical position; logs first, player last (draw order)."""
        yield from self.logs()
        yield self._player_pos, self.player

    def tick(self, dt: float) -> None:
        """Advance every entity's animation by ``dt`` seconds."""
        for pos, entity in self.entities():
            entity.tick(dt, pos, self.timing)

    def draw_position(self, entity: Entity) -> Vec2:
        if entity.kind is EntityKind.PLAYER:
            return entity.draw_position(self._player_pos)
        for pos, log in self._logs.items():
            if log is entity:
                return log.draw_position(pos)
        raise RegistryError("Entity is not registered")

    def is_idle(self) -> bool:
        return all(e.animation.phase is AnimationPhase.IDLE for _, e in self.entities())


__all__ = ["EntityRegistry"]
