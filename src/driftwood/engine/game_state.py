from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from ..board.grid import Board, Direction, Point
from ..board.tiles import is_safe
from ..entities.animation import AnimationTiming
from ..entities.models import LogOrientation
from ..entities.registry import EntityRegistry
from .events import GameEvent
from .resolver import MoveVerdict, apply_verdict, resolve_move

if TYPE_CHECKING:  # pragma: no cover
    from ..levels.loader import Level

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameState"], None]

_LOG_GLYPHS = {
    LogOrientation.ROUND: "o",
    LogOrientation.HORIZONTAL: "-",
    LogOrientation.VERTICAL: "|",
}


class GameState:
    """Holds the board and its entities and applies player moves.

    One call to ``move`` per discrete key press, one call to ``tick`` per
    rendered frame.
    """

    def __init__(self, board: Board, registry: EntityRegistry) -> None:
        self._listeners: List[Listener] = []
        self.board = board
        self.registry = registry
        self.last_verdict: Optional[MoveVerdict] = None
        logger.info("Initialized GameState on %r, player at %s", board, registry.player_position)

    @classmethod
    def from_level(cls, level: "Level", timing: Optional[AnimationTiming] = None) -> "GameState":
        registry = EntityRegistry.from_board(level.board, level.player_start, timing)
        return cls(level.board, registry)

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to game events (player moved, log moved, move blocked)."""
        self._listeners.append(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:  # pragma: no cover - listeners shouldn't crash the game
                logger.exception("Listener errored on %s: %s", event, ex)

    @property
    def player_pos(self) -> Tuple[int, int]:
        pos = self.registry.player_position
        return pos.x, pos.y

    def can_attempt(self, dx: int, dy: int) -> bool:
        """Checks that happen before any push rule is consulted."""
        if Direction.from_delta(dx, dy) is None:
            # Only cardinal unit moves allowed
            return False
        if self.registry.player.animation.is_busy:
            return False
        target = self.registry.player_position + Point(dx, dy)
        if not self.board.in_bounds(target):
            return False
        return is_safe(self.board.cell_at(target))

    def move(self, dx: int, dy: int) -> bool:
        """Attempt to move the player by (dx, dy).

        Pushing a log may relocate it even though the player stays put.

        Returns:
            True if the player advanced onto the target cell.
        """
        if not self.can_attempt(dx, dy):
            logger.debug("Rejected move by (%d, %d) from %s", dx, dy, self.registry.player_position)
            self.last_verdict = None
            self._emit(GameEvent.MOVE_BLOCKED)
            return False

        position = self.registry.player_position
        target = position + Point(dx, dy)
        verdict = resolve_move(self.board, self.registry, position, target)
        self.last_verdict = verdict
        logger.debug("Move %s -> %s resolved as %s", position, target, verdict.outcome.name)

        if verdict.log_move is not None:
            apply_verdict(self.registry, verdict)
            self._emit(GameEvent.LOG_MOVED)

        if not verdict.allowed:
            self._emit(GameEvent.MOVE_BLOCKED)
            return False

        if not self.registry.set_player_position(target):
            self._emit(GameEvent.MOVE_BLOCKED)
            return False
        self._emit(GameEvent.PLAYER_MOVED)
        return True

    def step(self, direction: Direction) -> bool:
        return self.move(direction.dx, direction.dy)

    def tick(self, dt: float) -> None:
        """Advance every entity animation by ``dt`` seconds."""
        self.registry.tick(dt)

    def is_idle(self) -> bool:
        return self.registry.is_idle()

    def render_lines(self) -> List[str]:
        """ASCII snapshot: terrain glyphs with logs and the player (``P``) on top.

        Logs that left the board are not shown.
        """
        rows = [list(line) for line in self.board.to_lines()]
        for pos, log in self.registry.logs():
            if self.board.in_bounds(pos):
                rows[pos.y][pos.x] = _LOG_GLYPHS[log.orientation]
        px, py = self.player_pos
        rows[py][px] = "P"
        return ["".join(r) for r in rows]
