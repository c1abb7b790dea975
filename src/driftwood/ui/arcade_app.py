from __future__ import annotations

import logging
from typing import Optional, Tuple

try:
    import arcade  # type: ignore
except Exception:  # pragma: no cover - optional for test envs
    arcade = None

from ..board.grid import Board, Point
from ..board.tiles import DRAW_ORDER, TileMarker
from ..config import Settings
from ..engine.game_state import GameState
from ..engine.loop import GameConfig, GameEngine
from ..entities.models import Entity, LogOrientation
from ..input import KeyBindings
from .camera import Camera

logger = logging.getLogger(__name__)


class RiverWindow:
    """Arcade window that draws the board, forwards key presses to GameState
    and ticks animations once per frame.

    Note: only constructible when Arcade is installed. Tests cover the logic
    layer, not rendering.
    """

    def __init__(self, state: GameState, settings: Optional[Settings] = None, title: str = "Driftwood"):
        if arcade is None:
            raise RuntimeError("Arcade package is not installed; cannot create window")
        self.state = state
        self.settings = settings or Settings()
        self.engine = GameEngine(state, GameConfig(tick_rate=self.settings.tick_rate))
        self.camera = Camera(
            cell_size=self.settings.cell_size,
            stiffness=self.settings.camera_stiffness,
            damping=self.settings.camera_damping,
        )
        self.keys = KeyBindings.default().for_backend(arcade.key)

        self._window = arcade.Window(self.settings.width, self.settings.height, title=title)
        self._window.background_color = TileMarker.WATER.color
        self._window.on_draw = self.on_draw
        self._window.on_update = self.on_update
        self._window.on_key_press = self.on_key_press
        logger.info("Arcade window initialized (%dx%d)", self.settings.width, self.settings.height)

    def run(self) -> None:
        self.engine.start()
        arcade.run()

    # ---- Frame -------------------------------------------------------------
    def on_update(self, delta_time: float) -> None:
        if not self.engine.running:
            self._window.close()
            return
        self.engine.update(delta_time)
        self.camera.update(self.state.registry.player_position, self._window.width, self._window.height, delta_time)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if self.keys.quits(symbol):
            self.engine.stop()
            self._window.close()
            return
        direction = self.keys.direction_for(symbol)
        if direction is not None:
            self.state.step(direction)

    # ---- Drawing -----------------------------------------------------------
    def _rect(self, left: float, top: float, width: float, height: float, color: Tuple[int, int, int]) -> None:
        # Grid space grows downwards, Arcade upwards
        bottom = self._window.height - top - height
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, color)

    def _circle(self, cx: float, cy: float, radius: float, color: Tuple[int, int, int]) -> None:
        arcade.draw_circle_filled(cx, self._window.height - cy, radius, color)

    def _draw_cell(self, board: Board, x: int, y: int) -> None:
        cell = board.cell_at(Point(x, y))
        size = self.camera.cell_size
        left, top = self.camera.to_screen(x, y)
        for marker in DRAW_ORDER:
            if marker not in cell:
                continue
            if marker is TileMarker.STUMP:
                self._circle(left + size / 2, top + size / 2, size / 3, marker.color)
            elif marker is TileMarker.ROCK:
                self._rect(left + size / 6, top + size / 6, 2 * size / 3, 2 * size / 3, marker.color)
            else:
                # Overdraw by half a pixel so neighbouring cells leave no seams
                self._rect(left - 0.5, top - 0.5, size + 1, size + 1, marker.color)

    def _draw_entity(self, entity: Entity, draw_x: float, draw_y: float) -> None:
        size = self.camera.cell_size
        left, top = self.camera.to_screen(draw_x, draw_y)
        if not entity.is_log:
            self._rect(left + size / 3, top + size / 3, size / 3, size / 3, entity.color)
        elif entity.orientation is LogOrientation.ROUND:
            self._circle(left + size / 2, top + size / 2, size / 6, entity.color)
        elif entity.orientation is LogOrientation.HORIZONTAL:
            self._rect(left + size / 6, top + size / 3, 2 * size / 3, size / 3, entity.color)
        else:
            self._rect(left + size / 3, top + size / 6, size / 3, 2 * size / 3, entity.color)

    def on_draw(self) -> None:
        self._window.clear()
        board = self.state.board
        for y in range(board.height):
            for x in range(board.width):
                self._draw_cell(board, x, y)
        for pos, entity in self.state.registry.entities():
            draw_x, draw_y = entity.draw_position(pos)
            self._draw_entity(entity, draw_x, draw_y)

