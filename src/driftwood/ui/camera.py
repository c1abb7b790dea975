from __future__ import annotations

from dataclasses import dataclass

from ..board.grid import Point


@dataclass
class Camera:
    """Eases the board offset so the player drifts towards the viewport centre.

    Works in screen pixels with y growing downwards, like the grid. The
    spring constants are tuned for milliseconds, so ``update`` converts.
    """

    offset_x: float = 100.0
    offset_y: float = 100.0
    cell_size: int = 40
    stiffness: float = 0.001
    damping: float = 0.7
    velocity_x: float = 0.0
    velocity_y: float = 0.0

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Top-left pixel of grid coordinate (x, y)."""
        return (self.offset_x + x * self.cell_size, self.offset_y + y * self.cell_size)

    def update(self, player: Point, viewport_width: float, viewport_height: float, dt: float) -> None:
        elapsed_ms = dt * 1000.0
        px, py = self.to_screen(player.x, player.y)
        half = self.cell_size / 2

        self.velocity_x += self.stiffness * (viewport_width - px * 2 - half)
        self.velocity_y += self.stiffness * (viewport_height - py * 2 - half)

        self.velocity_x *= self.damping
        self.velocity_y *= self.damping

        self.offset_x += self.velocity_x * elapsed_ms
        self.offset_y += self.velocity_y * elapsed_ms
