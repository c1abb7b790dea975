from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..exceptions import LevelFormatError
from .tiles import TileMarker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


class Direction(Enum):
    """Unit moves on the grid. Rows grow downwards, so UP is -y."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_horizontal(self) -> bool:
        return self.dy == 0

    @property
    def delta(self) -> Point:
        return Point(self.dx, self.dy)

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Optional["Direction"]:
        """Return the direction for a unit (dx, dy), or None for anything else."""
        for d in cls:
            if d.value == (dx, dy):
                return d
        return None


class Board:
    """Read-only terrain matrix, row-major, indexed ``cells[y][x]``.

    The board is the sole authority for static terrain; movable entities live
    in the EntityRegistry. Its shape is fixed at construction.
    """

    __slots__ = ("_w", "_h", "_cells")

    def __init__(self, cells: Sequence[Sequence[TileMarker]]) -> None:
        if not cells or not cells[0]:
            raise LevelFormatError("Board must have at least one row and one column")
        width = len(cells[0])
        for i, row in enumerate(cells):
            if len(row) != width:
                raise LevelFormatError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")
        self._w = width
        self._h = len(cells)
        self._cells: Tuple[Tuple[TileMarker, ...], ...] = tuple(tuple(row) for row in cells)
        logger.debug("Initialized Board %dx%d", self._w, self._h)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    def in_bounds(self, pos: Point) -> bool:
        """True iff ``0 <= x < width`` and ``0 <= y < height``. Never raises."""
        return 0 <= pos.x < self._w and 0 <= pos.y < self._h

    def cell_at(self, pos: Point) -> TileMarker:
        """Return the markers at ``pos``.

        Raises IndexError when out of bounds; callers must bounds-check first.
        """
        if not self.in_bounds(pos):
            raise IndexError(f"Coordinates out of bounds: ({pos.x}, {pos.y}) for board {self._w}x{self._h}")
        return self._cells[pos.y][pos.x]

    def safe_cell_at(self, pos: Point) -> Optional[TileMarker]:
        if not self.in_bounds(pos):
            return None
        return self._cells[pos.y][pos.x]

    def stump_positions(self) -> Iterator[Point]:
        """Yield every cell carrying a stump, row-major."""
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                if TileMarker.STUMP in cell:
                    yield Point(x, y)

    def to_lines(self) -> List[str]:
        return ["".join(cell.glyph for cell in row) for row in self._cells]

    def __repr__(self) -> str:
        return f"Board(width={self._w}, height={self._h})"
