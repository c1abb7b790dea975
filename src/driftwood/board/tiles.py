from enum import Flag
from typing import Tuple


class TileMarker(Flag):
    """Terrain primitives a board cell may carry.

    A cell is the combination of its markers (e.g. ``LAND | STUMP``), so
    membership tests read naturally: ``TileMarker.ROCK in cell``.

    - WATER: open water; cannot be waded
    - LAND: solid ground
    - STUMP: tree stump; spawns a log at load time and blocks pushed logs
    - ROCK: impassable for the player and for logs
    """

    NONE = 0
    WATER = 1
    LAND = 2
    STUMP = 4
    ROCK = 8

    @property
    def glyph(self) -> str:
        """One character per cell for the text snapshot, most significant marker first.

        Water prints as ``~`` rather than the layout's blank so that river
        cells survive the snapshot's trailing-space strip.
        """
        if TileMarker.ROCK in self:
            return "%"
        if TileMarker.STUMP in self:
            return "@"
        if TileMarker.LAND in self:
            return "#"
        if TileMarker.WATER in self:
            return "~"
        return " "

    @property
    def color(self) -> Tuple[int, int, int]:
        """Default RGB color of a single marker for 2D rendering (Arcade)."""
        return _COLORS.get(self, (255, 255, 255))


# Draw order, bottom to top.
DRAW_ORDER = (TileMarker.WATER, TileMarker.LAND, TileMarker.STUMP, TileMarker.ROCK)

_COLORS = {
    TileMarker.WATER: (94, 123, 255),
    TileMarker.LAND: (103, 191, 112),
    TileMarker.STUMP: (109, 86, 53),
    TileMarker.ROCK: (128, 128, 128),
}


def is_safe(cell: TileMarker) -> bool:
    """Return True if the player may stand on the cell.

    Args:
        cell: Combined markers of one cell.

    Returns:
        bool: False iff the cell carries a rock, whatever else is on it.
    """

    return TileMarker.ROCK not in cell


def is_open_water(cell: TileMarker) -> bool:
    return TileMarker.WATER in cell
