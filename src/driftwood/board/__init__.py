from .grid import Board, Direction, Point
from .tiles import TileMarker, is_open_water, is_safe

__all__ = ["Board", "Direction", "Point", "TileMarker", "is_open_water", "is_safe"]
