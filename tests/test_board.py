import pytest

from driftwood.board.grid import Board, Direction, Point
from driftwood.board.tiles import TileMarker
from driftwood.exceptions import LevelFormatError

W = TileMarker.WATER
L = TileMarker.LAND


def test_in_bounds_edges():
    board = Board([[L, L, W], [W, L, L]])
    assert board.width == 3
    assert board.height == 2

    assert board.in_bounds(Point(0, 0))
    assert board.in_bounds(Point(2, 1))
    assert not board.in_bounds(Point(-1, 0))
    assert not board.in_bounds(Point(0, -1))
    assert not board.in_bounds(Point(3, 0))
    assert not board.in_bounds(Point(0, 2))


def test_cell_at_is_row_major_and_fails_fast():
    board = Board([[L, W], [W, L | TileMarker.STUMP]])
    assert board.cell_at(Point(1, 0)) == W
    assert board.cell_at(Point(0, 1)) == W
    assert TileMarker.STUMP in board.cell_at(Point(1, 1))

    with pytest.raises(IndexError):
        board.cell_at(Point(2, 0))
    assert board.safe_cell_at(Point(2, 0)) is None
    assert board.safe_cell_at(Point(-1, -1)) is None


def test_rejects_empty_or_ragged_rows():
    with pytest.raises(LevelFormatError):
        Board([])
    with pytest.raises(LevelFormatError):
        Board([[L, L], [L]])


def test_stump_positions_row_major():
    S = L | TileMarker.STUMP
    board = Board([[L, S, L], [S, W, S]])
    assert list(board.stump_positions()) == [Point(1, 0), Point(0, 1), Point(2, 1)]


def test_to_lines():
    board = Board([[L, W], [L | TileMarker.ROCK, L | TileMarker.STUMP]])
    assert board.to_lines() == ["#~", "%@"]


def test_point_arithmetic():
    assert Point(1, 2) + Point(1, 0) == Point(2, 2)
    assert Point(1, 2) - Point(1, 3) == Point(0, -1)
    assert Point(0, 0).manhattan(Point(2, -3)) == 5


def test_direction_from_delta():
    assert Direction.from_delta(1, 0) is Direction.RIGHT
    assert Direction.from_delta(0, -1) is Direction.UP
    assert Direction.from_delta(1, 1) is None
    assert Direction.from_delta(0, 0) is None
    assert Direction.from_delta(2, 0) is None
    assert Direction.LEFT.is_horizontal
    assert not Direction.DOWN.is_horizontal
