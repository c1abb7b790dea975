import sys
from pathlib import Path

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

import pytest

from driftwood.board.grid import Point
from driftwood.engine.game_state import GameState
from driftwood.entities.registry import EntityRegistry
from driftwood.levels.loader import parse_layers


@pytest.fixture
def make_state():
    """Build a GameState from a terrain layer plus an optional object layer.

    Terrain: ' ' water, '#' land. Objects: '@' stump (spawns a log), '%' rock,
    '.' nothing. Object rows default to all '.'.
    """

    def _make(terrain, objects=None, player=(0, 0)):
        if objects is None:
            objects = ["." * len(row) for row in terrain]
        board = parse_layers([terrain, objects])
        registry = EntityRegistry.from_board(board, Point(*player))
        return GameState(board, registry)

    return _make
