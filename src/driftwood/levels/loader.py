from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.resources import files as resource_files
from typing import Any, Dict, List, Optional, Sequence

import yaml

from ..board.grid import Board, Point
from ..board.tiles import TileMarker
from ..exceptions import LevelFormatError

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = "riverbank.yaml"

# One character per cell per layer; layers stack their markers.
LAYER_CHARS: Dict[str, TileMarker] = {
    " ": TileMarker.WATER,
    "#": TileMarker.LAND,
    "@": TileMarker.STUMP,
    "%": TileMarker.ROCK,
    ".": TileMarker.NONE,
}


@dataclass(frozen=True)
class Level:
    name: str
    board: Board
    player_start: Point


def parse_layers(layers: Sequence[Sequence[str]]) -> Board:
    """Combine equally sized text layers into a Board.

    Each character adds its marker to the cell (see LAYER_CHARS), so a land
    layer plus an object layer yields cells such as ``LAND | STUMP``.
    """
    if not layers or not layers[0] or not layers[0][0]:
        raise LevelFormatError("Level needs at least one non-empty layer")
    height = len(layers[0])
    width = len(layers[0][0])
    cells: List[List[TileMarker]] = [[TileMarker.NONE for _ in range(width)] for _ in range(height)]

    for index, layer in enumerate(layers):
        if len(layer) != height:
            raise LevelFormatError(f"Layer {index} has {len(layer)} rows, expected {height}")
        for y, row in enumerate(layer):
            if len(row) != width:
                raise LevelFormatError(f"Layer {index} row {y} has width {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                marker = LAYER_CHARS.get(ch)
                if marker is None:
                    raise LevelFormatError(f"Unknown character {ch!r} at layer {index} ({x}, {y})")
                cells[y][x] |= marker
    return Board(cells)


def _level_from_dict(raw: Dict[str, Any], fallback_name: str) -> Level:
    if not isinstance(raw, dict):
        raise LevelFormatError("Level file must contain a mapping")
    layers = raw.get("layers")
    if not isinstance(layers, list) or not all(isinstance(layer, list) for layer in layers):
        raise LevelFormatError("'layers' must be a list of row lists")
    board = parse_layers([[str(row) for row in layer] for layer in layers])

    start = raw.get("player", [0, 0])
    try:
        player = Point(int(start[0]), int(start[1]))
    except (TypeError, ValueError, IndexError) as exc:
        raise LevelFormatError(f"Invalid player start: {start!r}") from exc
    if not board.in_bounds(player):
        raise LevelFormatError(f"Player start {player} lies outside the {board.width}x{board.height} board")

    return Level(name=str(raw.get("name", fallback_name)), board=board, player_start=player)


def load_level(path: Optional[str] = None) -> Level:
    """Load a level from YAML.

    If path is None, loads the bundled default resource at
    driftwood/levels/riverbank.yaml.
    """
    if path is None:
        data = resource_files("driftwood.levels").joinpath(DEFAULT_LEVEL).read_text(encoding="utf-8")
        name = DEFAULT_LEVEL.rsplit(".", 1)[0]
        logger.debug("Loaded embedded level resource %s", DEFAULT_LEVEL)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        name = str(path)
        logger.debug("Loaded level from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise LevelFormatError(f"Invalid level YAML: {exc}") from exc
    level = _level_from_dict(raw, name)
    logger.info("Level %r: %dx%d, player at %s", level.name, level.board.width, level.board.height, level.player_start)
    return level


__all__ = ["DEFAULT_LEVEL", "LAYER_CHARS", "Level", "load_level", "parse_layers"]
