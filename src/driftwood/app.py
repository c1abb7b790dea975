from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional, TextIO

from .board.grid import Direction
from .config import Settings
from .engine.game_state import GameState
from .engine.loop import GameConfig, GameEngine
from .exceptions import DriftwoodError
from .levels.loader import load_level

logger = logging.getLogger(__name__)

_MOVE_LETTERS = {
    "U": Direction.UP,
    "D": Direction.DOWN,
    "L": Direction.LEFT,
    "R": Direction.RIGHT,
}


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def parse_moves(moves: str) -> List[Direction]:
    """Turn a string like ``"RRD L"`` into directions; spaces and commas are ignored.

    Raises:
        ValueError: on any other character.
    """
    out: List[Direction] = []
    for ch in moves.upper():
        if ch in " ,":
            continue
        if ch not in _MOVE_LETTERS:
            raise ValueError(f"Unknown move {ch!r}; use U, D, L or R")
        out.append(_MOVE_LETTERS[ch])
    return out


def _load_state(settings: Settings) -> GameState:
    level = load_level(settings.level)
    return GameState.from_level(level, settings.timing())


def run_gui(settings: Optional[Settings] = None) -> int:
    """Open the Arcade window if available, otherwise fall back to headless.

    Returns:
        Process exit code (0 on success).
    """
    settings = settings or Settings.from_sources()
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(settings)

    from .ui.arcade_app import RiverWindow

    try:
        state = _load_state(settings)
    except (DriftwoodError, OSError) as exc:
        logger.error("Cannot load level: %s", exc)
        return 1
    try:
        window = RiverWindow(state, settings)
        logger.info("Launching Arcade window")
        window.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_headless(
    settings: Optional[Settings] = None,
    moves: str = "",
    max_steps: Optional[int] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Replay ``moves`` on the level without a window and print the final board.

    Each move is followed by enough fixed-length frames for every animation
    to finish, so the result does not depend on wall-clock time.
    """
    settings = settings or Settings.from_sources()
    out = out or sys.stdout
    try:
        directions = parse_moves(moves)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    try:
        state = _load_state(settings)
    except (DriftwoodError, OSError) as exc:
        logger.error("Cannot load level: %s", exc)
        return 1

    engine = GameEngine(state, GameConfig(tick_rate=settings.tick_rate, max_steps=max_steps))
    engine.start()
    for direction in directions:
        moved = state.step(direction)
        verdict = state.last_verdict
        logger.info(
            "%s: %s (%s)",
            direction.name,
            "moved" if moved else "blocked",
            verdict.outcome.name if verdict else "rejected",
        )
        engine.settle()
        if not engine.running:
            logger.warning("Stopped after %d frames (max_steps)", engine.step)
            break
    engine.stop()

    for line in state.render_lines():
        print(line.rstrip(), file=out)
    print(f"Player at {state.player_pos} after {engine.step} frames", file=out)
    return 0


def run_auto(settings: Optional[Settings] = None, moves: str = "", max_steps: Optional[int] = None) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    Honors environment overrides:
      - DW_HEADLESS=1 forces headless.
      - Scripted moves always run headless.
    """
    if os.getenv("DW_HEADLESS") == "1" or moves:
        return run_headless(settings, moves=moves, max_steps=max_steps)
    return run_gui(settings)
