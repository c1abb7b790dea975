from .events import GameEvent
from .game_state import GameState
from .loop import GameConfig, GameEngine
from .resolver import LogMove, MoveOutcome, MoveVerdict, apply_verdict, resolve_move

__all__ = [
    "GameConfig",
    "GameEngine",
    "GameEvent",
    "GameState",
    "LogMove",
    "MoveOutcome",
    "MoveVerdict",
    "apply_verdict",
    "resolve_move",
]
