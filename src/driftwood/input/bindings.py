from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable, Optional

from ..board.grid import Direction

logger = logging.getLogger(__name__)

# Key names as spelled in arcade.key
DEFAULT_MOVES: Dict[str, Direction] = {
    "UP": Direction.UP,
    "W": Direction.UP,
    "DOWN": Direction.DOWN,
    "S": Direction.DOWN,
    "LEFT": Direction.LEFT,
    "A": Direction.LEFT,
    "RIGHT": Direction.RIGHT,
    "D": Direction.RIGHT,
}
DEFAULT_QUIT_KEYS = frozenset({"ESCAPE"})


@dataclass(frozen=True)
class KeyBindings:
    """Which keys step the player in which direction, and which keys quit.

    Keys are whatever the backend reports. ``default()`` is keyed by name;
    ``for_backend`` re-keys it by a key module's constants (``arcade.key``)
    so the window can look up the raw symbol of a key press.
    """

    moves: Dict[Hashable, Direction] = field(default_factory=dict)
    quit_keys: FrozenSet[Hashable] = frozenset()

    @classmethod
    def default(cls) -> "KeyBindings":
        """Arrow keys and WASD move; Escape quits."""
        return cls(dict(DEFAULT_MOVES), DEFAULT_QUIT_KEYS)

    def for_backend(self, key_module: object) -> "KeyBindings":
        """Translate named bindings into ``key_module`` codes.

        Names the module does not define are dropped with a warning.
        """

        def code(name: Hashable) -> Optional[Hashable]:
            value = getattr(key_module, str(name).upper(), None)
            if value is None:
                logger.warning("Key %r not available in %r; binding dropped", name, key_module)
            return value

        moves: Dict[Hashable, Direction] = {}
        for name, direction in self.moves.items():
            value = code(name)
            if value is not None:
                moves[value] = direction
        quits = set()
        for name in self.quit_keys:
            value = code(name)
            if value is not None:
                quits.add(value)
        return KeyBindings(moves, frozenset(quits))

    def direction_for(self, key: Hashable) -> Optional[Direction]:
        return self.moves.get(key)

    def quits(self, key: Hashable) -> bool:
        return key in self.quit_keys


__all__ = ["DEFAULT_MOVES", "DEFAULT_QUIT_KEYS", "KeyBindings"]
