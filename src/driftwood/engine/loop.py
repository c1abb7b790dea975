from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from .game_state import GameState

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for the frame loop.

    Attributes:
        tick_rate: Target frames per second. If 0 or None, ticks as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many frames.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None


class GameEngine:
    """Drives GameState animations, one ``tick`` per frame.

    Kept free of any rendering backend so it can be tested headless and also
    driven by Arcade's ``on_update``.
    """

    def __init__(self, state: GameState, config: Optional[GameConfig] = None) -> None:
        self.state = state
        self.config = config or GameConfig()
        self._running: bool = False
        self._step: int = 0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    @property
    def frame_time(self) -> float:
        """Nominal seconds per frame (1/60 when uncapped)."""
        if self.config.tick_rate and self.config.tick_rate > 0:
            return 1.0 / float(self.config.tick_rate)
        return 1.0 / 60.0

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def update(self, dt: float) -> None:
        """Perform a single frame.

        Args:
            dt: Delta time in seconds since last frame.
        """
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return
        self._step += 1
        self.state.tick(dt)

        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def settle(self, dt: Optional[float] = None) -> int:
        """Tick with a fixed ``dt`` until every animation is idle.

        Returns:
            Number of frames spent. Stops early if the engine stops.
        """
        dt = self.frame_time if dt is None else dt
        frames = 0
        while self._running and not self.state.is_idle():
            self.update(dt)
            frames += 1
        return frames

    def run(self) -> None:
        """Run a blocking loop until stopped or max_steps reached.

        Throttles to tick_rate if configured.
        """
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            if self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.update(dt)

            if target_dt > 0:
                elapsed = time.perf_counter() - now
                remaining = target_dt - elapsed
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
