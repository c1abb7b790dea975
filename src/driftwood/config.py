from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib

from .entities.animation import AnimationTiming

logger = logging.getLogger(__name__)


def _clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


@dataclass
class Settings:
    """Runtime settings for the window, animation timing and camera.

    Constructed from (lowest to highest precedence):
    - dataclass defaults
    - a TOML file (env DW_SETTINGS_FILE or configs/settings.toml if present)
    - environment variables (prefix: DW_)

        settings = Settings.from_sources()
        state = GameState.from_level(load_level(settings.level), settings.timing())
    """

    # Window/display
    width: int = 1280
    height: int = 720
    cell_size: int = 40

    # Animation, seconds per crossed cell
    player_move_duration: float = 0.06
    log_move_duration: float = 0.06

    # Frame loop
    tick_rate: float = 60.0

    # Camera follow easing
    camera_stiffness: float = 0.001
    camera_damping: float = 0.7

    # Level file; None means the bundled default
    level: Optional[str] = None

    def validate(self) -> None:
        """Validate and normalize settings to safe values."""
        if self.width <= 0 or self.height <= 0:
            logger.warning("Invalid window size %sx%s; resetting to 1280x720", self.width, self.height)
            self.width, self.height = 1280, 720
        if self.cell_size <= 0:
            logger.warning("Invalid cell size %s; resetting to 40", self.cell_size)
            self.cell_size = 40
        if self.player_move_duration <= 0:
            logger.warning("Invalid player_move_duration %s; resetting to 0.06", self.player_move_duration)
            self.player_move_duration = 0.06
        if self.log_move_duration <= 0:
            logger.warning("Invalid log_move_duration %s; resetting to 0.06", self.log_move_duration)
            self.log_move_duration = 0.06
        if self.tick_rate < 0:
            self.tick_rate = 0.0
        self.camera_damping = _clamp(float(self.camera_damping), 0.0, 1.0)
        self.camera_stiffness = max(0.0, float(self.camera_stiffness))

    def timing(self) -> AnimationTiming:
        return AnimationTiming(
            player_duration=float(self.player_move_duration),
            log_duration_per_cell=float(self.log_move_duration),
        )

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in allowed}
        obj = cls(**filtered)
        obj.validate()
        return obj

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "DW_WIDTH": ("width", int),
            "DW_HEIGHT": ("height", int),
            "DW_CELL_SIZE": ("cell_size", int),
            "DW_PLAYER_MOVE_DURATION": ("player_move_duration", float),
            "DW_LOG_MOVE_DURATION": ("log_move_duration", float),
            "DW_TICK_RATE": ("tick_rate", float),
            "DW_CAMERA_STIFFNESS": ("camera_stiffness", float),
            "DW_CAMERA_DAMPING": ("camera_damping", float),
            "DW_LEVEL": ("level", str),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_toml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        try:
            with path.open("rb") as f:
                doc = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to read settings TOML %s: %s", path, exc)
            return {}
        # Flatten [window]/[animation]/[camera] sections and top-level keys
        flat: Dict[str, Any] = {}
        for section in ("window", "animation", "camera"):
            if isinstance(doc.get(section), dict):
                flat.update(doc[section])
        for k, v in doc.items():
            if isinstance(v, dict):
                continue
            flat[k] = v
        return flat

    @classmethod
    def discover_config_path(cls, env: Optional[Dict[str, str]] = None) -> Optional[Path]:
        env = os.environ if env is None else env
        env_path = env.get("DW_SETTINGS_FILE")
        if env_path:
            return Path(env_path).expanduser().resolve()
        # <repo>/src/driftwood/config.py -> <repo>/configs/settings.toml
        repo_root = Path(__file__).resolve().parents[2]
        default_path = repo_root / "configs" / "settings.toml"
        if default_path.exists():
            return default_path
        return None

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Dict[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "Settings":
        data: Dict[str, Any] = {}
        if file_path is not None:
            chosen_path: Optional[Path] = Path(file_path).expanduser().resolve()
        else:
            chosen_path = cls.discover_config_path(env)
        if chosen_path is not None:
            data.update(cls.from_toml_file(chosen_path))
        data.update(cls.from_env(env))
        return cls.from_dict(data)


__all__ = ["Settings"]
