from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from driftwood.config import Settings


def test_defaults_match_original_timing():
    settings = Settings.from_sources(env={})
    timing = settings.timing()
    assert timing.player_duration == pytest.approx(0.06)
    assert timing.log_duration_per_cell == pytest.approx(0.06)
    assert settings.cell_size == 40
    assert settings.level is None


def test_env_overrides() -> None:
    env = {
        "DW_WIDTH": "1920",
        "DW_HEIGHT": "1080",
        "DW_CELL_SIZE": "32",
        "DW_PLAYER_MOVE_DURATION": "0.1",
        "DW_LOG_MOVE_DURATION": "0.2",
        "DW_LEVEL": "levels/pond.yaml",
    }
    settings = Settings.from_sources(env=env)

    assert settings.width == 1920
    assert settings.height == 1080
    assert settings.cell_size == 32
    assert settings.timing().player_duration == pytest.approx(0.1)
    assert settings.timing().log_duration_per_cell == pytest.approx(0.2)
    assert settings.level == "levels/pond.yaml"


def test_bad_env_value_is_ignored() -> None:
    settings = Settings.from_sources(env={"DW_WIDTH": "wide"})
    assert settings.width == 1280


def test_file_overrides(tmp_path: Path) -> None:
    toml_content = textwrap.dedent(
        """
        level = "custom.yaml"

        [window]
        width = 1024
        height = 768
        cell_size = 24

        [animation]
        player_move_duration = 0.12

        [camera]
        camera_damping = 0.5
        """
    )
    fp = tmp_path / "settings.toml"
    fp.write_text(toml_content, encoding="utf-8")

    settings = Settings.from_sources(env={}, file_path=fp)

    assert settings.width == 1024
    assert settings.height == 768
    assert settings.cell_size == 24
    assert settings.player_move_duration == pytest.approx(0.12)
    assert settings.camera_damping == pytest.approx(0.5)
    assert settings.level == "custom.yaml"


def test_env_beats_file(tmp_path: Path) -> None:
    fp = tmp_path / "settings.toml"
    fp.write_text("[window]\nwidth = 1024\n", encoding="utf-8")
    settings = Settings.from_sources(env={"DW_WIDTH": "800", "DW_SETTINGS_FILE": str(fp)})
    assert settings.width == 800


def test_validate_resets_bad_values() -> None:
    settings = Settings.from_dict(
        {"width": -5, "cell_size": 0, "player_move_duration": -1, "camera_damping": 3.0, "unknown": 1}
    )
    assert (settings.width, settings.height) == (1280, 720)
    assert settings.cell_size == 40
    assert settings.player_move_duration == pytest.approx(0.06)
    assert settings.camera_damping == 1.0


def test_missing_or_broken_file_falls_back(tmp_path: Path) -> None:
    assert Settings.from_toml_file(tmp_path / "missing.toml") == {}
    broken = tmp_path / "broken.toml"
    broken.write_text("width = = 3", encoding="utf-8")
    assert Settings.from_toml_file(broken) == {}
