from __future__ import annotations

import io
import os
import subprocess
import sys
from pathlib import Path

from driftwood.app import parse_moves, run_headless
from driftwood.board.grid import Direction
from driftwood.config import Settings

SRC = Path(__file__).resolve().parents[1] / "src"


def test_parse_moves():
    assert parse_moves("rr d,L") == [Direction.RIGHT, Direction.RIGHT, Direction.DOWN, Direction.LEFT]
    assert parse_moves("") == []


def test_run_headless_replays_moves(tmp_path):
    level = tmp_path / "strip.yaml"
    level.write_text('player: [0, 0]\nlayers:\n  - ["#### "]\n  - ["..@.."]\n', encoding="utf-8")
    out = io.StringIO()

    code = run_headless(Settings(level=str(level)), moves="RRR", out=out)

    assert code == 0
    lines = out.getvalue().splitlines()
    assert lines[0] == "##P-~"
    assert lines[1].startswith("Player at (2, 0)")


def test_run_headless_bad_moves_and_level(tmp_path):
    assert run_headless(Settings(), moves="RX", out=io.StringIO()) == 2
    assert run_headless(Settings(level=str(tmp_path / "missing.yaml")), out=io.StringIO()) == 1


def test_headless_entrypoint_exits_successfully():
    env = os.environ.copy()
    env["DW_HEADLESS"] = "1"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    cmd = [sys.executable, "-m", "driftwood", "--moves", "DU", "--tick-rate", "0"]
    proc = subprocess.run(cmd, capture_output=True, text=True, env=env, timeout=20)

    assert proc.returncode == 0, proc.stderr
    assert "Player at (0, 0)" in proc.stdout
