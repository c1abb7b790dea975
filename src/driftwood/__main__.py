from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import Settings


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="driftwood",
        description="Driftwood - cross the river by pushing logs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (prints the board)")
    parser.add_argument("--level", default=None, help="Path to a YAML level file (default: bundled level)")
    parser.add_argument("--moves", default="", help="Scripted moves for headless mode, e.g. 'RRDL'")
    parser.add_argument("--settings", default=None, help="Path to a settings TOML file")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N frames (headless)")
    parser.add_argument("--tick-rate", type=float, default=None, help="Target frame rate (Hz)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    # CLI over file/env
    settings = Settings.from_sources(file_path=args.settings)
    if args.level is not None:
        settings.level = args.level
    if args.tick_rate is not None:
        settings.tick_rate = args.tick_rate
    settings.validate()

    if args.gui:
        return run_gui(settings)
    if args.headless:
        return run_headless(settings, moves=args.moves, max_steps=args.max_steps)
    return run_auto(settings, moves=args.moves, max_steps=args.max_steps)


if __name__ == "__main__":
    sys.exit(main())
