"""Command that starts the game."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import pygame

from pysnake.config import ConfigError, load_config
from pysnake.game import Game
from pysnake.gui import SnakeWindow
from pysnake.storage import Storage

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pysnake", description="Play snake.")
    parser.add_argument("--config", help="path of the YAML configuration file")
    parser.add_argument("--storage", help="path of the JSON file with scores and settings")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Load configuration and storage, then run the game; return the exit status."""
    logging.basicConfig(level=logging.INFO)
    args = _parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ConfigError) as exc:
        logger.error("Failed to load config: %s", exc)
        return 1

    try:
        store = Storage(args.storage)
    except OSError as exc:
        logger.error("Failed to initialize storage: %s", exc)
        return 1

    game = Game(config)
    window = SnakeWindow(game, config, store)
    try:
        window.run()
    except pygame.error as exc:
        logger.error("Game loop error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())