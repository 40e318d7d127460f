"""Game configuration loaded from a YAML file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]

_CONFIG_PARTS = ("pkg", "config", "config.yaml")
_BLACK: Color = (0.0, 0.0, 0.0)


class ConfigError(ValueError):
    """Raised when the configuration file cannot be understood."""


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key}: expected an integer, got {value!r}")
    return value


def _float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key}: expected a number, got {value!r}")
    return float(value)


def _bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key}: expected a boolean, got {value!r}")
    return value


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected a string, got {value!r}")
    return value


def _color(value: Any, key: str) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"{key}: expected a list of 3 numbers, got {value!r}")
    red, green, blue = (_float(part, key) for part in value)
    return (red, green, blue)


@dataclass
class GameSettings:
    """Rules of play: board size, speed and starting length."""

    grid_size: int = 0
    initial_speed: float = 0.0
    speed_increment: float = 0.0
    max_speed: float = 0.0
    initial_length: int = 0

    @classmethod
    def from_mapping(cls, data: Any) -> GameSettings:
        data = _mapping(data, "game")
        result = cls()
        if "grid_size" in data:
            result.grid_size = _int(data["grid_size"], "game.grid_size")
        if "initial_speed" in data:
            result.initial_speed = _float(data["initial_speed"], "game.initial_speed")
        if "speed_increment" in data:
            result.speed_increment = _float(data["speed_increment"], "game.speed_increment")
        if "max_speed" in data:
            result.max_speed = _float(data["max_speed"], "game.max_speed")
        if "initial_length" in data:
            result.initial_length = _int(data["initial_length"], "game.initial_length")
        return result


@dataclass
class GraphicsSettings:
    """Window size and display options."""

    window_width: int = 0
    window_height: int = 0
    fullscreen: bool = False
    vsync: bool = False

    @classmethod
    def from_mapping(cls, data: Any) -> GraphicsSettings:
        data = _mapping(data, "graphics")
        result = cls()
        if "window_width" in data:
            result.window_width = _int(data["window_width"], "graphics.window_width")
        if "window_height" in data:
            result.window_height = _int(data["window_height"], "graphics.window_height")
        if "fullscreen" in data:
            result.fullscreen = _bool(data["fullscreen"], "graphics.fullscreen")
        if "vsync" in data:
            result.vsync = _bool(data["vsync"], "graphics.vsync")
        return result


@dataclass
class ControlSettings:
    """Names of the keys bound to each action."""

    forward: str = ""
    backward: str = ""
    left: str = ""
    right: str = ""
    pause: str = ""
    quit: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> ControlSettings:
        data = _mapping(data, "controls")
        values = {
            name: _str(data[name], f"controls.{name}")
            for name in ("forward", "backward", "left", "right", "pause", "quit")
            if name in data
        }
        return cls(**values)


@dataclass
class ColorSettings:
    """RGB colours, each component between 0 and 1."""

    snake_head: Color = _BLACK
    snake_body: Color = _BLACK
    food: Color = _BLACK
    grid: Color = _BLACK
    background: Color = _BLACK

    @classmethod
    def from_mapping(cls, data: Any) -> ColorSettings:
        data = _mapping(data, "colors")
        values = {
            name: _color(data[name], f"colors.{name}")
            for name in ("snake_head", "snake_body", "food", "grid", "background")
            if name in data
        }
        return cls(**values)


@dataclass
class Config:
    """The whole game configuration."""

    game: GameSettings = field(default_factory=GameSettings)
    graphics: GraphicsSettings = field(default_factory=GraphicsSettings)
    controls: ControlSettings = field(default_factory=ControlSettings)
    colors: ColorSettings = field(default_factory=ColorSettings)

    @classmethod
    def from_mapping(cls, data: Any) -> Config:
        data = _mapping(data, "config")
        return cls(
            game=GameSettings.from_mapping(data.get("game")),
            graphics=GraphicsSettings.from_mapping(data.get("graphics")),
            controls=ControlSettings.from_mapping(data.get("controls")),
            colors=ColorSettings.from_mapping(data.get("colors")),
        )


def find_config_path() -> Path:
    """Return the first existing config file among the usual places."""
    candidates = [
        Path(*_CONFIG_PARTS),
        Path("..", *_CONFIG_PARTS),
        Path("..", "..", *_CONFIG_PARTS),
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    logger.info("Config file not found in standard locations, using default path")
    return Path(*_CONFIG_PARTS)


def load_config(path: str | Path | None = None) -> Config:
    """Read and parse the configuration file.

    Without a path, the file is looked up with find_config_path().
    """
    config_path = Path(path) if path is not None else find_config_path()
    text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path}: {exc}") from exc
    return Config.from_mapping(data)