"""A grid-based snake game with YAML configuration and a JSON store for scores and settings."""

__version__ = "0.1.0"
__all__ = ["config", "game", "storage", "gui", "cli"]