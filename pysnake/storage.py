"""Persistent high scores and user settings kept in a JSON file."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

MAX_HIGH_SCORES = 10

_STORAGE_PARTS = ("pkg", "storage", "storage.json")
_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset else 0
    if minutes == 0:
        return text + "Z"
    sign = "+" if minutes > 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


def _parse_time(text: Any) -> datetime:
    if not isinstance(text, str):
        raise ValueError(f"expected a timestamp string, got {text!r}")
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    base, fraction, zone = match.groups()
    micro = (fraction or "")[:6].ljust(6, "0")
    zone = "+00:00" if zone == "Z" else zone
    return datetime.fromisoformat(f"{base}.{micro}{zone}")


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key}: expected a number, got {value!r}")
    return float(value)


@dataclass
class HighScore:
    """One entry of the high-score table."""

    player: str
    score: int
    date: datetime

    def to_json(self) -> dict[str, Any]:
        return {"player": self.player, "score": self.score, "date": _format_time(self.date)}

    @classmethod
    def from_json(cls, data: Any) -> HighScore:
        if not isinstance(data, dict):
            raise ValueError(f"high score: expected an object, got {data!r}")
        player = data.get("player", "")
        score = data.get("score", 0)
        if not isinstance(player, str):
            raise ValueError(f"player: expected a string, got {player!r}")
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValueError(f"score: expected an integer, got {score!r}")
        date = _parse_time(data["date"]) if "date" in data else datetime(1, 1, 1, tzinfo=timezone.utc)
        return cls(player=player, score=score, date=date)


@dataclass
class Settings:
    """User preferences."""

    music_volume: float = 0.0
    sfx_volume: float = 0.0
    difficulty: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "music_volume": self.music_volume,
            "sfx_volume": self.sfx_volume,
            "difficulty": self.difficulty,
        }

    def merged(self, data: Any) -> Settings:
        """Return a copy with the fields present in ``data`` replaced."""
        if data is None:
            return self
        if not isinstance(data, dict):
            raise ValueError(f"settings: expected an object, got {data!r}")
        changes: dict[str, Any] = {}
        for key in ("music_volume", "sfx_volume"):
            if key in data:
                changes[key] = _number(data[key], key)
        if "difficulty" in data:
            if not isinstance(data["difficulty"], str):
                raise ValueError(f"difficulty: expected a string, got {data['difficulty']!r}")
            changes["difficulty"] = data["difficulty"]
        return replace(self, **changes)


DEFAULT_SETTINGS = Settings(music_volume=0.7, sfx_volume=0.8, difficulty="medium")


@dataclass
class GameData:
    """Everything kept between runs."""

    high_scores: list[HighScore] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    def to_json(self) -> dict[str, Any]:
        return {
            "high_scores": [entry.to_json() for entry in self.high_scores],
            "settings": self.settings.to_json(),
        }

    def merged(self, data: Any) -> GameData:
        """Return a copy with the parts present in ``data`` replaced."""
        if data is None:
            return self
        if not isinstance(data, dict):
            raise ValueError(f"game data: expected an object, got {data!r}")
        high_scores = self.high_scores
        if "high_scores" in data:
            raw = data["high_scores"] or []
            if not isinstance(raw, list):
                raise ValueError(f"high_scores: expected a list, got {raw!r}")
            high_scores = [HighScore.from_json(entry) for entry in raw]
        settings = self.settings.merged(data.get("settings"))
        return GameData(high_scores=list(high_scores), settings=settings)


def find_storage_path() -> Path:
    """Return the first existing storage file among the usual places."""
    candidates = [
        Path(*_STORAGE_PARTS),
        Path("..", *_STORAGE_PARTS),
        Path("..", "..", *_STORAGE_PARTS),
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return Path(*_STORAGE_PARTS)


class Storage:
    """High scores and settings backed by a JSON file.

    If the file cannot be read, default data is written in its place.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else find_storage_path()
        self.data = GameData()
        try:
            self.load()
        except (OSError, ValueError):
            self.data = GameData(settings=replace(DEFAULT_SETTINGS))
            self.save()

    def load(self) -> None:
        """Read the file, overlaying its contents on the current data."""
        text = self.path.read_text(encoding="utf-8")
        self.data = self.data.merged(json.loads(text))

    def save(self) -> None:
        """Write the current data to the file."""
        self.path.write_text(json.dumps(self.data.to_json(), indent=2), encoding="utf-8")

    def add_high_score(self, player: str, score: int) -> None:
        """Record a score, keeping the table sorted and at most ten long."""
        entry = HighScore(player=player, score=score, date=datetime.now().astimezone())
        scores = [*self.data.high_scores, entry]
        scores.sort(key=lambda item: item.score, reverse=True)
        self.data.high_scores = scores[:MAX_HIGH_SCORES]

    @property
    def high_scores(self) -> list[HighScore]:
        return list(self.data.high_scores)

    @property
    def settings(self) -> Settings:
        return self.data.settings

    def update_settings(self, settings: Settings) -> None:
        self.data.settings = settings