"""Rules and state of the snake game."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple

from pysnake.config import Config


class Direction(Enum):
    """Movement direction on the board; y grows downwards."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class Point(NamedTuple):
    """A cell on the board."""

    x: int
    y: int

    def moved(self, direction: Direction) -> Point:
        dx, dy = direction.delta
        return Point(self.x + dx, self.y + dy)


class GameState(Enum):
    PLAYING = 0
    PAUSED = 1
    GAME_OVER = 2


@dataclass
class Snake:
    """The player's snake; body[0] is the head."""

    body: list[Point] = field(default_factory=list)
    direction: Direction = Direction.RIGHT
    grow_count: int = 0

    @property
    def head(self) -> Point:
        return self.body[0]


class Game:
    """A game of snake on a square board of ``grid`` cells per side."""

    POINTS_PER_FOOD = 10

    def __init__(
        self,
        config: Config,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.grid = config.game.grid_size
        self.speed = config.game.initial_speed
        self.state = GameState.PAUSED
        self.score = 0
        self.snake = Snake()
        self.food = Point(0, 0)
        self.on_score_change: Callable[[int], None] | None = None
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self.last_update = clock()
        self.reset()

    def _notify_score(self) -> None:
        if self.on_score_change is not None:
            self.on_score_change(self.score)

    def reset(self) -> None:
        """Start a new round with the snake in the centre of the board."""
        center = self.grid // 2
        self.snake = Snake(
            body=[Point(center, center)],
            direction=Direction.RIGHT,
            grow_count=self.config.game.initial_length - 1,
        )
        self.place_food()
        self.score = 0
        self.speed = self.config.game.initial_speed
        self.state = GameState.PLAYING
        self.last_update = self._clock()
        self._notify_score()

    def place_food(self) -> None:
        """Put the food on a random cell not covered by the snake."""
        occupied = set(self.snake.body)
        free = [
            Point(x, y)
            for y in range(self.grid)
            for x in range(self.grid)
            if Point(x, y) not in occupied
        ]
        if not free:
            raise ValueError("no free cell left for food")
        self.food = self._rng.choice(free)

    def change_direction(self, direction: Direction) -> None:
        """Turn the snake, ignoring reversals onto itself."""
        if direction.opposite != self.snake.direction:
            self.snake.direction = direction

    def update(self) -> bool:
        """Advance one step if enough time has passed; return True if it moved or died."""
        if self.state is not GameState.PLAYING:
            return False

        now = self._clock()
        interval = int(1000 / self.speed) / 1000
        if now - self.last_update < interval:
            return False
        self.last_update = now

        new_head = self.snake.head.moved(self.snake.direction)
        if not (0 <= new_head.x < self.grid and 0 <= new_head.y < self.grid):
            self.state = GameState.GAME_OVER
            return True
        if new_head in self.snake.body:
            self.state = GameState.GAME_OVER
            return True

        ate_food = new_head == self.food
        self.snake.body.insert(0, new_head)

        if ate_food or self.snake.grow_count > 0:
            if ate_food:
                self.score += self.POINTS_PER_FOOD
                self.place_food()
                self.snake.grow_count += 1
                if self.speed < self.config.game.max_speed:
                    self.speed += self.config.game.speed_increment
                self._notify_score()
            if self.snake.grow_count > 0:
                self.snake.grow_count -= 1
        else:
            self.snake.body.pop()

        return True

    def toggle_pause(self) -> None:
        """Switch between playing and paused; a finished game stays finished."""
        if self.state is GameState.PLAYING:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.PLAYING
            self.last_update = self._clock()

    def is_game_over(self) -> bool:
        return self.state is GameState.GAME_OVER