"""Pygame front end: window, input handling and drawing of the board."""

from __future__ import annotations

import logging
from typing import Sequence

import pygame

from pysnake.config import Config
from pysnake.game import Direction, Game, GameState
from pysnake.storage import Storage

logger = logging.getLogger(__name__)

TILE_SIZE = 20
FRAMES_PER_SECOND = 60
GRID_ALPHA = 100
WINDOW_TITLE = "Snake 2D"
TEXT_COLOR = (255, 255, 255)

RGBA = tuple[int, int, int, int]

_ARROWS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def to_rgb(color: Sequence[float], alpha: int = 255) -> RGBA:
    """Turn an RGB colour with components in [0, 1] into 8-bit RGBA."""
    red, green, blue = (max(0, min(255, int(part * 255))) for part in color)
    return (red, green, blue, alpha)


def status_text(game: Game) -> str:
    """The status line shown under the score."""
    if game.state is GameState.PLAYING:
        return "Playing - WASD: Move"
    if game.state is GameState.PAUSED:
        return "Paused - Press P to Start"
    return f"Game Over - Score: {game.score} - Press R"


def grid_offset(screen_size: tuple[int, int], grid: int, tile_size: int) -> tuple[int, int]:
    """Pixel offset that centres a grid of ``grid`` tiles on the screen."""
    width, height = screen_size
    extent = grid * tile_size
    return int((width - extent) / 2), int((height - extent) / 2)


def _tile(size: int, color: RGBA) -> pygame.Surface:
    surface = pygame.Surface((size, size))
    surface.fill(color)
    return surface


class SnakeWindow:
    """Shows a game in a window and feeds it keyboard input."""

    def __init__(
        self,
        game: Game,
        config: Config,
        storage: Storage,
        *,
        tile_size: int = TILE_SIZE,
    ) -> None:
        self.game = game
        self.config = config
        self.storage = storage
        self.tile_size = tile_size
        self._clock = pygame.time.Clock()
        self._font: pygame.font.Font | None = None

        colors = config.colors
        self._head_image = _tile(tile_size, to_rgb(colors.snake_head))
        self._body_image = _tile(tile_size, to_rgb(colors.snake_body))
        self._food_image = _tile(tile_size, to_rgb(colors.food))
        self._background = to_rgb(colors.background)
        self._grid_color = to_rgb(colors.grid, GRID_ALPHA)

        # The score is drawn every frame, so nothing needs refreshing here.
        game.on_score_change = lambda score: None

    def layout(self) -> tuple[int, int]:
        """Logical screen size: the configured window size."""
        graphics = self.config.graphics
        return graphics.window_width, graphics.window_height

    def handle_key(self, key: int) -> None:
        """React to one key press."""
        if key == pygame.K_p:
            self.game.toggle_pause()
        if key == pygame.K_r and self.game.is_game_over():
            self.game.reset()
        if key == pygame.K_ESCAPE:
            logger.info("Escape pressed - close the window to exit")
        if self.game.state is GameState.PLAYING and key in _ARROWS:
            self.game.change_direction(_ARROWS[key])

    def update(self) -> bool:
        """Advance the game if its own timer allows; True if it changed."""
        return self.game.update()

    def _text(self, screen: pygame.Surface, text: str, position: tuple[int, int]) -> None:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 18)
        screen.blit(self._font.render(text, True, TEXT_COLOR), position)

    def draw(self, screen: pygame.Surface) -> None:
        """Render the whole frame onto ``screen``."""
        screen.fill(self._background)
        width, height = screen.get_size()
        grid = self.game.grid
        tile = self.tile_size
        extent = grid * tile
        offset_x, offset_y = grid_offset((width, height), grid, tile)

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        for step in range(grid + 1):
            x = offset_x + step * tile
            y = offset_y + step * tile
            pygame.draw.line(overlay, self._grid_color, (x, offset_y), (x, offset_y + extent), 1)
            pygame.draw.line(overlay, self._grid_color, (offset_x, y), (offset_x + extent, y), 1)
        screen.blit(overlay, (0, 0))

        for index, part in enumerate(self.game.snake.body):
            image = self._head_image if index == 0 else self._body_image
            screen.blit(image, (offset_x + part.x * tile, offset_y + part.y * tile))

        food = self.game.food
        screen.blit(self._food_image, (offset_x + food.x * tile, offset_y + food.y * tile))

        self._text(screen, f"Score: {self.game.score}", (10, 10))
        self._text(screen, status_text(self.game), (10, 30))
        self._text(screen, f"FPS: {self._clock.get_fps():.1f}", (width - 100, 10))

    def run(self) -> None:
        """Open the window and run the main loop until it is closed."""
        pygame.init()
        try:
            flags = pygame.FULLSCREEN if self.config.graphics.fullscreen else 0
            screen = pygame.display.set_mode(
                self.layout(), flags, vsync=1 if self.config.graphics.vsync else 0
            )
            pygame.display.set_caption(WINDOW_TITLE)
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)
                self.update()
                self.draw(screen)
                pygame.display.flip()
                self._clock.tick(FRAMES_PER_SECOND)
        finally:
            pygame.quit()