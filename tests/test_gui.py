import random

import pygame
import pytest

from pysnake.config import Config
from pysnake.game import Direction, Game, GameState, Point
from pysnake.gui import SnakeWindow, grid_offset, status_text, to_rgb
from pysnake.storage import Storage


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_config():
    config = Config()
    config.game.grid_size = 10
    config.game.initial_speed = 5.0
    config.game.speed_increment = 0.5
    config.game.max_speed = 10.0
    config.game.initial_length = 3
    config.graphics.window_width = 400
    config.graphics.window_height = 300
    config.colors.snake_head = (1.0, 0.0, 0.0)
    config.colors.snake_body = (0.0, 1.0, 0.0)
    config.colors.food = (0.0, 0.0, 1.0)
    config.colors.grid = (1.0, 1.0, 1.0)
    config.colors.background = (0.0, 0.0, 0.0)
    return config


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def window(tmp_path, clock):
    config = make_config()
    game = Game(config, rng=random.Random(3), clock=clock)
    store = Storage(tmp_path / "storage.json")
    return SnakeWindow(game, config, store)


def test_to_rgb_full_components():
    assert to_rgb((1.0, 0.0, 1.0)) == (255, 0, 255, 255)


def test_to_rgb_alpha_and_clamp():
    red, green, blue, alpha = to_rgb((2.0, -1.0, 0.0), 100)
    assert (red, green, blue, alpha) == (255, 0, 0, 100)


def test_status_text_for_each_state(window):
    game = window.game
    assert status_text(game) == "Playing - WASD: Move"
    game.toggle_pause()
    assert status_text(game) == "Paused - Press P to Start"
    game.state = GameState.GAME_OVER
    game.score = 30
    assert status_text(game) == "Game Over - Score: 30 - Press R"


@pytest.mark.parametrize("size", [(400, 300), (200, 200), (401, 333)])
def test_grid_offset_centres_grid(size):
    off_x, off_y = grid_offset(size, 10, 20)
    assert abs(size[0] - 2 * off_x - 200) <= 1
    assert abs(size[1] - 2 * off_y - 200) <= 1


def test_grid_offset_truncates_toward_zero():
    assert grid_offset((100, 100), 11, 10) == (-5, -5)


def test_layout_uses_configured_size(window):
    assert window.layout() == (400, 300)


def test_score_callback_survives_eating(window, clock):
    game = window.game
    assert callable(game.on_score_change)
    game.food = game.snake.head.moved(Direction.RIGHT)
    clock.now = 1.0
    assert window.update() is True
    assert game.score == Game.POINTS_PER_FOOD
    assert game.speed == 5.5


def test_p_toggles_pause(window):
    window.handle_key(pygame.K_p)
    assert window.game.state is GameState.PAUSED
    window.handle_key(pygame.K_p)
    assert window.game.state is GameState.PLAYING


def test_arrow_changes_direction_while_playing(window):
    window.handle_key(pygame.K_UP)
    assert window.game.snake.direction is Direction.UP


def test_arrow_reversal_is_ignored(window):
    window.handle_key(pygame.K_LEFT)
    assert window.game.snake.direction is Direction.RIGHT


def test_arrow_ignored_while_paused(window):
    window.handle_key(pygame.K_p)
    window.handle_key(pygame.K_DOWN)
    assert window.game.snake.direction is Direction.RIGHT


def test_r_resets_only_after_game_over(window):
    game = window.game
    game.score = 20
    window.handle_key(pygame.K_r)
    assert game.score == 20
    game.state = GameState.GAME_OVER
    window.handle_key(pygame.K_r)
    assert game.score == 0
    assert game.state is GameState.PLAYING


def test_update_moves_snake_when_due(window, clock):
    head = window.game.snake.head
    assert window.update() is False
    clock.now = 1.0
    assert window.update() is True
    assert window.game.snake.head == Point(head.x + 1, head.y)


def test_draw_paints_snake_food_and_background(window):
    screen = pygame.Surface((400, 300))
    game = window.game
    game.food = Point(0, 0)
    window.draw(screen)
    off_x, off_y = grid_offset((400, 300), game.grid, window.tile_size)
    half = window.tile_size // 2
    head = game.snake.head
    head_pixel = screen.get_at((off_x + head.x * 20 + half, off_y + head.y * 20 + half))
    assert tuple(head_pixel) == to_rgb(make_config().colors.snake_head)
    food_pixel = screen.get_at((off_x + half, off_y + half))
    assert tuple(food_pixel) == to_rgb(make_config().colors.food)
    corner = screen.get_at((0, 299))
    assert tuple(corner) == to_rgb(make_config().colors.background)


def test_draw_paints_body_segments(window, clock):
    clock.now = 1.0
    window.update()
    game = window.game
    assert len(game.snake.body) == 2
    screen = pygame.Surface((400, 300))
    window.draw(screen)
    off_x, off_y = grid_offset((400, 300), game.grid, window.tile_size)
    body = game.snake.body[1]
    pixel = screen.get_at((off_x + body.x * 20 + 10, off_y + body.y * 20 + 10))
    assert tuple(pixel) == to_rgb(make_config().colors.snake_body)