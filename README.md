# pysnake

A classic snake game played on a square grid. Steer the snake to the food,
grow longer with every bite, and avoid the walls and your own body. The game
speeds up each time you eat, up to a configured maximum.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Playing

```
pysnake
pysnake --config path/to/config.yaml --storage path/to/storage.json
```

`--config` names the YAML configuration file and `--storage` the JSON file
for scores and settings. Without them, both are looked up as described below.
The command exits with status 1 if the configuration cannot be read or
parsed, or if the storage file cannot be created.

Controls:

| Key         | Action                               |
|-------------|--------------------------------------|
| Arrow keys  | Change direction (while playing)     |
| P           | Pause / resume                       |
| R           | Restart after the game is over       |
| Escape      | Logs a message; close the window to quit |

Every piece of food is worth 10 points. A snake cannot reverse straight
back on itself. Hitting a wall or the snake's own body ends the game.

## Configuration

Without `--config`, settings are read from `pkg/config/config.yaml`, looked
for in the current directory and then in its parent and grandparent
directories. A typical file:

```yaml
game:
  grid_size: 20
  initial_speed: 5.0
  speed_increment: 0.5
  max_speed: 20.0
  initial_length: 3

graphics:
  window_width: 800
  window_height: 600
  fullscreen: false
  vsync: true

controls:
  forward: w
  backward: s
  left: a
  right: d
  pause: p
  quit: escape

colors:
  snake_head: [0.0, 1.0, 0.0]
  snake_body: [0.0, 0.7, 0.0]
  food: [1.0, 0.0, 0.0]
  grid: [0.3, 0.3, 0.3]
  background: [0.1, 0.1, 0.1]
```

Colours are RGB triples with each part between 0.0 and 1.0. Speed is given
in moves per second. Missing keys take zero, empty or false values; values
of the wrong type raise `pysnake.config.ConfigError`.

## Saved data

Without `--storage`, high scores and user settings are kept in
`pkg/storage/storage.json`, found the same way as the configuration file.
If the file cannot be read, it is written with default settings
(music volume 0.7, effects volume 0.8, difficulty `medium`).

## Using the library

The game logic does not need a window:

```python
from pysnake.config import load_config
from pysnake.game import Direction, Game

config = load_config("pkg/config/config.yaml")
game = Game(config)
game.change_direction(Direction.UP)
game.update()
print(game.score, game.is_game_over())
```

`Game` accepts an optional `rng` (a `random.Random`) and `clock` (a function
returning seconds) so that play can be made reproducible.

High scores are kept with `pysnake.storage.Storage`:

```python
from pysnake.storage import Storage

store = Storage("scores.json")
store.add_high_score("player one", 120)
store.save()
print([entry.score for entry in store.high_scores])
```

The table is kept sorted from highest to lowest and holds at most ten
entries.

## What it does not do

- The window does not record scores: nothing calls `Storage.add_high_score`
  during play, so the high-score table only changes through the library.
- The `controls` section of the configuration is read but not used; the keys
  are fixed as shown above.
- The stored settings (volumes, difficulty) are kept but do not affect the
  game, which plays no sound.