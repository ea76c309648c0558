# raygames

This package has a few small arcade games, graphics demos and drawing lessons.
Each one runs in a 1920×1080 window drawn with pygame.

## Install

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

In every window, ESC or closing the window quits.

## Games

### Arkanoid

```
raygames-arkanoid
```

- LEFT and RIGHT move the paddle.
- SPACE launches the ball from the paddle.
- The wall has five rows of eight bricks. A brick disappears when the ball touches it.
- Where the ball lands on the paddle sets the angle it bounces off at.
- You have three lives, shown in the lower left corner. You lose a life each time the ball falls off the bottom, and the ball then goes back onto the paddle.
- When the lives run out, "GAME OVER" is shown. When every brick is gone, "YOU WIN" is shown.

### Ping Pong

```
raygames-ping-pong
```

A game for two players:

- W and S move the left paddle.
- UP and DOWN move the right paddle.
- SPACE serves the ball.
- Each paddle hit makes the ball 10% faster.
- The bounce angle depends on where the ball meets the paddle, up to 60 degrees.
- When the ball leaves the screen on one side, the other player scores a point. The ball goes back to the centre with a random direction and waits for the next serve.

### Ping Pong V2

```
raygames-ping-pong-v2
```

This is the same game with a main menu and a help screen.

- On the menu, ENTER starts the game and H opens the help screen.
- On the help screen, ENTER goes back to the menu.
- During a game, M resets the match and goes back to the menu.
- Each hit speeds up both paddles by 5%, as well as the ball.

## Demos

Name the demo to run:

```
raygames-demos switch-bg
raygames-demos snowing
raygames-demos cloud
raygames-demos sparks
raygames-demos snowflake
```

- `switch-bg`: a line of text on a background that turns red, green or blue when you press R, G or B.
- `snowing`: ten thousand pixel snowflakes falling one pixel per frame and wrapping back to the top.
- `cloud`: a hundred thousand pixels with random colours in random places, redrawn every frame.
- `sparks`: sparks scattered around the mouse pointer that fade out over a second.
- `snowflake`: a recursive five-branch snowflake drawn with lines.

## Lessons

Name the lesson to show:

```
raygames-lessons window
raygames-lessons scaling
raygames-lessons pixels
raygames-lessons lines
raygames-lessons triangles
raygames-lessons rects
```

- `window`: a line of text in a window.
- `scaling`: a resizable window whose text size follows the window size.
- `pixels`: single pixels.
- `lines`: lines of different widths, a line strip, and an S-shaped curve that follows the mouse.
- `triangles`: filled and outlined triangles and a triangle fan.
- `rects`: filled, outlined, rotated and rounded rectangles.

## As a library

The game rules are kept apart from the drawing, so you can drive the games from code.

`raygames.arkanoid.Game`, `raygames.ping_pong.Game` and `raygames.ping_pong_v2.Game` each take an optional `random.Random`. Each frame is given a `raygames.core.InputState`, which holds the keys held down and the keys newly pressed:

```python
import random
from raygames.core import InputState, Key
from raygames.arkanoid import Game, GameStatus

game = Game(random.Random(1))
game.update(InputState(pressed=frozenset({Key.SPACE})))  # launch the ball
for _ in range(100):
    game.handle_input(InputState())
    game.update(InputState())
print(game.status is GameStatus.RUNNING, game.player.lives)
```

How to advance each game by one frame:

- **Arkanoid:** call `handle_input(keys)` and `update(keys)`.
- **Ping Pong:** call `handle_input(keys, dt)` and `update(keys, dt)`, with `dt` in seconds.
- **Ping Pong V2:** call `step(keys, dt)`, which also handles the menu and help screens.

With a seeded `random.Random`, a game plays out the same way each time.

Other pure helpers:

- **`raygames.core`:** `check_collision_circle_rec` and `clamp`.
- **`raygames.ping_pong`:** `reflection_angle` and `dash_line_segments`.
- **`raygames.ping_pong_v2`:** `build_main_menu` and `build_help_menu`. Each takes a text-measuring function.
- **`raygames.demos`:** `Snowfall`, `Sparks`, `random_pixels`, `snowflake_segments` and `background_for_keys`.
- **`raygames.lessons`:** `scaled_font_size`, `line_strip_points`, `triangle_fan_points`, `fan_triangles` and `bezier_points`.

## What it does not do

- There is no sound.
- Nothing is saved between runs, such as high scores.
- There is no computer opponent.
- Arkanoid has no restart: once "GAME OVER" or "YOU WIN" is shown, the game stays on that screen until you close the window.