"""Arkanoid: break all the bricks with a ball bounced off a paddle."""

from __future__ import annotations

import argparse
import enum
import functools
import itertools
import math
import random
from dataclasses import dataclass, field
from typing import Iterator

import pygame

from raygames.core import (
    BLACK,
    BLUE,
    GREEN,
    LIME,
    PINK,
    RED,
    WHITE,
    YELLOW,
    Color,
    InputState,
    Key,
    Rectangle,
    Vector2,
    check_collision_circle_rec,
)

SCREEN_WIDTH = 1920.0
SCREEN_HEIGHT = 1080.0
WINDOW_LABEL = "Arkanoid"
BG_COLOR = BLACK

FPS = 60
FPS_TEXT_POS_X = SCREEN_WIDTH - 80.0
FPS_TEXT_POS_Y = SCREEN_HEIGHT - 20.0

PADDLE_WIDTH = 250.0
PADDLE_HEIGHT = 20.0
PADDLE_POS_X = SCREEN_WIDTH / 2.0 - PADDLE_WIDTH / 2.0
PADDLE_POS_Y = SCREEN_HEIGHT - 50.0
PADDLE_SPEED = 20.0
PADDLE_COLOR = WHITE

BALL_RADIUS = 15.0
BALL_POS_X = PADDLE_POS_X + PADDLE_HEIGHT / 2.0
BALL_POS_Y = PADDLE_POS_Y - BALL_RADIUS
BALL_SPEED = 10.0
BALL_COLOR = RED
MAX_BOUNCE_FACTOR = 0.8

LINES_OF_BRICK = 5
BRICKS_PER_LINE = 8
BRICK_MARGIN = 5.0
BRICK_WIDTH = SCREEN_WIDTH / BRICKS_PER_LINE
BRICK_HEIGHT = 40.0
BRICKS_COLORS: tuple[Color, ...] = (YELLOW, BLUE, GREEN, RED, PINK)

TEXT_POS_X = 20.0
TEXT_POS_Y = SCREEN_HEIGHT - 50.0
TEXT_FONT_SIZE = 50
TEXT_COLOR = WHITE

WIN_TEXT = "YOU WIN"
WIN_TEXT_POS_X = SCREEN_WIDTH / 2.0 - 160.0
WIN_TEXT_POS_Y = SCREEN_HEIGHT / 2.0
WIN_TEXT_FONT_SIZE = 80
WIN_TEXT_COLOR = GREEN

GAME_OVER_TEXT = "GAME OVER"
GAME_OVER_TEXT_POS_X = SCREEN_WIDTH / 2.0 - 200.0
GAME_OVER_TEXT_POS_Y = SCREEN_HEIGHT / 2.0
GAME_OVER_TEXT_FONT_SIZE = 80
GAME_OVER_TEXT_COLOR = RED

LIVES = 3


@dataclass
class Paddle:
    rect: Rectangle
    speed: float = PADDLE_SPEED
    lives: int = LIVES
    color: Color = PADDLE_COLOR


@dataclass
class Ball:
    pos: Vector2
    radius: float = BALL_RADIUS
    speed: Vector2 = field(default_factory=lambda: Vector2(BALL_SPEED, BALL_SPEED))
    launched: bool = False
    color: Color = BALL_COLOR


@dataclass
class Brick:
    rect: Rectangle
    active: bool = True
    color: Color = WHITE


class GameStatus(enum.Enum):
    RUNNING = enum.auto()
    OVER = enum.auto()
    WIN = enum.auto()


def _launch_angle(rng: random.Random) -> float:
    return math.radians(45.0 + rng.randint(0, 90))


class Game:
    """State and rules of one Arkanoid game."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> None:
        """Put paddle, ball and bricks back to the starting layout."""
        self.player = Paddle(Rectangle(PADDLE_POS_X, PADDLE_POS_Y, PADDLE_WIDTH, PADDLE_HEIGHT))
        self.ball = Ball(Vector2(BALL_POS_X, BALL_POS_Y))
        self.bricks = [
            [
                Brick(
                    Rectangle(
                        col * BRICK_WIDTH + BRICK_MARGIN,
                        row * BRICK_HEIGHT + BRICK_MARGIN,
                        BRICK_WIDTH - 2 * BRICK_MARGIN,
                        BRICK_HEIGHT - 2 * BRICK_MARGIN,
                    ),
                    active=True,
                    color=color,
                )
                for col in range(BRICKS_PER_LINE)
            ]
            for row, color in enumerate(BRICKS_COLORS[:LINES_OF_BRICK])
        ]
        self.status = GameStatus.RUNNING

    def _all_bricks(self) -> Iterator[Brick]:
        return itertools.chain.from_iterable(self.bricks)

    def handle_input(self, keys: InputState) -> None:
        """Move the paddle with the arrow keys."""
        if self.status is not GameStatus.RUNNING:
            return
        if keys.is_down(Key.LEFT):
            self.player.rect.x -= self.player.speed
        if keys.is_down(Key.RIGHT):
            self.player.rect.x += self.player.speed

    def handle_paddle_wall_collision(self) -> None:
        rect = self.player.rect
        if rect.x < 0:
            rect.x = 0.0
        if rect.x + rect.width > SCREEN_WIDTH:
            rect.x = SCREEN_WIDTH - rect.width

    def handle_ball_wall_collision(self) -> None:
        ball = self.ball
        if ball.pos.x - ball.radius <= 0 or ball.pos.x + ball.radius >= SCREEN_WIDTH:
            ball.speed.x *= -1.0
        if ball.pos.y - ball.radius <= 0:
            ball.speed.y *= -1.0

    def handle_ball_paddle_collision(self) -> None:
        """Bounce the ball off the paddle at an angle set by where it hits."""
        ball = self.ball
        rect = self.player.rect
        if ball.speed.y > 0 and check_collision_circle_rec(ball.pos, ball.radius, rect):
            paddle_center = rect.x + rect.width / 2.0
            factor = (ball.pos.x - paddle_center) / (rect.width / 2.0)
            factor = max(-MAX_BOUNCE_FACTOR, min(MAX_BOUNCE_FACTOR, factor))

            ball.speed.x = factor * BALL_SPEED
            ball.speed.y = -math.sqrt(BALL_SPEED * BALL_SPEED - ball.speed.x * ball.speed.x)
            # keep the ball from sinking into the paddle
            ball.pos.y = rect.y - ball.radius

    def handle_ball_brick_collision(self) -> None:
        """Knock out every active brick the ball touches."""
        ball = self.ball
        for brick in self._all_bricks():
            if brick.active and check_collision_circle_rec(ball.pos, ball.radius, brick.rect):
                brick.active = False
                ball.speed.y *= -1.0

    def handle_ball_loss(self) -> None:
        """Take a life when the ball falls off the bottom."""
        if self.ball.pos.y + self.ball.radius > SCREEN_HEIGHT:
            self.player.lives -= 1
            if self.player.lives == 0:
                self.status = GameStatus.OVER
            self.reset_ball()

    def reset_ball(self) -> None:
        """Put the ball back on the paddle with a fresh random direction."""
        self.ball.launched = False
        self.ball.pos = self.ball_init_pos()
        angle = _launch_angle(self.rng)
        self.ball.speed = Vector2(BALL_SPEED * math.cos(angle), BALL_SPEED * math.sin(angle))

    def all_bricks_destroyed(self) -> bool:
        return not any(brick.active for brick in self._all_bricks())

    def ball_init_pos(self) -> Vector2:
        """Where the ball rests on top of the paddle."""
        rect = self.player.rect
        return Vector2(rect.x + rect.width / 2.0, rect.y - self.ball.radius)

    def update(self, keys: InputState) -> None:
        """Advance the game by one frame."""
        if self.status is not GameStatus.RUNNING:
            return

        self.handle_paddle_wall_collision()

        if not self.ball.launched:
            self.ball.pos = self.ball_init_pos()
            if keys.is_pressed(Key.SPACE):
                angle = _launch_angle(self.rng)
                self.ball.speed = Vector2(
                    BALL_SPEED * math.cos(angle), -BALL_SPEED * math.sin(angle)
                )
                self.ball.launched = True
            return

        self.ball.pos.x += self.ball.speed.x
        self.ball.pos.y += self.ball.speed.y

        self.handle_ball_wall_collision()
        self.handle_ball_paddle_collision()
        self.handle_ball_brick_collision()
        self.handle_ball_loss()

        if self.all_bricks_destroyed():
            self.status = GameStatus.WIN


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.Font(None, size)


def _pg_rect(rect: Rectangle) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def _text(surface: pygame.Surface, font: pygame.font.Font, text: str, x: float, y: float, color: Color) -> None:
    surface.blit(font.render(text, True, color), (round(x), round(y)))


def draw(surface: pygame.Surface, game: Game, font: pygame.font.Font, fps: float) -> None:
    """Render one frame of the game onto the surface."""
    surface.fill(BG_COLOR)
    _text(surface, font, f"{round(fps):2d} FPS", FPS_TEXT_POS_X, FPS_TEXT_POS_Y, LIME)

    pygame.draw.rect(surface, game.player.color, _pg_rect(game.player.rect))
    pygame.draw.circle(surface, game.ball.color, (game.ball.pos.x, game.ball.pos.y), game.ball.radius)

    for brick in game._all_bricks():
        if brick.active:
            pygame.draw.rect(surface, brick.color, _pg_rect(brick.rect))

    _text(surface, _font(TEXT_FONT_SIZE), str(game.player.lives), TEXT_POS_X, TEXT_POS_Y, TEXT_COLOR)

    if game.status is GameStatus.OVER:
        _text(
            surface, _font(GAME_OVER_TEXT_FONT_SIZE), GAME_OVER_TEXT,
            GAME_OVER_TEXT_POS_X, GAME_OVER_TEXT_POS_Y, GAME_OVER_TEXT_COLOR,
        )
    elif game.status is GameStatus.WIN:
        _text(
            surface, _font(WIN_TEXT_FONT_SIZE), WIN_TEXT,
            WIN_TEXT_POS_X, WIN_TEXT_POS_Y, WIN_TEXT_COLOR,
        )


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    from raygames.core import read_input

    parser = argparse.ArgumentParser(prog="arkanoid", description="Play Arkanoid.")
    parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(SCREEN_WIDTH), int(SCREEN_HEIGHT)))
        pygame.display.set_caption(WINDOW_LABEL)
        clock = pygame.time.Clock()
        fps_font = pygame.font.Font(None, 20)
        game = Game()

        while True:
            keys = read_input(pygame.event.get())
            if keys.quit:
                break
            game.handle_input(keys)
            game.update(keys)
            draw(screen, game, fps_font, clock.get_fps())
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        _font.cache_clear()
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())