"""Two-player Pong with angled paddle bounces and a speeding-up ball."""

from __future__ import annotations

import argparse
import functools
import math
import random
from dataclasses import dataclass, field
from typing import Iterator

import pygame

from raygames.core import (
    BLACK,
    LIME,
    RED,
    WHITE,
    Color,
    InputState,
    Key,
    Rectangle,
    Vector2,
    check_collision_circle_rec,
    clamp,
)

SCREEN_WIDTH = 1920.0
SCREEN_HEIGHT = 1080.0
WINDOW_LABEL = "Ping Pong V2"
BG_COLOR = BLACK

FPS = 60
FPS_POS_X = 10.0
FPS_POS_Y = 10.0

PADDLE_WIDTH = 20.0
PADDLE_HEIGHT = 200.0
LEFT_PADDLE_POS_X = 20.0
LEFT_PADDLE_POS_Y = SCREEN_HEIGHT / 2.0 - PADDLE_HEIGHT / 2.0
RIGHT_PADDLE_POS_X = SCREEN_WIDTH - 20.0 - PADDLE_WIDTH
RIGHT_PADDLE_POS_Y = LEFT_PADDLE_POS_Y
PADDLE_VELOCITY = 500.0
PADDLE_COLOR = WHITE

BALL_RADIUS = 15.0
BALL_POS_X = SCREEN_WIDTH / 2.0
BALL_POS_Y = SCREEN_HEIGHT / 2.0
BALL_VELOCITY = 500.0
BALL_VELOCITY_INCREASE_FACTOR = 1.1
BALL_MAX_REFLECTION_ANGLE = 60.0
BALL_MAX_REFLECTION_ANGLE_RAD = math.radians(BALL_MAX_REFLECTION_ANGLE)
BALL_COLOR = RED

SCORES_TEXT_LEFT_POS_X = 30.0
SCORES_TEXT_LEFT_POS_Y = SCREEN_HEIGHT - 50.0
SCORES_TEXT_RIGHT_POS_X = SCREEN_WIDTH - 50.0
SCORES_TEXT_RIGHT_POS_Y = SCREEN_HEIGHT - 50.0
SCORES_TEXT_FONT_SIZE = 50
SCORES_TEXT_COLOR = WHITE

DASH_LINE_HEIGHT = 20.0
DASH_LINE_GAP_HEIGHT = 10.0
DASH_LINE_CENTER_X = SCREEN_WIDTH / 2.0
DASH_LINE_COLOR = WHITE


@dataclass
class Paddle:
    rect: Rectangle
    velocity: float = PADDLE_VELOCITY
    color: Color = PADDLE_COLOR


@dataclass
class Ball:
    pos: Vector2
    radius: float = BALL_RADIUS
    velocity: Vector2 = field(default_factory=lambda: Vector2(BALL_VELOCITY, BALL_VELOCITY))
    active: bool = False
    color: Color = BALL_COLOR


def clamp_paddle(paddle: Paddle) -> None:
    """Keep the paddle inside the screen vertically."""
    rect = paddle.rect
    if rect.y < 0:
        rect.y = 0.0
    if rect.y + rect.height > SCREEN_HEIGHT:
        rect.y = SCREEN_HEIGHT - rect.height


def reflection_angle(paddle: Paddle, ball_y: float) -> float:
    """Bounce angle in radians, set by how far from the paddle centre the ball hit."""
    center_y = paddle.rect.y + paddle.rect.height / 2.0
    norm = clamp((ball_y - center_y) / (paddle.rect.height / 2.0), -1.0, 1.0)
    return norm * BALL_MAX_REFLECTION_ANGLE_RAD


def dash_line_segments() -> Iterator[tuple[float, float, float]]:
    """The centre line's dashes as (x, top, bottom), cut short at the screen edge."""
    y = 0.0
    while y < SCREEN_HEIGHT:
        height = SCREEN_HEIGHT - y if y + DASH_LINE_HEIGHT > SCREEN_HEIGHT else DASH_LINE_HEIGHT
        yield DASH_LINE_CENTER_X, y, y + height
        y += DASH_LINE_HEIGHT + DASH_LINE_GAP_HEIGHT


class Game:
    """State and rules of one Pong match."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> None:
        """Put paddles and ball at their starting places and zero the scores."""
        self.left_paddle = Paddle(
            Rectangle(LEFT_PADDLE_POS_X, LEFT_PADDLE_POS_Y, PADDLE_WIDTH, PADDLE_HEIGHT)
        )
        self.right_paddle = Paddle(
            Rectangle(RIGHT_PADDLE_POS_X, RIGHT_PADDLE_POS_Y, PADDLE_WIDTH, PADDLE_HEIGHT)
        )
        self.ball = Ball(Vector2(BALL_POS_X, BALL_POS_Y))
        self.left_player_score = 0
        self.right_player_score = 0

    def handle_input(self, keys: InputState, dt: float) -> None:
        """Move the left paddle with W/S and the right one with the arrows."""
        left, right = self.left_paddle, self.right_paddle
        if keys.is_down(Key.W):
            left.rect.y -= left.velocity * dt
        if keys.is_down(Key.S):
            left.rect.y += left.velocity * dt
        if keys.is_down(Key.UP):
            right.rect.y -= right.velocity * dt
        if keys.is_down(Key.DOWN):
            right.rect.y += right.velocity * dt

    def update(self, keys: InputState, dt: float) -> None:
        """Advance the match by dt seconds."""
        clamp_paddle(self.left_paddle)
        clamp_paddle(self.right_paddle)

        if keys.is_pressed(Key.SPACE):
            self.ball.active = True

        if self.ball.active:
            self.update_ball(dt)
            self.handle_ball_wall_collision()
            self.advanced_paddle_collision()
            self.update_score()

    def update_ball(self, dt: float) -> None:
        self.ball.pos.x += self.ball.velocity.x * dt
        self.ball.pos.y += self.ball.velocity.y * dt

    def handle_ball_wall_collision(self) -> None:
        ball = self.ball
        if ball.pos.y - ball.radius <= 0 or ball.pos.y + ball.radius >= SCREEN_HEIGHT:
            ball.velocity.y *= -1.0

    def simple_paddle_collision(self) -> None:
        """Reverse the ball's horizontal direction when it hits a paddle head-on."""
        ball = self.ball
        if (
            check_collision_circle_rec(ball.pos, ball.radius, self.left_paddle.rect)
            and ball.velocity.x < 0
        ):
            ball.velocity.x *= -1.0
        if (
            check_collision_circle_rec(ball.pos, ball.radius, self.right_paddle.rect)
            and ball.velocity.x > 0
        ):
            ball.velocity.x *= -1.0

    def advanced_paddle_collision(self) -> None:
        """Bounce the ball at an angle set by the hit point, speeding it up."""
        ball = self.ball
        speed = math.hypot(ball.velocity.x, ball.velocity.y)

        for is_left, paddle in ((True, self.left_paddle), (False, self.right_paddle)):
            hit = check_collision_circle_rec(ball.pos, ball.radius, paddle.rect)
            approaching = ball.velocity.x < 0 if is_left else ball.velocity.x > 0
            if hit and approaching:
                angle = reflection_angle(paddle, ball.pos.y)
                new_angle = angle if is_left else math.pi - angle
                speed *= BALL_VELOCITY_INCREASE_FACTOR
                ball.velocity = Vector2(speed * math.cos(new_angle), speed * math.sin(new_angle))

    def update_score(self) -> None:
        """Award a point when the ball leaves the screen on either side."""
        ball = self.ball
        if ball.pos.x + ball.radius < 0:
            self.right_player_score += 1
            self.reset_ball()
        if ball.pos.x - ball.radius > SCREEN_WIDTH:
            self.left_player_score += 1
            self.reset_ball()

    def reset_ball(self) -> None:
        """Centre the ball, aim it at a random side, and wait for a serve."""
        self.ball.pos = Vector2(BALL_POS_X, BALL_POS_Y)
        offset = math.radians(self.rng.randint(-45, 45))
        angle = offset if self.rng.randint(0, 1) == 0 else offset + math.pi
        self.ball.velocity = Vector2(BALL_VELOCITY * math.cos(angle), BALL_VELOCITY * math.sin(angle))
        self.ball.active = False


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.Font(None, size)


def _pg_rect(rect: Rectangle) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def _text(surface: pygame.Surface, font: pygame.font.Font, text: str, x: float, y: float, color: Color) -> None:
    surface.blit(font.render(text, True, color), (round(x), round(y)))


def draw(surface: pygame.Surface, game: Game, font: pygame.font.Font, fps: float) -> None:
    """Render one frame of the match onto the surface."""
    surface.fill(BG_COLOR)
    _text(surface, font, f"{round(fps):2d} FPS", FPS_POS_X, FPS_POS_Y, LIME)

    pygame.draw.rect(surface, game.left_paddle.color, _pg_rect(game.left_paddle.rect))
    pygame.draw.rect(surface, game.right_paddle.color, _pg_rect(game.right_paddle.rect))
    pygame.draw.circle(surface, game.ball.color, (game.ball.pos.x, game.ball.pos.y), game.ball.radius)

    score_font = _font(SCORES_TEXT_FONT_SIZE)
    _text(surface, score_font, str(game.left_player_score),
          SCORES_TEXT_LEFT_POS_X, SCORES_TEXT_LEFT_POS_Y, SCORES_TEXT_COLOR)
    _text(surface, score_font, str(game.right_player_score),
          SCORES_TEXT_RIGHT_POS_X, SCORES_TEXT_RIGHT_POS_Y, SCORES_TEXT_COLOR)

    for x, top, bottom in dash_line_segments():
        pygame.draw.line(surface, DASH_LINE_COLOR, (x, top), (x, bottom))


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    from raygames.core import read_input

    parser = argparse.ArgumentParser(prog="ping-pong", description="Play two-player Pong.")
    parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(SCREEN_WIDTH), int(SCREEN_HEIGHT)))
        pygame.display.set_caption(WINDOW_LABEL)
        pygame.mouse.set_visible(False)
        clock = pygame.time.Clock()
        fps_font = pygame.font.Font(None, 20)
        game = Game()

        while True:
            dt = clock.get_time() / 1000.0
            keys = read_input(pygame.event.get())
            if keys.quit:
                break
            game.handle_input(keys, dt)
            game.update(keys, dt)
            draw(screen, game, fps_font, clock.get_fps())
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        _font.cache_clear()
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())