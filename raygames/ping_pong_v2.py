"""Two-player Pong with a main menu, a help screen and paddles that speed up."""

from __future__ import annotations

import argparse
import enum
import functools
import math
import random
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

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
)
from raygames.ping_pong import (
    BALL_VELOCITY,
    Ball,
    Paddle,
    clamp_paddle,
    dash_line_segments,
    reflection_angle,
)

SCREEN_WIDTH = 1920.0
SCREEN_HEIGHT = 1080.0
SW_HALF = SCREEN_WIDTH / 2.0
SH_HALF = SCREEN_HEIGHT / 2.0
WINDOW_LABEL = "Ping Pong V2"
BG_COLOR = BLACK

FPS = 60
FPS_POS = Vector2(10.0, 10.0)

PADDLE_WIDTH = 20.0
PADDLE_HEIGHT = 200.0
LEFT_PADDLE_POS = Vector2(20.0, SH_HALF - PADDLE_HEIGHT / 2.0)
RIGHT_PADDLE_POS = Vector2(SCREEN_WIDTH - 20.0 - PADDLE_WIDTH, LEFT_PADDLE_POS.y)
PADDLE_VELOCITY = 500.0
PADDLE_VELOCITY_SCALE = 1.05

BALL_POS = Vector2(SW_HALF, SH_HALF)
BALL_VELOCITY_SCALE = 1.1

SCORES_TEXT_LEFT_POS = Vector2(30.0, SCREEN_HEIGHT - 50.0)
SCORES_TEXT_RIGHT_POS = Vector2(SCREEN_WIDTH - 50.0, SCORES_TEXT_LEFT_POS.y)
SCORES_TEXT_FONT_SIZE = 50
SCORES_TEXT_COLOR = WHITE

DASH_LINE_COLOR = WHITE

MENU_TEXT_TITLE_FONT_SIZE = 60
MENU_TEXT_FONT_SIZE = 40
MENU_TEXT_TITLE_COLOR = RED
MENU_TEXT_COLOR = WHITE

MAIN_MENU_TEXTS = (
    "Ping Pong V2",
    "Press ENTER to start game",
    "Press H for Help",
)

HELP_MENU_TEXTS = (
    "Help",
    "Controls:",
    "  W/S - Move left paddle",
    "  UP/DOWN - Move right paddle",
    "  SPACE - Serve the ball",
    "  M - Return to menu (from game)",
    "  ESC - End the game",
    "Press ENTER to return to menu",
)

Measure = Callable[[str, int], int]


class Screen(enum.Enum):
    GAME = enum.auto()
    MENU = enum.auto()
    HELP = enum.auto()


@dataclass
class MenuItem:
    text: str
    font_size: int
    color: Color
    pos: Vector2
    width: int


def _title(text: str, measure: Measure, y: float) -> MenuItem:
    width = measure(text, MENU_TEXT_TITLE_FONT_SIZE)
    return MenuItem(
        text, MENU_TEXT_TITLE_FONT_SIZE, MENU_TEXT_TITLE_COLOR,
        Vector2(SW_HALF - width // 2, y), width,
    )


def build_main_menu(measure: Measure) -> list[MenuItem]:
    """Lay out the main menu; measure(text, font_size) gives a text's width in pixels."""
    title, *options = MAIN_MENU_TEXTS
    items = [_title(title, measure, SH_HALF - 150)]
    for index, text in enumerate(options):
        width = measure(text, MENU_TEXT_FONT_SIZE)
        y = SH_HALF - 50 if index == 0 else SH_HALF + 10
        items.append(
            MenuItem(text, MENU_TEXT_FONT_SIZE, MENU_TEXT_COLOR, Vector2(SW_HALF - width // 2, y), width)
        )
    return items


def build_help_menu(measure: Measure) -> list[MenuItem]:
    """Lay out the help screen: a centred title, then left-aligned lines."""
    title, *lines = HELP_MENU_TEXTS
    items = [_title(title, measure, SH_HALF - 350)]
    for index, text in enumerate(lines):
        width = measure(text, MENU_TEXT_FONT_SIZE)
        y = SH_HALF - 250 + index * (MENU_TEXT_FONT_SIZE + 10)
        items.append(
            MenuItem(text, MENU_TEXT_FONT_SIZE, MENU_TEXT_COLOR, Vector2(SW_HALF - 300, y), width)
        )
    return items


class Game:
    """State and rules of a Pong match, together with the screen being shown."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> None:
        """Start over: paddles and ball in place, scores zero, main menu shown."""
        self.left_paddle = Paddle(
            Rectangle(LEFT_PADDLE_POS.x, LEFT_PADDLE_POS.y, PADDLE_WIDTH, PADDLE_HEIGHT),
            velocity=PADDLE_VELOCITY,
        )
        self.right_paddle = Paddle(
            Rectangle(RIGHT_PADDLE_POS.x, RIGHT_PADDLE_POS.y, PADDLE_WIDTH, PADDLE_HEIGHT),
            velocity=PADDLE_VELOCITY,
        )
        self.ball = Ball(Vector2(BALL_POS.x, BALL_POS.y))
        self.left_player_score = 0
        self.right_player_score = 0
        self.screen = Screen.MENU

    def step(self, keys: InputState, dt: float) -> None:
        """Handle one frame on whichever screen is current."""
        if self.screen is Screen.MENU:
            self.handle_menu_input(keys)
        elif self.screen is Screen.GAME:
            self.handle_game_input(keys, dt)
            self.update_game(keys, dt)
        elif self.screen is Screen.HELP:
            self.handle_help_input(keys)

    def handle_game_input(self, keys: InputState, dt: float) -> None:
        """Move the paddles; M abandons the match and returns to the menu."""
        left, right = self.left_paddle, self.right_paddle
        if keys.is_down(Key.W):
            left.rect.y -= left.velocity * dt
        if keys.is_down(Key.S):
            left.rect.y += left.velocity * dt
        if keys.is_down(Key.UP):
            right.rect.y -= right.velocity * dt
        if keys.is_down(Key.DOWN):
            right.rect.y += right.velocity * dt

        if keys.is_pressed(Key.M):
            self.reset()
            self.screen = Screen.MENU

    def handle_menu_input(self, keys: InputState) -> None:
        if keys.is_pressed(Key.ENTER):
            self.screen = Screen.GAME
        if keys.is_pressed(Key.H):
            self.screen = Screen.HELP

    def handle_help_input(self, keys: InputState) -> None:
        if keys.is_pressed(Key.ENTER):
            self.screen = Screen.MENU

    def update_game(self, keys: InputState, dt: float) -> None:
        """Advance the match by dt seconds."""
        clamp_paddle(self.left_paddle)
        clamp_paddle(self.right_paddle)

        if keys.is_pressed(Key.SPACE):
            self.ball.active = True

        if self.ball.active:
            ball = self.ball
            ball.pos.x += ball.velocity.x * dt
            ball.pos.y += ball.velocity.y * dt
            if ball.pos.y - ball.radius <= 0 or ball.pos.y + ball.radius >= SCREEN_HEIGHT:
                ball.velocity.y *= -1.0
            self.advanced_paddle_collision()
            self.update_score()

    def advanced_paddle_collision(self) -> None:
        """Bounce the ball at an angle set by the hit point; speed up ball and paddles."""
        ball = self.ball
        speed = math.hypot(ball.velocity.x, ball.velocity.y)

        for is_left, paddle in ((True, self.left_paddle), (False, self.right_paddle)):
            hit = check_collision_circle_rec(ball.pos, ball.radius, paddle.rect)
            approaching = ball.velocity.x < 0 if is_left else ball.velocity.x > 0
            if hit and approaching:
                angle = reflection_angle(paddle, ball.pos.y)
                new_angle = angle if is_left else math.pi - angle
                speed *= BALL_VELOCITY_SCALE
                ball.velocity = Vector2(speed * math.cos(new_angle), speed * math.sin(new_angle))
                self.left_paddle.velocity *= PADDLE_VELOCITY_SCALE
                self.right_paddle.velocity *= PADDLE_VELOCITY_SCALE

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
        self.ball.pos = Vector2(BALL_POS.x, BALL_POS.y)
        offset = math.radians(self.rng.randint(-45, 45))
        angle = offset if self.rng.randint(0, 1) == 0 else offset + math.pi
        self.ball.velocity = Vector2(BALL_VELOCITY * math.cos(angle), BALL_VELOCITY * math.sin(angle))
        self.ball.active = False


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.Font(None, size)


def _pg_rect(rect: Rectangle) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def _text(surface: pygame.Surface, font: pygame.font.Font, text: str, pos: Vector2, color: Color) -> None:
    surface.blit(font.render(text, True, color), (round(pos.x), round(pos.y)))


def draw_game(surface: pygame.Surface, game: Game, font: pygame.font.Font, fps: float) -> None:
    """Render one frame of the match onto the surface."""
    surface.fill(BG_COLOR)
    _text(surface, font, f"{round(fps):2d} FPS", FPS_POS, LIME)

    pygame.draw.rect(surface, game.left_paddle.color, _pg_rect(game.left_paddle.rect))
    pygame.draw.rect(surface, game.right_paddle.color, _pg_rect(game.right_paddle.rect))
    pygame.draw.circle(surface, game.ball.color, (game.ball.pos.x, game.ball.pos.y), game.ball.radius)

    score_font = _font(SCORES_TEXT_FONT_SIZE)
    _text(surface, score_font, str(game.left_player_score), SCORES_TEXT_LEFT_POS, SCORES_TEXT_COLOR)
    _text(surface, score_font, str(game.right_player_score), SCORES_TEXT_RIGHT_POS, SCORES_TEXT_COLOR)

    for x, top, bottom in dash_line_segments():
        pygame.draw.line(surface, DASH_LINE_COLOR, (x, top), (x, bottom))


def draw_menu(
    surface: pygame.Surface, items: Sequence[MenuItem], fonts: Mapping[int, pygame.font.Font]
) -> None:
    """Render a menu; fonts maps each item's font size to a font."""
    surface.fill(BG_COLOR)
    for item in items:
        _text(surface, fonts[item.font_size], item.text, item.pos, item.color)


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    from raygames.core import read_input

    parser = argparse.ArgumentParser(prog="ping-pong-v2", description="Play two-player Pong with menus.")
    parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(SCREEN_WIDTH), int(SCREEN_HEIGHT)))
        pygame.display.set_caption(WINDOW_LABEL)
        pygame.mouse.set_visible(False)
        clock = pygame.time.Clock()
        fps_font = pygame.font.Font(None, 20)
        fonts = {size: _font(size) for size in (MENU_TEXT_TITLE_FONT_SIZE, MENU_TEXT_FONT_SIZE)}

        def measure(text: str, size: int) -> int:
            return fonts[size].size(text)[0]

        main_menu = build_main_menu(measure)
        help_menu = build_help_menu(measure)
        game = Game()

        while True:
            dt = clock.get_time() / 1000.0
            keys = read_input(pygame.event.get())
            if keys.quit:
                break
            shown = game.screen
            game.step(keys, dt)
            if shown is Screen.GAME:
                draw_game(screen, game, fps_font, clock.get_fps())
            elif shown is Screen.MENU:
                draw_menu(screen, main_menu, fonts)
            else:
                draw_menu(screen, help_menu, fonts)
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        _font.cache_clear()
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())