import math
import random

import pytest

from raygames.core import InputState, Key, Vector2
from raygames.ping_pong_v2 import (
    BALL_POS,
    BALL_VELOCITY_SCALE,
    HELP_MENU_TEXTS,
    MAIN_MENU_TEXTS,
    MENU_TEXT_FONT_SIZE,
    MENU_TEXT_TITLE_FONT_SIZE,
    PADDLE_VELOCITY,
    PADDLE_VELOCITY_SCALE,
    SCREEN_WIDTH,
    SH_HALF,
    SW_HALF,
    Game,
    Screen,
    build_help_menu,
    build_main_menu,
)
from raygames.ping_pong import BALL_VELOCITY


def fake_measure(text, size):
    return len(text) * size // 2


def pressed(*keys):
    return InputState(pressed=frozenset(keys))


def held(*keys):
    return InputState(down=frozenset(keys))


@pytest.fixture
def game():
    return Game(random.Random(7))


def test_main_menu_layout():
    items = build_main_menu(fake_measure)
    assert [item.text for item in items] == list(MAIN_MENU_TEXTS)
    assert items[0].font_size == MENU_TEXT_TITLE_FONT_SIZE
    assert all(item.font_size == MENU_TEXT_FONT_SIZE for item in items[1:])
    for item in items:
        assert item.width == fake_measure(item.text, item.font_size)
        assert item.pos.x == SW_HALF - item.width // 2
    assert [item.pos.y for item in items] == [SH_HALF - 150, SH_HALF - 50, SH_HALF + 10]


def test_help_menu_layout():
    items = build_help_menu(fake_measure)
    assert [item.text for item in items] == list(HELP_MENU_TEXTS)
    assert items[0].pos.x == SW_HALF - items[0].width // 2
    assert items[0].pos.y == SH_HALF - 350
    lines = items[1:]
    assert all(item.pos.x == SW_HALF - 300 for item in lines)
    assert lines[0].pos.y == SH_HALF - 250
    gaps = {b.pos.y - a.pos.y for a, b in zip(lines, lines[1:])}
    assert gaps == {MENU_TEXT_FONT_SIZE + 10}


def test_starts_on_menu(game):
    assert game.screen is Screen.MENU
    assert (game.left_player_score, game.right_player_score) == (0, 0)


def test_menu_navigation(game):
    game.step(pressed(Key.H), 0.016)
    assert game.screen is Screen.HELP
    game.step(pressed(Key.ENTER), 0.016)
    assert game.screen is Screen.MENU
    game.step(pressed(Key.ENTER), 0.016)
    assert game.screen is Screen.GAME


def test_menu_ignores_paddle_keys(game):
    y = game.left_paddle.rect.y
    game.step(held(Key.W), 0.5)
    assert game.left_paddle.rect.y == y


def test_game_input_moves_paddles(game):
    game.screen = Screen.GAME
    left_y = game.left_paddle.rect.y
    right_y = game.right_paddle.rect.y
    game.handle_game_input(held(Key.W, Key.DOWN), 0.1)
    assert game.left_paddle.rect.y == pytest.approx(left_y - PADDLE_VELOCITY * 0.1)
    assert game.right_paddle.rect.y == pytest.approx(right_y + PADDLE_VELOCITY * 0.1)


def test_m_returns_to_menu_and_resets(game):
    game.screen = Screen.GAME
    game.left_player_score = 4
    game.left_paddle.velocity = 900.0
    game.step(pressed(Key.M), 0.016)
    assert game.screen is Screen.MENU
    assert game.left_player_score == 0
    assert game.left_paddle.velocity == PADDLE_VELOCITY


def test_serve_moves_ball(game):
    game.screen = Screen.GAME
    velocity = Vector2(game.ball.velocity.x, game.ball.velocity.y)
    game.step(pressed(Key.SPACE), 0.1)
    assert game.ball.active
    assert game.ball.pos.x == pytest.approx(BALL_POS.x + velocity.x * 0.1)
    assert game.ball.pos.y == pytest.approx(BALL_POS.y + velocity.y * 0.1)


def test_ball_waits_without_serve(game):
    game.screen = Screen.GAME
    game.step(InputState(), 0.1)
    assert (game.ball.pos.x, game.ball.pos.y) == (BALL_POS.x, BALL_POS.y)


def test_left_paddle_bounce_speeds_up_everything(game):
    rect = game.left_paddle.rect
    game.ball.pos = Vector2(rect.x + rect.width + 5, rect.y + rect.height / 2)
    game.ball.velocity = Vector2(-BALL_VELOCITY, 0.0)
    game.advanced_paddle_collision()
    assert game.ball.velocity.x > 0
    speed = math.hypot(game.ball.velocity.x, game.ball.velocity.y)
    assert speed == pytest.approx(BALL_VELOCITY * BALL_VELOCITY_SCALE)
    assert game.left_paddle.velocity == pytest.approx(PADDLE_VELOCITY * PADDLE_VELOCITY_SCALE)
    assert game.right_paddle.velocity == pytest.approx(PADDLE_VELOCITY * PADDLE_VELOCITY_SCALE)


def test_right_paddle_bounce_reverses(game):
    rect = game.right_paddle.rect
    game.ball.pos = Vector2(rect.x - 5, rect.y + rect.height / 2)
    game.ball.velocity = Vector2(BALL_VELOCITY, 0.0)
    game.advanced_paddle_collision()
    assert game.ball.velocity.x == pytest.approx(-BALL_VELOCITY * BALL_VELOCITY_SCALE)
    assert game.ball.velocity.y == pytest.approx(0.0, abs=1e-9)


def test_receding_ball_passes_through(game):
    rect = game.left_paddle.rect
    game.ball.pos = Vector2(rect.x + rect.width + 5, rect.y + rect.height / 2)
    game.ball.velocity = Vector2(BALL_VELOCITY, 0.0)
    game.advanced_paddle_collision()
    assert game.ball.velocity.x == BALL_VELOCITY
    assert game.left_paddle.velocity == PADDLE_VELOCITY


def test_ball_out_left_scores_for_right(game):
    game.ball.active = True
    game.ball.pos = Vector2(-100.0, SH_HALF)
    game.update_score()
    assert (game.left_player_score, game.right_player_score) == (0, 1)
    assert not game.ball.active
    assert (game.ball.pos.x, game.ball.pos.y) == (BALL_POS.x, BALL_POS.y)
    assert math.hypot(game.ball.velocity.x, game.ball.velocity.y) == pytest.approx(BALL_VELOCITY)


def test_ball_out_right_scores_for_left(game):
    game.ball.pos = Vector2(SCREEN_WIDTH + 100.0, SH_HALF)
    game.update_score()
    assert (game.left_player_score, game.right_player_score) == (1, 0)


def test_reset_ball_direction_within_range():
    game = Game(random.Random(3))
    for _ in range(50):
        game.reset_ball()
        vx, vy = game.ball.velocity.x, game.ball.velocity.y
        assert abs(vy) <= abs(vx) + 1e-6
        assert not game.ball.active