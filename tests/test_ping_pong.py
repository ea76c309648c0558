import math
import random

import pygame
import pytest

from raygames import ping_pong
from raygames.core import WHITE, InputState, Key, Vector2
from raygames.ping_pong import Game, clamp_paddle, dash_line_segments, reflection_angle


@pytest.fixture
def game():
    return Game(random.Random(1234))


def _center_ball_on(game, paddle):
    rect = paddle.rect
    game.ball.pos = Vector2(rect.x + rect.width / 2.0, rect.y + rect.height / 2.0)


def test_initial_state(game):
    assert game.left_paddle.rect.x == ping_pong.LEFT_PADDLE_POS_X
    assert game.right_paddle.rect.x == ping_pong.RIGHT_PADDLE_POS_X
    assert game.left_paddle.rect.y == ping_pong.LEFT_PADDLE_POS_Y
    assert (game.left_player_score, game.right_player_score) == (0, 0)
    assert game.ball.active is False
    assert (game.ball.pos.x, game.ball.pos.y) == (ping_pong.BALL_POS_X, ping_pong.BALL_POS_Y)
    assert (game.ball.velocity.x, game.ball.velocity.y) == (
        ping_pong.BALL_VELOCITY,
        ping_pong.BALL_VELOCITY,
    )


def test_clamp_paddle_top_and_bottom(game):
    paddle = game.left_paddle
    paddle.rect.y = -25.0
    clamp_paddle(paddle)
    assert paddle.rect.y == 0.0

    paddle.rect.y = ping_pong.SCREEN_HEIGHT
    clamp_paddle(paddle)
    assert paddle.rect.y == ping_pong.SCREEN_HEIGHT - paddle.rect.height


def test_reflection_angle_center_and_limits(game):
    paddle = game.left_paddle
    center_y = paddle.rect.y + paddle.rect.height / 2.0
    assert reflection_angle(paddle, center_y) == pytest.approx(0.0)
    assert reflection_angle(paddle, center_y + 10_000) == pytest.approx(
        ping_pong.BALL_MAX_REFLECTION_ANGLE_RAD
    )
    assert reflection_angle(paddle, center_y - 10_000) == pytest.approx(
        -ping_pong.BALL_MAX_REFLECTION_ANGLE_RAD
    )


def test_reflection_angle_is_monotonic(game):
    paddle = game.left_paddle
    ys = [paddle.rect.y + step * 10.0 for step in range(21)]
    angles = [reflection_angle(paddle, y) for y in ys]
    assert angles == sorted(angles)


def test_input_moves_paddles(game):
    dt = 0.1
    start_left = game.left_paddle.rect.y
    start_right = game.right_paddle.rect.y
    game.handle_input(InputState(down=frozenset({Key.W, Key.DOWN})), dt)
    assert game.left_paddle.rect.y == pytest.approx(start_left - ping_pong.PADDLE_VELOCITY * dt)
    assert game.right_paddle.rect.y == pytest.approx(start_right + ping_pong.PADDLE_VELOCITY * dt)


def test_ball_waits_for_serve(game):
    game.update(InputState(), 0.5)
    assert game.ball.active is False
    assert (game.ball.pos.x, game.ball.pos.y) == (ping_pong.BALL_POS_X, ping_pong.BALL_POS_Y)


def test_serve_starts_ball(game):
    dt = 0.01
    game.update(InputState(pressed=frozenset({Key.SPACE})), dt)
    assert game.ball.active is True
    assert game.ball.pos.x == pytest.approx(ping_pong.BALL_POS_X + ping_pong.BALL_VELOCITY * dt)
    assert game.ball.pos.y == pytest.approx(ping_pong.BALL_POS_Y + ping_pong.BALL_VELOCITY * dt)


def test_wall_collision_flips_vertical_velocity(game):
    game.ball.pos = Vector2(ping_pong.BALL_POS_X, game.ball.radius)
    game.ball.velocity = Vector2(100.0, -200.0)
    game.handle_ball_wall_collision()
    assert game.ball.velocity.y == 200.0
    assert game.ball.velocity.x == 100.0


def test_advanced_collision_left_paddle(game):
    _center_ball_on(game, game.left_paddle)
    game.ball.velocity = Vector2(-300.0, -400.0)
    before = math.hypot(-300.0, -400.0)
    game.advanced_paddle_collision()
    v = game.ball.velocity
    assert v.x > 0
    assert v.y == pytest.approx(0.0, abs=1e-9)
    assert math.hypot(v.x, v.y) == pytest.approx(before * ping_pong.BALL_VELOCITY_INCREASE_FACTOR)


def test_advanced_collision_right_paddle(game):
    _center_ball_on(game, game.right_paddle)
    game.ball.velocity = Vector2(500.0, 0.0)
    game.advanced_paddle_collision()
    assert game.ball.velocity.x < 0
    assert math.hypot(game.ball.velocity.x, game.ball.velocity.y) == pytest.approx(
        500.0 * ping_pong.BALL_VELOCITY_INCREASE_FACTOR
    )


def test_advanced_collision_ignores_ball_moving_away(game):
    _center_ball_on(game, game.left_paddle)
    game.ball.velocity = Vector2(300.0, 50.0)
    game.advanced_paddle_collision()
    assert (game.ball.velocity.x, game.ball.velocity.y) == (300.0, 50.0)


def test_simple_collision_flips_horizontal(game):
    _center_ball_on(game, game.left_paddle)
    game.ball.velocity = Vector2(-300.0, 40.0)
    game.simple_paddle_collision()
    assert (game.ball.velocity.x, game.ball.velocity.y) == (300.0, 40.0)


def test_score_right_player(game):
    game.ball.active = True
    game.ball.pos = Vector2(-game.ball.radius - 1.0, ping_pong.BALL_POS_Y)
    game.update_score()
    assert (game.left_player_score, game.right_player_score) == (0, 1)
    assert game.ball.active is False
    assert (game.ball.pos.x, game.ball.pos.y) == (ping_pong.BALL_POS_X, ping_pong.BALL_POS_Y)


def test_score_left_player(game):
    game.ball.active = True
    game.ball.pos = Vector2(ping_pong.SCREEN_WIDTH + game.ball.radius + 1.0, ping_pong.BALL_POS_Y)
    game.update_score()
    assert (game.left_player_score, game.right_player_score) == (1, 0)


@pytest.mark.parametrize("seed", range(20))
def test_reset_ball_direction(seed):
    game = Game(random.Random(seed))
    game.reset_ball()
    v = game.ball.velocity
    assert math.hypot(v.x, v.y) == pytest.approx(ping_pong.BALL_VELOCITY)
    assert abs(v.x) >= ping_pong.BALL_VELOCITY * math.cos(math.radians(45)) - 1e-6
    assert game.ball.active is False


def test_dash_line_segments_invariants():
    segments = list(dash_line_segments())
    assert segments[0] == (ping_pong.DASH_LINE_CENTER_X, 0.0, ping_pong.DASH_LINE_HEIGHT)
    step = ping_pong.DASH_LINE_HEIGHT + ping_pong.DASH_LINE_GAP_HEIGHT
    for (x, top, bottom), (_, next_top, _) in zip(segments, segments[1:]):
        assert next_top - top == pytest.approx(step)
    for x, top, bottom in segments:
        assert x == ping_pong.DASH_LINE_CENTER_X
        assert top < ping_pong.SCREEN_HEIGHT
        assert bottom <= ping_pong.SCREEN_HEIGHT
        assert 0 < bottom - top <= ping_pong.DASH_LINE_HEIGHT


def test_draw_paints_paddles(game):
    pygame.font.init()
    surface = pygame.Surface((int(ping_pong.SCREEN_WIDTH), int(ping_pong.SCREEN_HEIGHT)))
    ping_pong.draw(surface, game, pygame.font.Font(None, 20), 60.0)
    rect = game.left_paddle.rect
    pixel = surface.get_at((int(rect.x + rect.width / 2), int(rect.y + rect.height / 2)))
    assert tuple(pixel) == WHITE