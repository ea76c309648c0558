"""Shared geometry, colours and keyboard input for the games and demos."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

import pygame

Color = tuple[int, int, int, int]

LIGHTGRAY: Color = (200, 200, 200, 255)
GRAY: Color = (130, 130, 130, 255)
YELLOW: Color = (253, 249, 0, 255)
ORANGE: Color = (255, 161, 0, 255)
PINK: Color = (255, 109, 194, 255)
RED: Color = (230, 41, 55, 255)
GREEN: Color = (0, 228, 48, 255)
LIME: Color = (0, 158, 47, 255)
BLUE: Color = (0, 121, 241, 255)
DARKBLUE: Color = (0, 82, 172, 255)
PURPLE: Color = (200, 122, 255, 255)
WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
RAYWHITE: Color = (245, 245, 245, 255)


@dataclass
class Vector2:
    """A mutable 2D point or vector."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Rectangle:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class Key(enum.IntEnum):
    """Keys the programs react to, valued by their pygame key codes."""

    LEFT = pygame.K_LEFT
    RIGHT = pygame.K_RIGHT
    UP = pygame.K_UP
    DOWN = pygame.K_DOWN
    W = pygame.K_w
    S = pygame.K_s
    SPACE = pygame.K_SPACE
    ENTER = pygame.K_RETURN
    M = pygame.K_m
    H = pygame.K_h
    R = pygame.K_r
    G = pygame.K_g
    B = pygame.K_b
    ESCAPE = pygame.K_ESCAPE


@dataclass(frozen=True)
class InputState:
    """Keyboard state for one frame: keys held down and keys newly pressed."""

    down: frozenset[Key] = field(default_factory=frozenset)
    pressed: frozenset[Key] = field(default_factory=frozenset)
    quit: bool = False

    def is_down(self, key: Key) -> bool:
        """Whether the key is currently held."""
        return key in self.down

    def is_pressed(self, key: Key) -> bool:
        """Whether the key went down during this frame."""
        return key in self.pressed


def check_collision_circle_rec(center: Vector2, radius: float, rect: Rectangle) -> bool:
    """Whether a circle overlaps a rectangle."""
    half_w = rect.width / 2.0
    half_h = rect.height / 2.0
    dx = abs(center.x - (rect.x + half_w))
    dy = abs(center.y - (rect.y + half_h))

    if dx > half_w + radius or dy > half_h + radius:
        return False
    if dx <= half_w or dy <= half_h:
        return True
    corner_sq = (dx - half_w) ** 2 + (dy - half_h) ** 2
    return corner_sq <= radius * radius


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the range [low, high]."""
    result = low if value < low else value
    return high if result > high else result


def _to_key(code: int) -> Key | None:
    try:
        return Key(code)
    except ValueError:
        return None


def read_input(events: Iterable[pygame.event.Event]) -> InputState:
    """Build the frame's input state from a batch of pygame events.

    Held keys come from the keyboard state when a display is running,
    and from the key events of the batch in any case.
    """
    held: set[Key] = set()
    pressed: set[Key] = set()
    quit_requested = False

    for event in events:
        if event.type == pygame.QUIT:
            quit_requested = True
        elif event.type == pygame.KEYDOWN:
            key = _to_key(event.key)
            if key is None:
                continue
            if key is Key.ESCAPE:
                quit_requested = True
            pressed.add(key)
            held.add(key)
        elif event.type == pygame.KEYUP:
            key = _to_key(event.key)
            if key is not None:
                held.discard(key)

    if pygame.display.get_init():
        state = pygame.key.get_pressed()
        held.update(key for key in Key if state[key.value])

    return InputState(frozenset(held), frozenset(pressed), quit_requested)