"""Small animated drawing demos: background switch, snow, pixel cloud, sparks, snowflake."""

from __future__ import annotations

import argparse
import math
import random
from dataclasses import dataclass
from typing import Iterator

import pygame

from raygames.core import (
    BLACK,
    BLUE,
    GREEN,
    LIME,
    RED,
    WHITE,
    Color,
    InputState,
    Key,
    Vector2,
)

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
FPS = 60

SWITCH_FONT_SIZE = 50
SWITCH_TEXT = "Hello world from RAYLIB"

NUM_SNOW = 10000

PIXELS_COUNT = 100000

SPARK_RADIUS = 60.0
FRAMES_UNTIL_DIE = 60
MAX_PIXELS = 100000
PIXELS_PER_FRAME = 80

BRANCH_COUNT = 5
BRANCH_ANGLE = 2.0 * math.pi / BRANCH_COUNT
BRANCH_LEN = 250
BRANCH_THICK = 10.0
LEVEL = 5

Segment = tuple[Vector2, Vector2, float]


def background_for_keys(keys: InputState, current: Color) -> Color:
    """New background colour: R, G or B pick red, green or blue, B winning over G over R."""
    color = current
    if keys.is_pressed(Key.R):
        color = RED
    if keys.is_pressed(Key.G):
        color = GREEN
    if keys.is_pressed(Key.B):
        color = BLUE
    return color


class Snowfall:
    """Flakes that fall one pixel per frame and wrap back to the top."""

    def __init__(self, count: int, width: int, height: int, rng: random.Random | None = None) -> None:
        rng = rng if rng is not None else random.Random()
        self.width = width
        self.height = height
        self.flakes = [
            Vector2(float(rng.randint(0, width)), float(rng.randint(0, height)))
            for _ in range(count)
        ]

    def step(self) -> None:
        """Move every flake down one pixel."""
        for flake in self.flakes:
            flake.y += 1
            if flake.y > self.height:
                flake.y = 0.0


@dataclass
class Spark:
    pos: Vector2
    color: Color = BLACK
    frames_until_die: int = 0


class Sparks:
    """A ring buffer of short-lived sparks that fade out over a second."""

    def __init__(self, capacity: int = MAX_PIXELS) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._slots: dict[int, Spark] = {}
        self._next = 0

    @property
    def sparks(self) -> list[Spark]:
        """The live sparks in buffer order."""
        return [self._slots[i] for i in sorted(self._slots)]

    def emit(self, origin: Vector2, rng: random.Random) -> None:
        """Scatter a frame's worth of sparks within the radius around origin."""
        for _ in range(PIXELS_PER_FRAME):
            angle = math.radians(rng.randint(0, 359))
            r = SPARK_RADIUS * math.sqrt(rng.randint(0, 100) / 100.0)
            dx = int(r * math.cos(angle))
            dy = int(r * math.sin(angle))
            self._slots[self._next] = Spark(
                Vector2(origin.x + dx, origin.y + dy), BLACK, FRAMES_UNTIL_DIE
            )
            self._next = (self._next + 1) % self.capacity

    def step(self) -> list[tuple[Vector2, Color]]:
        """Return the live sparks with their faded colours and age them by a frame."""
        drawn = []
        for index in sorted(self._slots):
            spark = self._slots[index]
            alpha = spark.frames_until_die / 60.0
            r, g, b, _ = spark.color
            drawn.append((spark.pos, (r, g, b, int(255 * alpha))))
            spark.frames_until_die -= 1
            if spark.frames_until_die <= 0:
                del self._slots[index]
        return drawn


def random_pixels(
    count: int, width: int, height: int, rng: random.Random
) -> Iterator[tuple[int, int, Color]]:
    """Yield count pixels at random places with random opaque colours."""
    for _ in range(count):
        x = rng.randint(0, width - 1)
        y = rng.randint(0, height - 1)
        color = (rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255), 255)
        yield x, y, color


def snowflake_segments(
    center: Vector2, length: float, thickness: float, level: int
) -> Iterator[Segment]:
    """Yield the branches of a recursive snowflake, depth first."""
    if level <= 0:
        return
    for i in range(BRANCH_COUNT):
        branch = Vector2(
            center.x + math.cos(BRANCH_ANGLE * i) * length,
            center.y + math.sin(BRANCH_ANGLE * i) * length,
        )
        yield center, branch, thickness
        yield from snowflake_segments(branch, length * 0.5, thickness * 0.5, level - 1)


def _fps_text(surface: pygame.Surface, font: pygame.font.Font, fps: float) -> None:
    surface.blit(font.render(f"{round(fps):2d} FPS", True, LIME), (10, 10))


def _run_switch_bg(screen, clock, events) -> None:
    font = pygame.font.Font(None, SWITCH_FONT_SIZE)
    bg = WHITE
    for keys in events:
        bg = background_for_keys(keys, bg)
        screen.fill(bg)
        screen.blit(
            font.render(SWITCH_TEXT, True, BLACK),
            (SCREEN_WIDTH // 2 - 300, SCREEN_HEIGHT // 2),
        )
        yield


def _run_snowing(screen, clock, events) -> None:
    snow = Snowfall(NUM_SNOW, SCREEN_WIDTH, SCREEN_HEIGHT)
    for _ in events:
        screen.fill(BLACK)
        snow.step()
        for flake in snow.flakes:
            if 0 <= flake.x < SCREEN_WIDTH and 0 <= flake.y < SCREEN_HEIGHT:
                screen.set_at((int(flake.x), int(flake.y)), WHITE)
        yield


def _run_cloud(screen, clock, events) -> None:
    rng = random.Random()
    font = pygame.font.Font(None, 20)
    for _ in events:
        screen.fill(BLACK)
        _fps_text(screen, font, clock.get_fps())
        for x, y, color in random_pixels(PIXELS_COUNT, SCREEN_WIDTH, SCREEN_HEIGHT, rng):
            screen.set_at((x, y), color)
        yield


def _run_sparks(screen, clock, events) -> None:
    rng = random.Random()
    font = pygame.font.Font(None, 20)
    sparks = Sparks()
    layer = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    for _ in events:
        screen.fill(WHITE)
        mx, my = pygame.mouse.get_pos()
        sparks.emit(Vector2(float(mx), float(my)), rng)
        layer.fill((0, 0, 0, 0))
        for pos, color in sparks.step():
            if 0 <= pos.x < SCREEN_WIDTH and 0 <= pos.y < SCREEN_HEIGHT:
                layer.set_at((int(pos.x), int(pos.y)), color)
        screen.blit(layer, (0, 0))
        _fps_text(screen, font, clock.get_fps())
        yield


def _run_snowflake(screen, clock, events) -> None:
    font = pygame.font.Font(None, 20)
    center = Vector2(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
    segments = list(snowflake_segments(center, BRANCH_LEN, BRANCH_THICK, LEVEL))
    for _ in events:
        screen.fill(BLACK)
        for start, end, thick in segments:
            pygame.draw.line(
                screen, RED, (start.x, start.y), (end.x, end.y), max(1, round(thick))
            )
        _fps_text(screen, font, clock.get_fps())
        yield


_DEMOS = {
    "switch-bg": ("02_switch_bg_color", _run_switch_bg),
    "snowing": ("01_snowing", _run_snowing),
    "cloud": ("01_pixels_cloud", _run_cloud),
    "sparks": ("01_pixels_sparks", _run_sparks),
    "snowflake": ("01_lines_snowflakes", _run_snowflake),
}


def main(argv: list[str] | None = None) -> int:
    """Open a window running the chosen demo until it is closed."""
    from raygames.core import read_input

    parser = argparse.ArgumentParser(prog="raygames-demo", description="Run a drawing demo.")
    parser.add_argument("demo", choices=sorted(_DEMOS), help="which demo to run")
    args = parser.parse_args(argv)

    title, runner = _DEMOS[args.demo]
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(title)
        clock = pygame.time.Clock()

        def frames() -> Iterator[InputState]:
            while True:
                keys = read_input(pygame.event.get())
                if keys.quit:
                    return
                yield keys

        for _ in runner(screen, clock, frames()):
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())