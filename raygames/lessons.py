"""Introductory drawing lessons: a window, scaling text, pixels, lines, triangles, rectangles."""

from __future__ import annotations

import argparse
import math
from typing import Iterator, Sequence

import pygame

from raygames.core import (
    BLACK,
    BLUE,
    DARKBLUE,
    GREEN,
    LIME,
    ORANGE,
    PINK,
    PURPLE,
    RAYWHITE,
    RED,
    WHITE,
    YELLOW,
    Color,
    InputState,
    Rectangle,
    Vector2,
)

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
SWH = SCREEN_WIDTH // 2
SHH = SCREEN_HEIGHT // 2
FPS = 60

FONT_SIZE = 50
MESSAGE = "Hello world from RAYLIB"

ASPECT_RATIO_WIDTH = 16.0
ASPECT_RATIO_HEIGHT = 9.0
SCALE_FACTOR = 120.0
BASE_SCREEN_WIDTH = ASPECT_RATIO_WIDTH * SCALE_FACTOR
BASE_SCREEN_HEIGHT = ASPECT_RATIO_HEIGHT * SCALE_FACTOR
BASE_FONT_SIZE = int(SCALE_FACTOR * 0.5)

BEZIER_SEGMENTS = 24
BEZIER_THICK = 30.0

Triangle = tuple[Vector2, Vector2, Vector2]


def scaled_font_size(width: float, height: float) -> int:
    """Font size for a window of the given size, keeping the base layout's proportions."""
    scale = min(width / BASE_SCREEN_WIDTH, height / BASE_SCREEN_HEIGHT)
    return int(BASE_FONT_SIZE * scale)


def line_strip_points() -> list[Vector2]:
    """The open square drawn as a line strip in the lines lesson."""
    return [
        Vector2(SWH, SHH),
        Vector2(SWH - 300, SHH),
        Vector2(SWH - 300, SHH + 300),
        Vector2(SWH, SHH + 300),
    ]


def triangle_fan_points() -> list[Vector2]:
    """An octagon around the screen centre: the centre, then the rim closed on itself."""
    return [
        Vector2(SWH, SHH),
        Vector2(SWH + 100, SHH),
        Vector2(SWH + 70, SHH + 70),
        Vector2(SWH, SHH + 100),
        Vector2(SWH - 70, SHH + 70),
        Vector2(SWH - 100, SHH),
        Vector2(SWH - 70, SHH - 70),
        Vector2(SWH, SHH - 100),
        Vector2(SWH + 70, SHH - 70),
        Vector2(SWH + 100, SHH),
    ]


def fan_triangles(points: Sequence[Vector2]) -> list[Triangle]:
    """Split a triangle fan into triangles that share the first point.

    Fewer than three points give no triangles.
    """
    if len(points) < 3:
        return []
    hub = points[0]
    return [(hub, a, b) for a, b in zip(points[1:], points[2:])]


def _ease_cubic_in_out(t: float, begin: float, change: float, duration: float) -> float:
    t /= duration / 2.0
    if t < 1.0:
        return change / 2.0 * t * t * t + begin
    t -= 2.0
    return change / 2.0 * (t * t * t + 2.0) + begin


def bezier_points(start: Vector2, end: Vector2, segments: int = BEZIER_SEGMENTS) -> list[Vector2]:
    """Points of an S-shaped curve from start to end: even steps in x, cubic ease in y."""
    if segments < 1:
        raise ValueError("segments must be at least 1")
    step_x = (end.x - start.x) / segments
    points = [Vector2(start.x, start.y)]
    for i in range(1, segments + 1):
        points.append(
            Vector2(
                start.x + step_x * i,
                _ease_cubic_in_out(float(i), start.y, end.y - start.y, float(segments)),
            )
        )
    return points


def _xy(point: Vector2) -> tuple[float, float]:
    return point.x, point.y


def _fps_text(surface: pygame.Surface, font: pygame.font.Font, fps: float) -> None:
    surface.blit(font.render(f"{round(fps):2d} FPS", True, LIME), (10, 10))


def _pg_rect(rect: Rectangle) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


def _rotated_rect_corners(rect: Rectangle, origin: Vector2, rotation: float) -> list[tuple[float, float]]:
    angle = math.radians(rotation)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    offsets = (
        (-origin.x, -origin.y),
        (-origin.x + rect.width, -origin.y),
        (-origin.x + rect.width, -origin.y + rect.height),
        (-origin.x, -origin.y + rect.height),
    )
    return [
        (rect.x + dx * cos_a - dy * sin_a, rect.y + dx * sin_a + dy * cos_a)
        for dx, dy in offsets
    ]


def _rounded(surface: pygame.Surface, color: Color, rect: Rectangle, roundness: float, width: int = 0) -> None:
    radius = round(roundness * min(rect.width, rect.height) / 2.0)
    pygame.draw.rect(surface, color, _pg_rect(rect), width, border_radius=radius)


def _run_window(screen, clock, frames) -> Iterator[None]:
    font = pygame.font.Font(None, FONT_SIZE)
    for _ in frames:
        screen.fill(RAYWHITE)
        screen.blit(font.render(MESSAGE, True, RED), (SWH - 300, SHH))
        yield


def _run_scaling(screen, clock, frames) -> Iterator[None]:
    for _ in frames:
        surface = pygame.display.get_surface()
        width, height = surface.get_size()
        font = pygame.font.Font(None, max(1, scaled_font_size(width, height)))
        surface.fill(RAYWHITE)
        text_width = font.size(MESSAGE)[0]
        surface.blit(font.render(MESSAGE, True, RED), (width // 2 - text_width // 2, height // 2))
        yield


def _run_pixels(screen, clock, frames) -> Iterator[None]:
    font = pygame.font.Font(None, 20)
    for _ in frames:
        screen.fill(BLACK)
        _fps_text(screen, font, clock.get_fps())
        screen.set_at((SWH, SHH), RED)
        screen.set_at((SWH + 100, SHH + 100), GREEN)
        yield


def _run_lines(screen, clock, frames) -> Iterator[None]:
    strip = [_xy(p) for p in line_strip_points()]
    center = Vector2(SWH, SHH)
    for _ in frames:
        mx, my = pygame.mouse.get_pos()
        screen.fill(BLACK)
        pygame.draw.line(screen, GREEN, (SWH, SHH), (SWH + 300, SHH + 300))
        pygame.draw.line(screen, BLUE, (SWH, SHH), (SWH - 300, SHH - 300))
        pygame.draw.line(screen, YELLOW, (SWH, SHH), (SWH + 300, SHH - 300), 30)
        pygame.draw.lines(screen, RED, False, strip)
        curve = [_xy(p) for p in bezier_points(center, Vector2(float(mx), float(my)))]
        pygame.draw.lines(screen, PINK, False, curve, round(BEZIER_THICK))
        yield


def _run_triangles(screen, clock, frames) -> Iterator[None]:
    filled = [(SWH - 300, SHH - 200), (SWH - 100, SHH - 200), (SWH - 200, SHH - 400)]
    outline = [(SWH + 200, SHH - 200), (SWH + 400, SHH - 200), (SWH + 300, SHH - 400)]
    fan = [[_xy(p) for p in tri] for tri in fan_triangles(triangle_fan_points())]
    for _ in frames:
        screen.fill(BLACK)
        pygame.draw.polygon(screen, RED, filled)
        pygame.draw.polygon(screen, BLUE, outline, 1)
        for tri in fan:
            pygame.draw.polygon(screen, YELLOW, tri)
        yield


def _run_rects(screen, clock, frames) -> Iterator[None]:
    rect = Rectangle(100, 100, 200, 150)
    rotated = _rotated_rect_corners(rect, Vector2(200, 150), 90.0)
    for _ in frames:
        screen.fill(BLACK)
        pygame.draw.rect(screen, RED, pygame.Rect(SWH, SHH, 200, 100))
        pygame.draw.rect(screen, GREEN, pygame.Rect(SWH // 2, SHH // 2, 100, 200))
        pygame.draw.rect(screen, YELLOW, _pg_rect(rect))
        pygame.draw.polygon(screen, PURPLE, rotated)
        pygame.draw.rect(screen, BLUE, pygame.Rect(300, 300, 120, 60), 1)
        pygame.draw.rect(screen, DARKBLUE, pygame.Rect(100, 300, 200, 100), 20)
        _rounded(screen, WHITE, Rectangle(700, 800, 200, 100), 0.5)
        _rounded(screen, WHITE, Rectangle(700, 600, 200, 100), 0.3, 1)
        _rounded(screen, ORANGE, Rectangle(900, 500, 200, 100), 0.5, 10)
        yield


_LESSONS = {
    "window": ("01_window", _run_window, 0),
    "scaling": ("02_scaling", _run_scaling, pygame.RESIZABLE),
    "pixels": ("01_pixels", _run_pixels, 0),
    "lines": ("01_lines", _run_lines, 0),
    "triangles": ("03_triangles", _run_triangles, 0),
    "rects": ("04_rects", _run_rects, 0),
}


def main(argv: list[str] | None = None) -> int:
    """Open a window showing the chosen lesson until it is closed."""
    from raygames.core import read_input

    parser = argparse.ArgumentParser(prog="raygames-lesson", description="Show a drawing lesson.")
    parser.add_argument("lesson", choices=sorted(_LESSONS), help="which lesson to show")
    args = parser.parse_args(argv)

    title, runner, flags = _LESSONS[args.lesson]
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
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