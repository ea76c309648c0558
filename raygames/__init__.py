"""Small arcade games, graphics demos and drawing lessons built on pygame."""

__version__ = "0.1.0"
__all__ = ["core", "arkanoid", "ping_pong", "ping_pong_v2", "demos", "lessons"]