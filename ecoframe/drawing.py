"""Renderer-independent drawing helpers: colours, geometry and sprite animation."""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]
Segment = tuple[Point, Point]

_DEFAULT_FONT_SIZE = 10.0
_MAX_PATH = 127


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255


def lerp(a: float, b: float, t: float) -> float:
    return a * (1.0 - t) + b * t


def _blend_channel(x: int, y: int, t: float) -> int:
    return int(lerp(x / 255.0, y / 255.0, t) * 255) & 0xFF


def blend_color(a: Color, b: Color, t: float) -> Color:
    """Interpolate each channel of two colours."""
    return Color(
        _blend_channel(a.r, b.r, t),
        _blend_channel(a.g, b.g, t),
        _blend_channel(a.b, b.b, t),
        _blend_channel(a.a, b.a, t),
    )


def texture_path(name: str) -> str:
    """Path of a generated art file, limited like a fixed 128-byte buffer."""
    return f"art/gen/{name}.png"[:_MAX_PATH]


def text_spacing(font_size: float, spacing: float) -> float:
    """Spacing to use for text; zero means scale with the font size."""
    return font_size / _DEFAULT_FONT_SIZE if spacing == 0.0 else spacing


def sprite_frame_rect(
    frame: int, frame_width: float, frame_height: float, frames_per_row: int
) -> tuple[float, float, float, float]:
    """Source rectangle (x, y, w, h) of ``frame`` in a sprite sheet."""
    ox = (frame % frames_per_row) * frame_width
    oy = (frame // frames_per_row) * frame_height
    return (ox, oy, frame_width, frame_height)


def circle_outline_segments(center_x: float, center_y: float, radius: float) -> list[Segment]:
    """Line segments approximating a circle, one per 10 degrees."""

    def point(deg: int) -> Point:
        rad = math.radians(deg)
        return (center_x + math.sin(rad) * radius, center_y + math.cos(rad) * radius)

    return [(point(deg), point(deg + 10)) for deg in range(0, 360, 10)]


def rectangle_outline_segments(x: float, y: float, width: float, height: float) -> list[Segment]:
    """The four edges of a rectangle outline."""
    top_left = (x + 1, y + 1)
    top_right = (x + width, y + 1)
    bottom_right = (x + width, y + height)
    bottom_left = (x + 1, y + height)
    corners = [top_left, top_right, bottom_right, bottom_left]
    return list(zip(corners, corners[1:] + corners[:1]))


@dataclass
class SpriteAnimation:
    """Cycles through frames of a sprite sheet at a fixed delay."""

    start: int
    num_frames: int
    tick_delay: float
    frame: int = 0
    next_tick_time: float = 0.0

    def tick(self, frame_time: float) -> int:
        if self.next_tick_time < 0.0:
            self.next_tick_time = self.tick_delay
            self.frame = self.start + (self.frame + 1) % self.num_frames
        self.next_tick_time -= frame_time
        return self.frame