"""Tileable pattern generation.

Each :class:`~pattern_art.models.PatternType` has exactly one generator. A tile
is drawn on a transparent square surface; opaque pixels carry the pattern color.
Spacings that do not divide the tile edge leave faint seams when tiled, which is
how these patterns have always looked.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Iterator, Optional, Tuple

from PIL import Image, ImageDraw

from ..errors import RenderSurfaceUnavailable
from ..models import Color, PatternOptions, PatternType, round_half_up
from .surface import new_surface

logger = logging.getLogger(__name__)

BASE_SIZE = 80
MIN_SIZE = 24

Point = Tuple[float, float]


def tile_size(scale: float) -> float:
    return max(MIN_SIZE, BASE_SIZE * scale)


def tile_edge(scale: float) -> int:
    """Pixel edge of the tile; fractional sizes are truncated like a canvas width."""
    return int(tile_size(scale))


class _Pen:
    def __init__(self, tile: Image.Image, color: Color, stroke: float) -> None:
        self._draw = ImageDraw.Draw(tile)
        self._fill = tuple(color) + (255,)
        self._stroke = stroke
        self._width = max(1, round_half_up(stroke))

    def line(self, start: Point, end: Point) -> None:
        self._draw.line([start, end], fill=self._fill, width=self._width)
        if self._width > 2:
            # round caps
            radius = self._stroke / 2
            for x, y in (start, end):
                self.circle((x, y), radius)

    def circle(self, center: Point, radius: float) -> None:
        x, y = center
        self._draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=self._fill)

    def rect(self, left: float, top: float, right: float, bottom: float) -> None:
        # ImageDraw includes both corners; cells must not overlap their neighbours.
        box = [round_half_up(left), round_half_up(top), round_half_up(right) - 1, round_half_up(bottom) - 1]
        self._draw.rectangle(box, fill=self._fill)


def _steps(start: float, step: float, stop: float) -> Iterator[float]:
    value = start
    while value < stop:
        yield value
        value += step


def _rotate(point: Point, center: float, angle: float) -> Point:
    x, y = point[0] - center, point[1] - center
    cos, sin = math.cos(angle), math.sin(angle)
    return center + x * cos - y * sin, center + x * sin + y * cos


Generator = Callable[[_Pen, float, PatternOptions], None]
_GENERATORS: Dict[PatternType, Generator] = {}


def _generator(pattern_type: PatternType) -> Callable[[Generator], Generator]:
    def register(func: Generator) -> Generator:
        _GENERATORS[pattern_type] = func
        return func

    return register


@_generator(PatternType.DOTS)
def draw_dots(pen: _Pen, size: float, options: PatternOptions) -> None:
    radius = max(1, size / 12 * options.scale)
    spacing = size / 3.2
    for y in _steps(spacing / 2, spacing, size):
        for x in _steps(spacing / 2, spacing, size):
            pen.circle((x, y), radius)


def _diagonal_family(pen: _Pen, size: float, spacing: float, angle: float = 0.0) -> None:
    center = size / 2
    for x in _steps(-size, spacing, size * 2):
        start = _rotate((x, 0), center, angle)
        end = _rotate((x + size, size), center, angle)
        pen.line(start, end)


@_generator(PatternType.DIAGONAL)
def draw_diagonal(pen: _Pen, size: float, options: PatternOptions) -> None:
    _diagonal_family(pen, size, size / 3.2, math.radians(options.rotation))


@_generator(PatternType.GRID)
def draw_grid(pen: _Pen, size: float, options: PatternOptions) -> None:
    spacing = size / 4
    for index in range(5):
        offset = index * spacing
        pen.line((offset, 0), (offset, size))
        pen.line((0, offset), (size, offset))


@_generator(PatternType.CHECKER)
def draw_checker(pen: _Pen, size: float, options: PatternOptions) -> None:
    cells = 4
    cell = size / cells
    for y in range(cells):
        for x in range(cells):
            if (x + y) % 2 == 0:
                pen.rect(x * cell, y * cell, (x + 1) * cell, (y + 1) * cell)


@_generator(PatternType.CROSSHATCH)
def draw_crosshatch(pen: _Pen, size: float, options: PatternOptions) -> None:
    spacing = size / 4
    for x in _steps(-size, spacing, size * 2):
        pen.line((x, 0), (x + size, size))
        pen.line((x + size, 0), (x, size))


_missing = set(PatternType) - set(_GENERATORS)
if _missing:
    raise RuntimeError(f"No tile generator for {sorted(t.value for t in _missing)}")


def generate_tile(
    pattern_type: PatternType,
    options: PatternOptions,
    color: Color,
) -> Optional[Image.Image]:
    """Draw one repeatable tile, or return ``None`` when no surface is available.

    Callers fall back to a flat fill of the pattern region on ``None``.
    """

    options = options.clamped()
    size = tile_size(options.scale)
    edge = tile_edge(options.scale)
    try:
        tile = new_surface("RGBA", (edge, edge), (0, 0, 0, 0))
    except RenderSurfaceUnavailable as exc:
        logger.warning("Pattern tile unavailable, using flat fill: %s", exc)
        return None

    _GENERATORS[PatternType(pattern_type)](_Pen(tile, color, options.stroke), size, options)
    return tile
