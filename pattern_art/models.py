"""Value objects shared by the render pipeline and the host service."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from PIL import ImageColor

Color = Tuple[int, int, int]


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def parse_color(value: str) -> Color:
    """Parse a CSS-style color (``#0f172a``, ``white``, ``rgb(1,2,3)``) into RGB.

    Any alpha component is discarded; pipeline colors are always opaque.
    """

    rgb = ImageColor.getrgb(value)
    return rgb[0], rgb[1], rgb[2]


class PatternType(Enum):
    DOTS = "dots"
    DIAGONAL = "diagonal"
    GRID = "grid"
    CHECKER = "checker"
    CROSSHATCH = "crosshatch"


class Side(Enum):
    """Luminance class that receives the pattern."""

    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class Adjustments:
    brightness: int = 0
    contrast: int = 0
    threshold: int = 55

    def clamped(self) -> "Adjustments":
        return Adjustments(
            brightness=int(clamp(self.brightness, -100, 100)),
            contrast=int(clamp(self.contrast, -100, 100)),
            threshold=int(clamp(self.threshold, 0, 100)),
        )


@dataclass(frozen=True)
class PatternOptions:
    scale: float = 1.0
    stroke: float = 2.0
    rotation: float = 45.0

    def clamped(self) -> "PatternOptions":
        return PatternOptions(
            scale=float(clamp(self.scale, 0.5, 3.0)),
            stroke=float(clamp(self.stroke, 0.5, 6.0)),
            rotation=float(clamp(self.rotation, 0.0, 180.0)),
        )


@dataclass(frozen=True)
class ColorPair:
    pattern_color: Color = (15, 23, 42)
    background_color: Color = (255, 255, 255)

    def resolve(self, invert: bool = False) -> "ColorPair":
        """Return the pair with roles swapped when ``invert`` is set."""
        if not invert:
            return self
        return ColorPair(pattern_color=self.background_color, background_color=self.pattern_color)


PRESETS = {
    "soft": Adjustments(brightness=-5, contrast=10, threshold=45),
    "bold": Adjustments(brightness=5, contrast=20, threshold=60),
    "neutral": Adjustments(brightness=0, contrast=0, threshold=55),
}


def preset(name: str) -> Adjustments:
    return PRESETS[name.lower()]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, as browsers round pixel sizes."""
    return int(math.floor(value + 0.5))
