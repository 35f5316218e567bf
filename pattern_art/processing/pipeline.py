from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from PIL import Image

from ..config import SETTINGS, RenderSettings
from ..models import Adjustments, ColorPair, PatternOptions, PatternType, Side, round_half_up
from .compositor import composite
from .masking import build_mask
from .patterns import generate_tile
from .surface import new_surface
from .tone import adjust

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderRequest:
    """Snapshot of every parameter one render needs."""

    adjustments: Adjustments = field(default_factory=Adjustments)
    options: PatternOptions = field(default_factory=PatternOptions)
    pattern_type: PatternType = PatternType.DOTS
    side: Side = Side.DARK
    colors: ColorPair = field(default_factory=ColorPair)
    invert: bool = False

    @classmethod
    def from_settings(cls, settings: RenderSettings = SETTINGS) -> "RenderRequest":
        return cls(
            adjustments=settings.default_adjustments(),
            options=settings.default_pattern_options(),
            pattern_type=settings.default_pattern_type(),
            side=settings.default_side(),
            colors=settings.default_colors(),
        )

    def normalized(self) -> "RenderRequest":
        return RenderRequest(
            adjustments=self.adjustments.clamped(),
            options=self.options.clamped(),
            pattern_type=PatternType(self.pattern_type),
            side=Side(self.side),
            colors=self.colors,
            invert=bool(self.invert),
        )


@dataclass
class RenderResult:
    output: Image.Image
    processed: Image.Image
    mask: Image.Image
    tile: Optional[Image.Image]


def fit_size(width: int, height: int, max_size: int = 1280) -> Tuple[int, int]:
    """Scale ``width`` x ``height`` down (never up) so the larger side fits ``max_size``."""
    scale = min(max_size / width, max_size / height, 1)
    return max(1, round_half_up(width * scale)), max(1, round_half_up(height * scale))


def render_layers(
    source: Image.Image,
    request: Optional[RenderRequest] = None,
    settings: RenderSettings = SETTINGS,
) -> RenderResult:
    request = (request or RenderRequest.from_settings(settings)).normalized()
    colors = request.colors.resolve(request.invert)
    size = fit_size(source.width, source.height, settings.max_size)
    logger.debug(
        "Rendering %s source at %s: %s on %s side",
        source.size,
        size,
        request.pattern_type.value,
        request.side.value,
    )

    processed = adjust(source, request.adjustments, size, settings.resample_filter())
    mask = build_mask(processed, request.side)
    tile = generate_tile(request.pattern_type, request.options, colors.pattern_color)

    output = new_surface("RGBA", processed.size)
    composite(output, tile, mask, colors.background_color, colors.pattern_color)
    return RenderResult(output=output, processed=processed, mask=mask, tile=tile)


def render(
    source: Image.Image,
    request: Optional[RenderRequest] = None,
    settings: RenderSettings = SETTINGS,
) -> Image.Image:
    return render_layers(source, request, settings).output
