import logging
import os
from dataclasses import dataclass

from PIL import Image

from .models import Adjustments, ColorPair, PatternOptions, PatternType, Side, parse_color


RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


@dataclass
class RenderSettings:
    port: int
    max_size: int
    resample: str
    brightness: int
    contrast: int
    threshold: int
    scale: float
    stroke: float
    rotation: float
    pattern_type: str
    side: str
    pattern_color: str
    background_color: str
    timeout: float
    retries: int
    cache_ttl: float
    log_level: str

    @classmethod
    def from_env(cls) -> "RenderSettings":
        return cls(
            port=int(os.getenv("PORT", "5600")),
            max_size=int(os.getenv("MAX_SIZE", "1280")),
            resample=os.getenv("RESAMPLE", "bilinear").lower(),
            brightness=int(os.getenv("BRIGHTNESS", "0")),
            contrast=int(os.getenv("CONTRAST", "0")),
            threshold=int(os.getenv("THRESHOLD", "55")),
            scale=float(os.getenv("PATTERN_SCALE", "1.0")),
            stroke=float(os.getenv("PATTERN_STROKE", "2.0")),
            rotation=float(os.getenv("PATTERN_ROTATION", "45")),
            pattern_type=os.getenv("PATTERN_TYPE", "dots").lower(),
            side=os.getenv("PATTERN_SIDE", "dark").lower(),
            pattern_color=os.getenv("PATTERN_COLOR", "#0f172a"),
            background_color=os.getenv("BACKGROUND_COLOR", "#ffffff"),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            cache_ttl=float(os.getenv("CACHE_TTL", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def resample_filter(self) -> Image.Resampling:
        return RESAMPLE_FILTERS.get(self.resample, Image.Resampling.BILINEAR)

    def default_adjustments(self) -> Adjustments:
        return Adjustments(self.brightness, self.contrast, self.threshold)

    def default_pattern_options(self) -> PatternOptions:
        return PatternOptions(self.scale, self.stroke, self.rotation)

    def default_pattern_type(self) -> PatternType:
        return PatternType(self.pattern_type)

    def default_side(self) -> Side:
        return Side(self.side)

    def default_colors(self) -> ColorPair:
        return ColorPair(parse_color(self.pattern_color), parse_color(self.background_color))


SETTINGS = RenderSettings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("pattern-art")
