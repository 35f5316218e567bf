"""Image processing pipeline components for pattern art rendering."""

from .compositor import composite, tile_across
from .masking import build_mask, threshold_channel
from .patterns import generate_tile, tile_edge, tile_size
from .pipeline import RenderRequest, RenderResult, fit_size, render, render_layers
from .tone import adjust

__all__ = [
    "composite",
    "tile_across",
    "build_mask",
    "threshold_channel",
    "generate_tile",
    "tile_edge",
    "tile_size",
    "RenderRequest",
    "RenderResult",
    "fit_size",
    "render",
    "render_layers",
    "adjust",
]
