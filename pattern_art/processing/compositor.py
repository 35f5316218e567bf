from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image, ImageChops

from ..models import Color
from .surface import new_surface


def tile_across(tile: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Repeat ``tile`` from the origin until it covers ``size``."""
    layer = new_surface("RGBA", size, (0, 0, 0, 0))
    width, height = size
    tile_width, tile_height = tile.size
    for top in range(0, height, tile_height):
        for left in range(0, width, tile_width):
            layer.paste(tile, (left, top))
    return layer


def composite(
    target: Image.Image,
    tile: Optional[Image.Image],
    mask: Image.Image,
    background_color: Color,
    pattern_color: Color,
) -> None:
    """Paint the two-tone result into ``target`` in place.

    Only the mask's alpha channel is read. Colors arrive role-resolved; the
    compositor knows nothing about inversion.
    """

    if mask.size != target.size:
        raise ValueError(f"Mask size {mask.size} does not match target size {target.size}")

    box = (0, 0) + target.size
    target.paste(tuple(background_color) + (255,), box)
    selection = mask.getchannel("A")

    if tile is None:
        target.paste(tuple(pattern_color) + (255,), box, selection)
        return

    layer = tile_across(tile, target.size)
    # destination-in: the pattern survives only inside the selection
    coverage = ImageChops.multiply(layer.getchannel("A"), selection)
    target.paste(layer, box, coverage)
