from __future__ import annotations

from PIL import Image, ImageOps

from ..models import Side
from .surface import new_surface


def threshold_channel(channel: Image.Image, threshold: int, invert: bool = False) -> Image.Image:
    lut = [255 if value >= threshold else 0 for value in range(256)]
    mask = channel.point(lut)
    if invert:
        mask = ImageOps.invert(mask)
    return mask


def build_mask(binary: Image.Image, side: Side) -> Image.Image:
    """Return an RGBA mask whose alpha is opaque where the pattern goes.

    ``binary`` is the output of the tone adjuster: a pixel is light when its
    red channel is 255. Color channels of the mask are zero.
    """

    # Only pure white counts as light; anything else sits on the dark side.
    alpha = threshold_channel(binary.getchannel("R"), 255, invert=Side(side) is Side.DARK)
    zero = new_surface("L", binary.size, 0)
    return Image.merge("RGBA", (zero, zero, zero, alpha))
