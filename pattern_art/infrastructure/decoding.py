from __future__ import annotations

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import UnsupportedSourceFormat


def decode_source(data: bytes) -> Image.Image:
    """Decode uploaded or fetched bytes into an upright RGBA bitmap."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise UnsupportedSourceFormat(f"Cannot decode source image: {exc}") from exc
    return img.convert("RGBA")
