from __future__ import annotations

import numpy as np
from PIL import Image

from ..models import Adjustments, clamp
from .surface import Size, pixel_buffer


def contrast_factor(contrast: int) -> float:
    c = clamp(contrast / 100, -1, 1)
    return (259 * (c * 255 + 255)) / (255 * (259 - c * 255))


def threshold_value(threshold: int) -> float:
    return clamp(threshold, 0, 100) / 100 * 255


def luminance(rgba: np.ndarray) -> np.ndarray:
    """ITU-R 601 luma of an ``(h, w, 4)`` array; fully transparent pixels count as black."""
    gray = 0.299 * rgba[..., 0] + 0.587 * rgba[..., 1] + 0.114 * rgba[..., 2]
    gray[rgba[..., 3] == 0] = 0.0
    return gray


def adjust(
    source: Image.Image,
    adjustments: Adjustments,
    target_size: Size,
    resample: Image.Resampling = Image.Resampling.BILINEAR,
) -> Image.Image:
    """Resample ``source`` to ``target_size`` and binarize it.

    Every output pixel is pure black or pure white on all three color channels
    with an opaque alpha, so the result works both as a preview and as the
    input of :func:`pattern_art.processing.masking.build_mask`.
    """

    target_size = (int(target_size[0]), int(target_size[1]))
    with pixel_buffer(target_size):
        rgba = source.convert("RGBA")
        if rgba.size != target_size:
            rgba = rgba.resize(target_size, resample)

        gray = luminance(np.asarray(rgba, dtype=np.float64))
        adjusted = contrast_factor(adjustments.contrast) * (gray - 128) + 128
        adjusted += clamp(adjustments.brightness / 100, -1, 1) * 255
        adjusted = np.clip(adjusted, 0, 255)

        binary = np.where(adjusted >= threshold_value(adjustments.threshold), 255, 0).astype(np.uint8)
        out = np.empty(binary.shape + (4,), dtype=np.uint8)
        out[..., :3] = binary[..., np.newaxis]
        out[..., 3] = 255
        return Image.fromarray(out)
