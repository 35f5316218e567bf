from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple, Union

from PIL import Image

from ..errors import RenderSurfaceUnavailable

Size = Tuple[int, int]
Fill = Union[int, Tuple[int, ...]]


def _check_size(size: Size) -> None:
    width, height = size
    if width < 1 or height < 1:
        raise RenderSurfaceUnavailable(f"Surface size must be positive, got {width}x{height}")


def new_surface(mode: str, size: Size, color: Fill = 0) -> Image.Image:
    _check_size(size)
    try:
        return Image.new(mode, size, color)
    except (ValueError, MemoryError) as exc:
        raise RenderSurfaceUnavailable(f"Cannot allocate {mode} surface {size}: {exc}") from exc


@contextmanager
def pixel_buffer(size: Size) -> Iterator[None]:
    """Guard a block that allocates working pixel arrays of ``size``."""
    _check_size(size)
    try:
        yield
    except MemoryError as exc:
        raise RenderSurfaceUnavailable(f"Cannot allocate pixel buffer {size}") from exc
