import io

import pytest
from PIL import Image

from pattern_art.app import create_app


def checkerboard_source() -> Image.Image:
    """2x2 source: white at top-left and bottom-right, black elsewhere."""
    img = Image.new("RGB", (2, 2), (0, 0, 0))
    img.putpixel((0, 0), (255, 255, 255))
    img.putpixel((1, 1), (255, 255, 255))
    return img


def png_bytes(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def source() -> Image.Image:
    return checkerboard_source()


@pytest.fixture
def client():
    app = create_app()
    app.config.update(TESTING=True)
    return app.test_client()
