from __future__ import annotations

import io
from pathlib import PurePosixPath
from typing import Optional

from flask import send_file
from PIL import Image


def encode_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def download_name(source_name: Optional[str]) -> str:
    stem = PurePosixPath(source_name).stem if source_name else ""
    return f"{stem}-pattern.png" if stem else "pattern-output.png"


def png_response(data: bytes, filename: Optional[str] = None):
    return send_file(io.BytesIO(data), mimetype="image/png", download_name=filename)


def send_png(img: Image.Image, filename: Optional[str] = None):
    return png_response(encode_png(img), filename)
