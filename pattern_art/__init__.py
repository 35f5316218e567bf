"""Two-tone pattern art rendering for photographs.

The :mod:`pattern_art.processing` pipeline binarizes a photo, masks the dark or
light side and fills it with a tiled motif; :func:`create_app` serves it over
HTTP.
"""

from .app import APP_VERSION, app, create_app
from . import infrastructure, processing
from .processing import RenderRequest, render

__version__ = APP_VERSION

__all__ = [
    "APP_VERSION",
    "__version__",
    "RenderRequest",
    "app",
    "create_app",
    "infrastructure",
    "processing",
    "render",
]
