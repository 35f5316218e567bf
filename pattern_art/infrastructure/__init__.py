"""Infrastructure helpers for source fetching, decoding and caching."""

from .cache import CACHE, DISPLAY, DisplayTarget, ResponseCache, last_good_png, next_ticket, remember_last_good
from .decoding import decode_source
from .network import FETCHER, SourceFetcher
from .responses import download_name, encode_png, png_response, send_png

__all__ = [
    "CACHE",
    "DISPLAY",
    "DisplayTarget",
    "ResponseCache",
    "last_good_png",
    "next_ticket",
    "remember_last_good",
    "decode_source",
    "FETCHER",
    "SourceFetcher",
    "download_name",
    "encode_png",
    "png_response",
    "send_png",
]
