"""Tests for source fetching and decoding."""

import dataclasses

import pytest
import requests
from PIL import Image

from pattern_art.config import SETTINGS
from pattern_art.errors import SourceUnavailable, UnsupportedSourceFormat
from pattern_art.infrastructure.decoding import decode_source
from pattern_art.infrastructure.network import SourceFetcher

from conftest import png_bytes


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


class FakeSession:
    def __init__(self, responses) -> None:
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def get(self, url, timeout):
        self.calls.append((url, timeout))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_fetcher(session: FakeSession, retries: int = 1) -> SourceFetcher:
    settings = dataclasses.replace(SETTINGS, retries=retries, timeout=2.5)
    return SourceFetcher(session_factory=lambda: session, settings=settings, backoff=0)


def test_fetch_bytes_returns_content_and_sets_user_agent():
    session = FakeSession([FakeResponse(b"payload")])

    data = make_fetcher(session).fetch_bytes("http://example.com/cat.png")

    assert data == b"payload"
    assert session.headers["User-Agent"].startswith("pattern-art/")
    assert session.calls == [("http://example.com/cat.png", 2.5)]


def test_fetch_bytes_retries_transient_failures():
    session = FakeSession([requests.ConnectionError("down"), FakeResponse(b"ok")])

    assert make_fetcher(session).fetch_bytes("http://example.com/cat.png") == b"ok"
    assert len(session.calls) == 2


def test_fetch_bytes_gives_up_after_retries():
    session = FakeSession([FakeResponse(b"", 503), FakeResponse(b"", 503)])

    with pytest.raises(SourceUnavailable):
        make_fetcher(session, retries=1).fetch_bytes("http://example.com/cat.png")
    assert len(session.calls) == 2


def test_decode_source_returns_rgba():
    decoded = decode_source(png_bytes(Image.new("L", (3, 2), 200)))

    assert decoded.mode == "RGBA"
    assert decoded.size == (3, 2)


def test_decode_source_rejects_garbage():
    with pytest.raises(UnsupportedSourceFormat):
        decode_source(b"definitely not an image")
