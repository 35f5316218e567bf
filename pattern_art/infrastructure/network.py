from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from ..config import SETTINGS, RenderSettings
from ..errors import SourceUnavailable

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        settings: RenderSettings = SETTINGS,
        backoff: float = 0.4,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._settings = settings
        self._backoff = backoff
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "pattern-art/1.0"})
        return session

    def fetch_bytes(self, url: str) -> bytes:
        last_exception: Exception | None = None
        for attempt in range(1, self._settings.retries + 2):
            try:
                response = self._session.get(url, timeout=self._settings.timeout)
                response.raise_for_status()
                return response.content
            except requests.RequestException as exc:
                last_exception = exc
                logger.info("Fetching %s failed (attempt %d): %s", url, attempt, exc)
                time.sleep(self._backoff * attempt)
        raise SourceUnavailable(f"Could not fetch {url}: {last_exception}")


FETCHER = SourceFetcher()
