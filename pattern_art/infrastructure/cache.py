from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Dict, Optional, Tuple

from ..config import SETTINGS

logger = logging.getLogger(__name__)

CacheEntry = Tuple[float, bytes]


class ResponseCache:
    def __init__(self, max_entries: int = 16) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return None
            timestamp, data = entry
            if time.time() - timestamp > SETTINGS.cache_ttl:
                self._entries.pop(key, None)
                return None
            return data

    def put(self, key: str, data: bytes) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                oldest = min(self._entries.items(), key=lambda item: item[1][0])[0]
                self._entries.pop(oldest, None)
            self._entries[key] = (time.time(), data)


class DisplayTarget:
    """Holds the most recent rendered PNG.

    Renders take a ticket before they start. A result whose ticket is older
    than the one already shown is dropped, so a slow stale render never
    replaces a newer one.
    """

    def __init__(self) -> None:
        self._tickets = itertools.count(1)
        self._lock = threading.Lock()
        self._shown_ticket = 0
        self._data = b""

    def next_ticket(self) -> int:
        with self._lock:
            return next(self._tickets)

    def publish(self, ticket: int, data: bytes) -> bool:
        with self._lock:
            if ticket < self._shown_ticket:
                logger.warning("Dropping stale render %d, already showing %d", ticket, self._shown_ticket)
                return False
            self._shown_ticket = ticket
            self._data = data
            return True

    def current(self) -> Optional[bytes]:
        with self._lock:
            return self._data or None


CACHE = ResponseCache()
DISPLAY = DisplayTarget()


def next_ticket() -> int:
    return DISPLAY.next_ticket()


def remember_last_good(data: bytes, ticket: int) -> bool:
    return DISPLAY.publish(ticket, data)


def last_good_png() -> Optional[bytes]:
    return DISPLAY.current()
