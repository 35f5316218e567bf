import time

from pattern_art.config import SETTINGS
from pattern_art.infrastructure.cache import DisplayTarget, ResponseCache


def test_response_cache_eviction_limit():
    cache = ResponseCache()

    # Fill the cache beyond the limit to trigger eviction logic.
    for idx in range(20):
        cache.put(f"key-{idx}", b"data")

    assert len(cache._entries) == 16

    # Ensure the oldest entries are evicted first
    assert "key-0" not in cache._entries
    assert "key-3" not in cache._entries
    assert "key-4" in cache._entries


def test_response_cache_expires_entries():
    cache = ResponseCache()
    cache.put("fresh", b"new")
    cache._entries["stale"] = (time.time() - SETTINGS.cache_ttl - 1, b"old")

    assert cache.get("fresh") == b"new"
    assert cache.get("stale") is None
    assert "stale" not in cache._entries


def test_display_target_starts_empty():
    assert DisplayTarget().current() is None


def test_display_target_drops_stale_results():
    display = DisplayTarget()
    older = display.next_ticket()
    newer = display.next_ticket()

    assert display.publish(newer, b"newer")
    assert not display.publish(older, b"older")
    assert display.current() == b"newer"


def test_display_target_applies_results_in_request_order():
    display = DisplayTarget()
    first, second = display.next_ticket(), display.next_ticket()

    assert display.publish(first, b"first")
    assert display.publish(second, b"second")
    assert display.current() == b"second"
