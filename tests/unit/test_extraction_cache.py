"""
Tests for the content-addressed extraction cache.
"""

import pytest

from jobsift.contexts.intake.extraction_cache import (
    CACHE_TTL_SECONDS,
    InMemoryExtractionCache,
    cache_key,
    fingerprint,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryExtractionCache(clock=clock)


@pytest.mark.unit
def test_fingerprint_is_stable_sha256():
    """Same text, same 64-char hex digest; any change alters it."""
    assert fingerprint("Senior Developer") == fingerprint("Senior Developer")
    assert len(fingerprint("Senior Developer")) == 64
    assert fingerprint("Senior Developer") != fingerprint("Senior Developer ")


@pytest.mark.unit
def test_cache_key_prefix():
    assert cache_key("abc123") == "job-extract:abc123"


@pytest.mark.unit
def test_default_ttl_is_thirty_minutes():
    assert CACHE_TTL_SECONDS == 1800


@pytest.mark.unit
def test_get_returns_stored_value(cache):
    cache.set("k", {"title": "Engineer"}, 60)
    assert cache.get("k") == {"title": "Engineer"}
    assert "k" in cache
    assert len(cache) == 1


@pytest.mark.unit
def test_entry_expires_after_ttl(cache, clock):
    """Entries are visible until the TTL elapses, then dropped on read."""
    cache.set("k", {"title": "Engineer"}, 60)
    clock.advance(59)
    assert cache.get("k") is not None
    clock.advance(1)
    assert cache.get("k") is None
    assert len(cache) == 0


@pytest.mark.unit
def test_stored_value_is_copy_isolated(cache):
    """Mutating the caller's dict or a returned dict never reaches the cache."""
    value = {"skills": ["Python"]}
    cache.set("k", value, 60)
    value["skills"].append("Java")

    first = cache.get("k")
    assert first == {"skills": ["Python"]}

    first["skills"].append("Go")
    assert cache.get("k") == {"skills": ["Python"]}


@pytest.mark.unit
def test_purge_expired(cache, clock):
    cache.set("short", {}, 10)
    cache.set("long", {}, 100)
    clock.advance(50)

    assert cache.purge_expired() == 1
    assert len(cache) == 1
    assert "long" in cache


@pytest.mark.unit
def test_non_positive_ttl_rejected(cache):
    with pytest.raises(ValueError):
        cache.set("k", {}, 0)
