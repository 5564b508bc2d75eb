"""
Content-addressed cache for extraction results.

The orchestrator depends only on the ExtractionCache protocol (get/set with a
TTL), so any key/value store can be plugged in. InMemoryExtractionCache is the
default: thread-safe, lazily expiring, and copy-isolated so that neither the
caller nor the cache can mutate the other's data.
"""

import copy
import hashlib
import threading
import time
from typing import Callable, Optional, Protocol

# Results expire 30 minutes after being stored
CACHE_TTL_SECONDS = 30 * 60

CACHE_KEY_PREFIX = "job-extract"


def fingerprint(text: str) -> str:
    """Stable SHA-256 hex digest of the text (UTF-8)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def cache_key(text_fingerprint: str) -> str:
    return f"{CACHE_KEY_PREFIX}:{text_fingerprint}"


class ExtractionCache(Protocol):
    """Minimal key/value interface the orchestrator needs."""

    def get(self, key: str) -> Optional[dict]: ...

    def set(self, key: str, value: dict, ttl_seconds: float) -> None: ...


class InMemoryExtractionCache:
    """
    Process-local TTL cache.

    Entries are (expires_at, value) pairs keyed by string. Expired entries are
    dropped when read, or in bulk via purge_expired().

    Args:
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[dict]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return copy.deepcopy(value)

    def set(self, key: str, value: dict, ttl_seconds: float = CACHE_TTL_SECONDS) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got: {ttl_seconds}")
        stored = copy.deepcopy(value)
        with self._lock:
            self._entries[key] = (self._clock() + ttl_seconds, stored)

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
