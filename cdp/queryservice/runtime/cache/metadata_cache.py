"""Bounded, expiring store for metadata response bodies.

Architecture:
    One MetadataCache belongs to one connection. It maps a CacheKey (the
    connection identity) to the last metadata body fetched for it. Capacity
    and TTL come from that connection's configuration, so nothing leaks
    between connections.

Design Decisions:
    - cachetools.TTLCache: capacity bound and expiry in one structure
    - A lock around the TTLCache: TTLCache itself is not thread-safe
    - Entries keep their insertion time and are re-checked on read
    - Failures never reach the caller: a broken read is a miss, a broken
      write is skipped
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from cachetools import TTLCache

from ...core.constants import DEFAULT_METADATA_CACHE_MAX_SIZE
from ...core.exceptions import CacheError
from ...models import CachedEntry, CacheKey

logger = logging.getLogger(__name__)


class MetadataCache:
    """Thread-safe TTL + capacity bounded map of CacheKey -> metadata body."""

    def __init__(
        self,
        ttl: float,
        max_size: int = DEFAULT_METADATA_CACHE_MAX_SIZE,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds; ``<= 0`` disables caching
            max_size: Maximum number of entries
            timer: Clock returning seconds, injectable for tests
        """
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self.ttl = ttl
        self.max_size = max_size
        self._timer = timer
        self._lock = threading.Lock()
        self._cache: TTLCache[CacheKey, CachedEntry] | None = (
            TTLCache(maxsize=max_size, ttl=ttl, timer=timer) if ttl > 0 else None
        )

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    def lookup(self, key: CacheKey) -> str | None:
        """Return the cached body for ``key``, or None on miss/expiry/failure."""
        if self._cache is None:
            return None
        try:
            return self._get(self._cache, key)
        except CacheError as e:
            logger.warning("metadata_cache_error", extra={"op": "lookup", "error": str(e)})
            return None

    def store(self, key: CacheKey, value: str) -> None:
        """Store ``value`` under ``key``; failures are logged and skipped."""
        if self._cache is None:
            return
        try:
            self._put(self._cache, key, value)
        except CacheError as e:
            logger.warning("metadata_cache_error", extra={"op": "store", "error": str(e)})

    def clear(self) -> None:
        if self._cache is None:
            return
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        if self._cache is None:
            return 0
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, CacheKey) and self.lookup(key) is not None

    def _get(self, cache: TTLCache, key: CacheKey) -> str | None:
        try:
            with self._lock:
                entry = cache.get(key)
                if entry is None:
                    return None
                if entry.is_expired(self.ttl, self._timer()):
                    del cache[key]
                    return None
                return entry.value
        except (TypeError, KeyError) as e:
            raise CacheError(f"Failed to read cache entry: {e}") from e

    def _put(self, cache: TTLCache, key: CacheKey, value: str) -> None:
        if not isinstance(value, str):
            raise CacheError(f"Cache values must be str, got {type(value).__name__}")
        try:
            with self._lock:
                cache[key] = CachedEntry(value=value, inserted_at=self._timer())
        except (TypeError, ValueError) as e:
            raise CacheError(f"Failed to write cache entry: {e}") from e
