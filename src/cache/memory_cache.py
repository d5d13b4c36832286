"""In-memory cache implementation."""

import asyncio
import fnmatch
import time
from typing import Any

from .base import BaseCache, CacheEntry


class MemoryCache(BaseCache[Any]):
    """In-memory cache with TTL support and LRU eviction.

    Expired entries are dropped lazily when they are looked up; there is no
    background sweeper.
    """

    def __init__(self, max_size: int = 1000, default_ttl: float = 120):
        """Initialize memory cache.

        Args:
            max_size: Maximum number of items to store
            default_ttl: Default TTL in seconds, 0 disables expiry
        """
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._cache: dict[str, CacheEntry[Any]] = {}
        self._access_times: dict[str, float] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> CacheEntry[Any] | None:
        """Get entry from cache by key."""
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired:
                del self._cache[key]
                self._access_times.pop(key, None)
                self._misses += 1
                return None

            self._access_times[key] = time.time()
            self._hits += 1
            return entry

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Set value in cache with optional TTL."""
        async with self._lock:
            expires_at = None
            if ttl is not None:
                expires_at = time.time() + ttl
            elif self.default_ttl > 0:
                expires_at = time.time() + self.default_ttl

            self._cache[key] = CacheEntry(value=value, expires_at=expires_at)
            self._access_times[key] = time.time()

            self._evict_if_needed()

    async def delete(self, key: str) -> bool:
        """Delete value from cache."""
        async with self._lock:
            if key in self._cache:
                del self._cache[key]
                self._access_times.pop(key, None)
                return True
            return False

    async def clear(self, pattern: str | None = None) -> int:
        """Clear cache entries, optionally only those matching a glob."""
        async with self._lock:
            if pattern is None:
                count = len(self._cache)
                self._cache.clear()
                self._access_times.clear()
                return count

            keys_to_delete = [
                key for key in self._cache if fnmatch.fnmatch(key, pattern)
            ]

            for key in keys_to_delete:
                del self._cache[key]
                self._access_times.pop(key, None)

            return len(keys_to_delete)

    def _evict_if_needed(self) -> None:
        """Evict least recently used entries while over max size."""
        while len(self._cache) > self.max_size:
            oldest_key = min(
                self._access_times.keys(), key=lambda x: self._access_times[x]
            )
            del self._cache[oldest_key]
            del self._access_times[oldest_key]

    async def cleanup_expired(self) -> int:
        """Remove all expired entries. Returns count of removed items."""
        async with self._lock:
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired]

            for key in expired_keys:
                del self._cache[key]
                self._access_times.pop(key, None)

            return len(expired_keys)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        lookups = self._hits + self._misses
        return {
            "size": len(self._cache),
            "max_size": self.max_size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_ratio": self._hits / lookups if lookups else None,
            "default_ttl": self.default_ttl,
        }
