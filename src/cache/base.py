"""Abstract base cache interface."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value with its absolute expiry (epoch seconds)."""

    value: T
    expires_at: float | None = None

    @property
    def is_expired(self) -> bool:
        """Check if the entry has outlived its TTL."""
        return self.expires_at is not None and time.time() >= self.expires_at


class BaseCache(ABC, Generic[T]):
    """Abstract base class for cache implementations.

    ``get`` returns the whole entry rather than the bare value so that a
    cached ``None`` can be told apart from a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> CacheEntry[T] | None:
        """Get entry from cache by key, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: T, ttl: float | None = None) -> None:
        """Set value in cache with optional TTL in seconds."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete value from cache. Returns True if key existed."""
        pass

    @abstractmethod
    async def clear(self, pattern: str | None = None) -> int:
        """Clear cache entries. If pattern provided, only clear matching keys."""
        pass

    def make_key(self, prefix: str, *parts: Any) -> str:
        """Create cache key from prefix and parts."""
        key_parts = [str(prefix)]
        for part in parts:
            if isinstance(part, list | tuple):
                key_parts.append(",".join(str(p) for p in part))
            else:
                key_parts.append(str(part))
        return ":".join(key_parts)
