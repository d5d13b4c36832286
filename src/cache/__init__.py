"""Cache module for GitHub lookups."""

from .base import BaseCache, CacheEntry
from .memory_cache import MemoryCache

__all__ = [
    "BaseCache",
    "CacheEntry",
    "MemoryCache",
]
