"""
Bounded in-memory cache for immutable match documents.

Entries have no TTL: a finished match never changes, so eviction is driven
purely by capacity pressure in least-recently-used order.
"""

import threading
from collections import OrderedDict
from typing import Any, Dict, Generic, Hashable, Optional, TypeVar

import structlog

from rift_report.core.config import get_global_settings

logger = structlog.get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_MATCH_CACHE_SIZE = 600


class LRUCache(Generic[K, V]):
    """Fixed-capacity recency cache with thread-safe operations."""

    def __init__(self, maxsize: int = DEFAULT_MATCH_CACHE_SIZE):
        """
        Initialize LRU cache.

        Args:
            maxsize: Maximum number of entries
        """
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self.maxsize = maxsize
        self.cache: "OrderedDict[K, V]" = OrderedDict()
        self.lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, key: K) -> Optional[V]:
        """
        Get value from cache and mark it most recently used.

        Args:
            key: Cache key

        Returns:
            Cached value if present, None otherwise
        """
        with self.lock:
            if key not in self.cache:
                self._misses += 1
                return None
            self.cache.move_to_end(key)
            self._hits += 1
            return self.cache[key]

    def set(self, key: K, value: V) -> None:
        """
        Insert or overwrite an entry, evicting the least recently used one when full.

        Args:
            key: Cache key
            value: Value to cache
        """
        with self.lock:
            if key in self.cache:
                self.cache.move_to_end(key)
            self.cache[key] = value

            if len(self.cache) > self.maxsize:
                oldest_key, _ = self.cache.popitem(last=False)
                logger.debug("Cache eviction", key=oldest_key, reason="full")

    def clear(self) -> None:
        """Clear all entries from cache."""
        with self.lock:
            count = len(self.cache)
            self.cache.clear()
            self._hits = 0
            self._misses = 0
            logger.info("Cache cleared", entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self.lock:
            total = self._hits + self._misses
            return {
                "size": len(self.cache),
                "maxsize": self.maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
            }

    def __contains__(self, key: object) -> bool:
        """Membership test that does not touch recency."""
        with self.lock:
            return key in self.cache

    def __len__(self) -> int:
        """Get number of entries in cache."""
        with self.lock:
            return len(self.cache)


# Process-wide match cache shared by every fetch operation
match_cache: LRUCache[str, Dict[str, Any]] = LRUCache(
    maxsize=get_global_settings().match_cache_size
)
