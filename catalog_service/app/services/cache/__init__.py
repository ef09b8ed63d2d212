"""
In-process read cache for the Catalog Service
"""

from collections import OrderedDict
from typing import Any, Dict, Iterable, Optional

from ...utils.logging import setup_catalog_logging

logger = setup_catalog_logging("catalog_service_cache")


class CacheStore:
    """Key -> serialized value mapping shared by the whole process.

    Values are stored as already-serialized JSON text and deserialized by the
    caller on every read. Entries have no TTL; they leave the store through
    explicit deletion, or through least-recently-used eviction once
    ``max_entries`` is reached (``None`` or 0 means unbounded).
    """

    def __init__(self, max_entries: Optional[int] = None):
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        self.max_entries = max_entries or None
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def has(self, key: str) -> bool:
        """Presence check"""
        return key in self._entries

    def get(self, key: str) -> Optional[str]:
        """Serialized value for key, or None on a miss"""
        value = self._entries.get(key)
        if value is None:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: str, value: str) -> None:
        """Store a serialized value"""
        self._entries[key] = value
        self._entries.move_to_end(key)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                logger.debug("Cache entry evicted", extra={"cache_key": evicted})

    def delete_many(self, keys: Iterable[str]) -> int:
        """Delete every given key; returns how many were present"""
        deleted = 0
        for key in set(keys):
            if self._entries.pop(key, None) is not None:
                deleted += 1
        return deleted

    def clear(self) -> None:
        """Drop all entries"""
        self._entries.clear()

    def keys(self) -> list:
        return list(self._entries.keys())

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        lookups = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": round(self.hits / lookups, 4) if lookups else 0,
        }


__all__ = ["CacheStore"]
