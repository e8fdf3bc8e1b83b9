"""Bounded in-memory tier in front of the record store."""

from collections import OrderedDict
from typing import List, Optional, Tuple

from constants import DEFAULT_MAX_MEMORY_ITEMS, EVICTION_LRU, EVICTION_NONE, EVICTION_POLICIES
from core.logging import get_logger
from models.cache import CacheRecord

logger = get_logger(__name__)


class MemoryIndex:
    """Raw key -> CacheRecord mapping with a fixed maximum size.

    Policies:
        none: admission cutoff. Once full, keys not already resident are
              simply not stored; nothing is evicted.
        lru:  once full, the least recently used entry is evicted to make room.
    """

    def __init__(self, max_items: int = DEFAULT_MAX_MEMORY_ITEMS,
                 eviction_policy: str = EVICTION_NONE):
        if eviction_policy not in EVICTION_POLICIES:
            raise ValueError(f"Unknown eviction policy: {eviction_policy}")
        self.max_items = max_items
        self.eviction_policy = eviction_policy
        self._entries: "OrderedDict[str, CacheRecord]" = OrderedDict()

    def get(self, key: str) -> Optional[CacheRecord]:
        record = self._entries.get(key)
        if record is not None and self.eviction_policy == EVICTION_LRU:
            self._entries.move_to_end(key)
        return record

    def put(self, key: str, record: CacheRecord) -> bool:
        """Store record under key. Returns False if it was not admitted."""
        if key in self._entries:
            self._entries[key] = record
            self._entries.move_to_end(key)
            return True

        if len(self._entries) >= self.max_items:
            if self.eviction_policy != EVICTION_LRU or not self._entries:
                return False
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted memory entry", cache_key=evicted)

        self._entries[key] = record
        return True

    def remove(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def items(self) -> List[Tuple[str, CacheRecord]]:
        """Snapshot of entries, safe to iterate while removing."""
        return list(self._entries.items())

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
