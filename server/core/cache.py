"""Two-tier cache service: bounded memory index over per-key JSON files.

Stands in for Redis in single-process deployments. Entries survive
restarts through the record store; hot reads are served from memory.
"""

import copy
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from core.config import Settings
from core.exceptions import CorruptRecordError, InvalidTTLError, StorageIOError
from core.expiration import compute_expiry, is_live, now_millis
from core.logging import get_logger, log_cache_operation, log_sweep_result
from core.memory_index import MemoryIndex
from core.record_store import RecordStore
from models.cache import CacheRecord, CacheStats

logger = get_logger(__name__)


class CacheService:
    """Async cache with Redis-like semantics and file persistence.

    Read path:  memory -> record file -> miss
    Write path: record file (always) -> memory (if admitted)

    No method raises; failures come back as None / False and are logged.
    The clock returns epoch milliseconds and can be swapped in tests.
    """

    def __init__(
        self,
        settings: Settings,
        store: Optional[RecordStore] = None,
        memory: Optional[MemoryIndex] = None,
        clock: Callable[[], int] = now_millis,
    ):
        self.settings = settings
        if store is None:
            store = RecordStore(settings.cache_dir)
        if memory is None:
            memory = MemoryIndex(
                settings.cache_max_memory_items,
                settings.cache_eviction_policy,
            )
        self.store = store
        self.memory = memory
        self._clock = clock
        self._stats = CacheStats()

    @property
    def default_ttl(self) -> int:
        return self.settings.cache_default_ttl

    async def startup(self) -> bool:
        """Create the cache directory."""
        ready = self.store.ensure_directory()
        if ready:
            logger.info("File cache initialized",
                        cache_dir=str(self.store.cache_dir),
                        max_memory_items=self.memory.max_items,
                        eviction_policy=self.memory.eviction_policy)
        return ready

    async def shutdown(self) -> None:
        """Final sweep before the process exits."""
        await self.sweep_expired()
        logger.info("File cache disconnected")

    # ============================================================================
    # Single-key operations
    # ============================================================================

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store value under key for ttl seconds (default TTL when None)."""
        ttl = self.default_ttl if ttl is None else ttl
        try:
            now = self._clock()
            record = CacheRecord(
                key=key,
                value=value,
                created_at=now,
                expires_at=compute_expiry(now, ttl),
            )
        except (InvalidTTLError, ValidationError) as e:
            logger.warning("Cache set rejected", key=key, error=str(e))
            return False

        # Memory holds the persisted form so both tiers return equal values
        stored = self.store.store_record(record)
        if stored is None:
            return False

        admitted = self.memory.put(key, stored)
        self._stats.sets += 1
        log_cache_operation(logger, "set", key, ttl=ttl, memory=admitted)
        return True

    async def get(self, key: str) -> Optional[Any]:
        """Return the live value for key, or None."""
        try:
            now = self._clock()

            record = self.memory.get(key)
            if record is not None:
                if is_live(record, now):
                    self._stats.hits += 1
                    log_cache_operation(logger, "get", key, hit=True, tier="memory")
                    return copy.deepcopy(record.value)
                self.memory.remove(key)

            record = self.store.read_record(key)
            if record is not None:
                if is_live(record, now):
                    self.memory.put(key, record)
                    self._stats.hits += 1
                    log_cache_operation(logger, "get", key, hit=True, tier="file")
                    return copy.deepcopy(record.value)
                # Expired on disk
                self.store.delete_record(key)

            self._stats.misses += 1
            log_cache_operation(logger, "get", key, hit=False)
            return None

        except Exception as e:
            logger.error("Cache get failed", key=key, error=str(e))
            self._stats.misses += 1
            return None

    async def delete(self, key: str) -> bool:
        """Remove key from both tiers. Idempotent, always True."""
        self.memory.remove(key)
        self.store.delete_record(key)
        log_cache_operation(logger, "delete", key)
        return True

    async def exists(self, key: str) -> bool:
        """True if key has a live value. Counts as a hit or miss."""
        return await self.get(key) is not None

    async def expire(self, key: str, ttl: int) -> bool:
        """Re-store the current value with a new TTL. False if key is absent."""
        value = await self.get(key)
        if value is None:
            return False
        return await self.set(key, value, ttl)

    # ============================================================================
    # Batch operations
    # ============================================================================

    async def mget(self, keys: Sequence[str]) -> List[Optional[Any]]:
        """Values for keys in order, None for each miss."""
        return [await self.get(key) for key in keys]

    async def mset_detailed(self, pairs: Sequence[Any], ttl: Optional[int] = None) -> List[bool]:
        """Set flat key/value pairs, returning one result per pair.

        A trailing key without a value is ignored.
        """
        results = []
        for i in range(0, len(pairs) - 1, 2):
            results.append(await self.set(pairs[i], pairs[i + 1], ttl))
        return results

    async def mset(self, pairs: Sequence[Any], ttl: Optional[int] = None) -> bool:
        """Set flat key/value pairs. True only if every pair was stored."""
        return all(await self.mset_detailed(pairs, ttl))

    # ============================================================================
    # Maintenance
    # ============================================================================

    async def flush_all(self) -> bool:
        """Drop every entry from both tiers and reset the counters."""
        self.memory.clear()
        if not self.store.clear():
            logger.error("Error flushing cache", cache_dir=str(self.store.cache_dir))
            return False
        self._stats.reset()
        logger.info("Cache flushed")
        return True

    async def stats(self) -> Dict[str, Any]:
        """Counters plus current tier sizes and hit rate."""
        try:
            file_items = self.store.count_files()
        except StorageIOError as e:
            logger.warning("Failed to count cache files", error=str(e))
            file_items = 0
        return self._stats.to_dict(self.memory.size(), file_items)

    async def sweep_expired(self) -> int:
        """Purge expired entries from memory and expired or corrupt files from disk.

        Returns:
            Number of record files removed
        """
        now = self._clock()

        removed_memory = 0
        for key, record in self.memory.items():
            if not is_live(record, now):
                self.memory.remove(key)
                removed_memory += 1

        try:
            listed = self.store.list_all_records()
        except StorageIOError as e:
            logger.error("Error cleaning expired cache items", error=str(e))
            return 0

        removed_files = 0
        for filename, entry in listed:
            if isinstance(entry, CorruptRecordError):
                logger.warning("Removing corrupt cache record", filename=filename, error=str(entry))
            elif is_live(entry, now):
                continue
            self.store.delete_file(filename)
            removed_files += 1

        log_sweep_result(logger, removed_files, removed_memory)
        return removed_files
