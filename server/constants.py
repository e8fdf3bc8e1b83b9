"""Centralized constants for the file-backed cache.

Single source of truth for defaults and on-disk naming, shared by the
settings model, the record store and the Redis-compatible client.
"""

from typing import FrozenSet

# =============================================================================
# CACHE DEFAULTS
# =============================================================================

DEFAULT_TTL_SECONDS: int = 3600            # 1 hour
DEFAULT_MAX_MEMORY_ITEMS: int = 1000
DEFAULT_SWEEP_INTERVAL_MS: int = 300_000   # 5 minutes
DEFAULT_CACHE_DIR: str = "data/cache"

# =============================================================================
# ON-DISK LAYOUT
# =============================================================================

RECORD_SUFFIX: str = ".json"
TEMP_PREFIX: str = ".rec_"     # fixed and short so temp names stay under NAME_MAX
TEMP_SUFFIX: str = ".tmp"
RECORD_INDENT: int = 2

# =============================================================================
# MEMORY TIER EVICTION POLICIES
# =============================================================================

EVICTION_NONE: str = 'none'   # admission cutoff, never evicts
EVICTION_LRU: str = 'lru'     # evicts least recently used when full

EVICTION_POLICIES: FrozenSet[str] = frozenset([EVICTION_NONE, EVICTION_LRU])

# =============================================================================
# REDIS COMPATIBILITY
# =============================================================================

TTL_KEY_MISSING: int = -2
TTL_NO_EXPIRY: int = -1

EXPIRY_FLAG_SECONDS: str = 'EX'
EXPIRY_FLAG_MILLIS: str = 'PX'
