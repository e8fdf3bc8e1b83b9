"""Expiration policy for cache records.

All timestamps are milliseconds since the epoch. "now" is always passed
in by the caller so liveness checks never read the clock themselves.
"""

import time
from typing import TYPE_CHECKING

from core.exceptions import InvalidTTLError

if TYPE_CHECKING:
    from models.cache import CacheRecord


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def validate_ttl(ttl_seconds) -> int:
    """Return ttl_seconds if it is a positive integer, raise otherwise."""
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds <= 0:
        raise InvalidTTLError(ttl_seconds)
    return ttl_seconds


def compute_expiry(now_ms: int, ttl_seconds: int) -> int:
    """Absolute expiry timestamp for a record written at now_ms."""
    return now_ms + validate_ttl(ttl_seconds) * 1000


def is_live(record: "CacheRecord", now_ms: int) -> bool:
    """A record is live strictly before its expiry timestamp."""
    return now_ms < record.expires_at
