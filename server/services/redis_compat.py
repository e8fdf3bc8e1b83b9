"""Redis client call surface over the file-backed CacheService.

Lets code written against an async Redis client run unchanged:

    client = RedisCompatClient(cache)
    await client.set("session:1", data, "EX", 60)
    await client.setex("session:1", 60, data)
    await client.set("session:1", data, {"PX": 1500})

Holds no state of its own; every call is translated to one CacheService call.

Method names follow redis.asyncio (setex, flushall). The camelCase node-redis
aliases (setEx, flushAll) and the on(event, handler) hook are deliberately
not provided; there are no connection events to subscribe to.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from constants import EXPIRY_FLAG_MILLIS, EXPIRY_FLAG_SECONDS, TTL_KEY_MISSING, TTL_NO_EXPIRY
from core.cache import CacheService
from core.logging import get_logger

logger = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def millis_to_seconds(millis: float) -> int:
    """Round a PX duration up to whole seconds (0 for non-positive input)."""
    return max(0, math.ceil(millis / 1000))


def parse_expiry(args: Sequence[Any], ex: Optional[int] = None,
                 px: Optional[int] = None) -> Optional[int]:
    """Extract a TTL in seconds from Redis-style set() arguments.

    Accepts ("EX", seconds), ("PX", millis), ({"EX": seconds},) /
    ({"PX": millis},) and the ex=/px= keywords. Anything else means
    "use the default TTL" and returns None.
    """
    if ex is not None:
        return ex
    if px is not None:
        return millis_to_seconds(px)
    if not args:
        return None

    if isinstance(args[0], dict):
        options = {str(k).upper(): v for k, v in args[0].items()}
        if _is_number(options.get(EXPIRY_FLAG_SECONDS)):
            return options[EXPIRY_FLAG_SECONDS]
        if _is_number(options.get(EXPIRY_FLAG_MILLIS)):
            return millis_to_seconds(options[EXPIRY_FLAG_MILLIS])
        return None

    if len(args) >= 2 and isinstance(args[0], str) and _is_number(args[1]):
        flag = args[0].upper()
        if flag == EXPIRY_FLAG_SECONDS:
            return args[1]
        if flag == EXPIRY_FLAG_MILLIS:
            return millis_to_seconds(args[1])
    return None


class RedisCompatClient:
    """Async Redis-shaped adapter around a CacheService."""

    def __init__(self, cache: CacheService):
        self.cache = cache

    # ============================================================================
    # Key-value commands
    # ============================================================================

    async def set(self, key: str, value: Any, *args: Any,
                  ex: Optional[int] = None, px: Optional[int] = None) -> bool:
        return await self.cache.set(key, value, parse_expiry(args, ex, px))

    async def setex(self, key: str, seconds: int, value: Any) -> bool:
        return await self.cache.set(key, value, seconds)

    async def get(self, key: str) -> Optional[Any]:
        return await self.cache.get(key)

    async def delete(self, key: str) -> bool:
        return await self.cache.delete(key)

    del_ = delete

    async def exists(self, key: str) -> bool:
        return await self.cache.exists(key)

    async def expire(self, key: str, seconds: int) -> bool:
        return await self.cache.expire(key, seconds)

    async def mget(self, keys: Sequence[str]) -> List[Optional[Any]]:
        return await self.cache.mget(keys)

    async def mset(self, *pairs: Any) -> bool:
        """mset("a", 1, "b", 2) or mset({"a": 1, "b": 2})."""
        if len(pairs) == 1 and isinstance(pairs[0], dict):
            flat: List[Any] = []
            for key, value in pairs[0].items():
                flat.extend((key, value))
            return await self.cache.mset(flat)
        return await self.cache.mset(list(pairs))

    async def flushall(self) -> bool:
        return await self.cache.flush_all()

    # ============================================================================
    # Best-effort stubs
    # ============================================================================

    async def ttl(self, key: str) -> int:
        """-2 if key is absent, -1 otherwise. Remaining time is not reported."""
        return TTL_NO_EXPIRY if await self.cache.exists(key) else TTL_KEY_MISSING

    async def keys(self, pattern: str = "*") -> List[str]:
        """Key listing is not supported; always empty."""
        return []

    async def ping(self) -> str:
        return "PONG"

    # ============================================================================
    # Connection lifecycle
    # ============================================================================

    async def connect(self) -> bool:
        """Nothing to connect to; makes sure the cache directory exists."""
        await self.cache.startup()
        return True

    async def quit(self) -> bool:
        """Sweeps expired records on the way out."""
        await self.cache.shutdown()
        return True

    async def disconnect(self) -> bool:
        return await self.quit()

    # ============================================================================
    # Extras
    # ============================================================================

    async def stats(self) -> Dict[str, Any]:
        return await self.cache.stats()

    async def clean_expired(self) -> int:
        return await self.cache.sweep_expired()

    async def safe_call(self, operation: str, *args: Any, **kwargs: Any) -> Optional[Any]:
        """Invoke a command by name; log and return None instead of raising."""
        method = getattr(self, operation, None)
        if operation.startswith("_") or operation == "safe_call" or not callable(method):
            logger.warning("Unknown cache operation", operation=operation)
            return None
        try:
            return await method(*args, **kwargs)
        except Exception as e:
            logger.warning("Cache operation failed", operation=operation, error=str(e))
            return None
