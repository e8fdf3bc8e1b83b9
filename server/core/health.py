"""Health check utilities for daemon monitoring.

Provides uptime tracking and cache health status for the /health endpoint.
"""
import os
import time
from typing import Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from core.config import Settings
    from core.cache import CacheService
    from core.cleanup import SweepScheduler

# Module-level startup time tracking
_startup_time: float = 0.0


def set_startup_time() -> None:
    """Record the application startup time. Call once during lifespan startup."""
    global _startup_time
    _startup_time = time.time()


def get_uptime() -> float:
    """Get uptime in seconds since startup."""
    return time.time() - _startup_time if _startup_time else 0.0


def check_cache_directory(cache: "CacheService") -> bool:
    """Check the cache directory exists and is writable."""
    cache_dir = cache.store.cache_dir
    return cache_dir.is_dir() and os.access(cache_dir, os.W_OK)


async def get_health_status(
    cache: "CacheService",
    sweeper: "SweepScheduler",
    settings: "Settings"
) -> Dict[str, Any]:
    """Get health status for /health endpoint.

    Returns:
        Dict containing status, uptime, cache stats and sweeper state.
    """
    cache_healthy = check_cache_directory(cache)

    return {
        "status": "healthy" if cache_healthy else "degraded",
        "uptime_seconds": round(get_uptime(), 1),
        "checks": {
            "cache_directory": cache_healthy,
        },
        "cache": await cache.stats(),
        "features": {
            "sweeper": sweeper.is_running,
            "sweep_interval_ms": settings.cache_sweep_interval_ms,
            "eviction_policy": settings.cache_eviction_policy,
        },
    }
