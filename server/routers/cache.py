"""Operational cache routes (stats and manual sweep)."""

from fastapi import APIRouter, Depends

from core.container import container
from core.cache import CacheService
from core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("/stats")
async def get_stats(
    cache: CacheService = Depends(lambda: container.cache())
):
    """Hit/miss/set counters and tier sizes."""
    return {"success": True, "stats": await cache.stats()}


@router.post("/sweep")
async def run_sweep(
    cache: CacheService = Depends(lambda: container.cache())
):
    """Purge expired records now instead of waiting for the scheduler."""
    removed = await cache.sweep_expired()
    logger.info("Manual sweep completed", removed=removed)
    return {"success": True, "removed": removed}
