"""Periodic sweep of expired cache records.

One asyncio task looping sleep -> sweep until stopped.
Interval comes from Settings.
"""
import asyncio
from typing import Optional, TYPE_CHECKING

from core.logging import get_logger

if TYPE_CHECKING:
    from core.config import Settings
    from core.cache import CacheService

logger = get_logger(__name__)


class SweepScheduler:
    """Background task calling CacheService.sweep_expired on a fixed interval.

    Only calls back into the cache; never touches storage itself.
    """

    def __init__(self, cache: "CacheService", settings: "Settings"):
        self.cache = cache
        self.settings = settings
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval(self) -> float:
        """Seconds between sweeps."""
        return self.settings.sweep_interval_seconds

    async def start(self) -> None:
        """Start the sweep background task."""
        if self._running:
            logger.warning("Sweep scheduler already running")
            return
        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info("Sweep scheduler started", interval_seconds=self.interval)

    async def stop(self) -> None:
        """Stop the sweep task gracefully."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Sweep scheduler stopped")

    async def _sweep_loop(self) -> None:
        """Main loop - sleeps first, like a fixed-rate timer."""
        while self._running:
            await asyncio.sleep(self.interval)
            try:
                await self.cache.sweep_expired()
            except Exception as e:
                logger.error("Sweep failed", error=str(e))

    async def run_once(self) -> int:
        """Run a single sweep now. Returns number of files removed."""
        return await self.cache.sweep_expired()
