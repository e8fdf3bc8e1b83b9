"""
Tests for the background sweep scheduler.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import SimpleNamespace

import pytest

from core.cache import CacheService
from core.cleanup import SweepScheduler

from conftest import FakeClock

FAST = SimpleNamespace(sweep_interval_seconds=0.01)


class FlakyCache:
    """Cache stand-in whose first sweep raises."""

    def __init__(self) -> None:
        self.calls = 0

    async def sweep_expired(self) -> int:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("disk on fire")
        return 0


class TestSweepScheduler:
    """Test scheduler lifecycle and loop behavior."""

    def test_interval_from_settings(self, cache: CacheService) -> None:
        """Test that the millisecond setting is converted to seconds."""
        scheduler = SweepScheduler(cache, cache.settings)
        assert scheduler.interval == 1.0

    @pytest.mark.asyncio
    async def test_start_and_stop(self, cache: CacheService) -> None:
        scheduler = SweepScheduler(cache, FAST)
        await scheduler.start()
        assert scheduler.is_running is True

        await scheduler.stop()
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self, cache: CacheService) -> None:
        scheduler = SweepScheduler(cache, FAST)
        await scheduler.start()
        task = scheduler._task
        await scheduler.start()
        assert scheduler._task is task
        await scheduler.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start(self, cache: CacheService) -> None:
        scheduler = SweepScheduler(cache, FAST)
        await scheduler.stop()
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_loop_purges_expired_records(
        self, cache: CacheService, clock: FakeClock, cache_dir: Path
    ) -> None:
        await cache.set("old", 1, 1)
        await cache.set("fresh", 2, 100)
        clock.advance(5)

        scheduler = SweepScheduler(cache, FAST)
        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert not (cache_dir / "old.json").exists()
        assert (cache_dir / "fresh.json").exists()

    @pytest.mark.asyncio
    async def test_loop_survives_sweep_errors(self) -> None:
        """Test that one failing sweep does not kill the loop."""
        flaky = FlakyCache()
        scheduler = SweepScheduler(flaky, FAST)  # type: ignore[arg-type]
        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

        assert flaky.calls >= 2

    @pytest.mark.asyncio
    async def test_run_once(self, cache: CacheService, clock: FakeClock) -> None:
        await cache.set("a", 1, 1)
        clock.advance(2)

        scheduler = SweepScheduler(cache, FAST)
        assert await scheduler.run_once() == 1
