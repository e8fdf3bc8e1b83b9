"""
Pytest configuration and fixtures for file cache tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.cache import CacheService
from core.config import Settings
from core.memory_index import MemoryIndex
from core.record_store import RecordStore
from services.redis_compat import RedisCompatClient

START_MS = 1_700_000_000_000


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += round(seconds * 1000)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a deterministic clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Provide a temporary cache directory path (not created)."""
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir: Path) -> Settings:
    """Provide Settings pointing at the temp cache dir, ignoring any .env file."""
    return Settings(
        _env_file=None,
        cache_dir=cache_dir,
        cache_default_ttl=3600,
        cache_max_memory_items=5,
        cache_sweep_interval_ms=1000,
    )


@pytest.fixture
def store(cache_dir: Path) -> RecordStore:
    """Provide a record store with its directory created."""
    record_store = RecordStore(cache_dir)
    record_store.ensure_directory()
    return record_store


@pytest.fixture
async def cache(settings: Settings, clock: FakeClock) -> CacheService:
    """Provide a started CacheService driven by the fake clock."""
    service = CacheService(settings, clock=clock)
    await service.startup()
    return service


@pytest.fixture
async def lru_cache(settings: Settings, clock: FakeClock) -> CacheService:
    """CacheService whose memory tier evicts least recently used entries."""
    memory = MemoryIndex(max_items=settings.cache_max_memory_items, eviction_policy="lru")
    service = CacheService(settings, memory=memory, clock=clock)
    await service.startup()
    return service


@pytest.fixture
def client(cache: CacheService) -> RedisCompatClient:
    """Provide a Redis-compatible client over the test cache."""
    return RedisCompatClient(cache)
