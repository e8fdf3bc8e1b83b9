"""
Tests for the HTTP surface (stats, sweep, health) and container wiring.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from core.config import Settings
from core.container import Container, container


@pytest.fixture
def app_client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Run the app against a temp cache directory with the sweeper disabled."""
    settings = Settings(
        _env_file=None,
        cache_dir=tmp_path / "cache",
        cache_sweep_enabled=False,
    )
    container.reset_singletons()
    container.settings.override(providers.Object(settings))

    import main

    with TestClient(main.app) as client:
        yield client

    container.settings.reset_override()
    container.reset_singletons()


class TestContainer:
    """Test dependency wiring."""

    def test_singletons_share_one_cache(self, app_client: TestClient) -> None:
        assert container.cache() is container.cache()
        assert container.redis_client().cache is container.cache()
        assert container.sweeper().cache is container.cache()

    def test_cache_uses_overridden_settings(self, app_client: TestClient, tmp_path: Path) -> None:
        assert container.cache().store.cache_dir == tmp_path / "cache"
        assert (tmp_path / "cache").is_dir()

    def test_cache_uses_container_tiers(self, tmp_path: Path) -> None:
        """Test that the cache is built from the container's own tier singletons."""
        fresh = Container()
        fresh.settings.override(providers.Object(
            Settings(_env_file=None, cache_dir=tmp_path / "cache", cache_eviction_policy="lru")
        ))

        cache = fresh.cache()
        assert cache.memory is fresh.memory_index()
        assert cache.store is fresh.record_store()
        assert cache.memory.eviction_policy == "lru"


class TestCacheRoutes:
    """Test /api/cache endpoints."""

    @pytest.mark.asyncio
    async def test_stats(self, app_client: TestClient) -> None:
        await container.cache().set("k", "v")

        response = app_client.get("/api/cache/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["stats"]["sets"] == 1
        assert body["stats"]["fileItems"] == 1

    def test_sweep(self, app_client: TestClient) -> None:
        response = app_client.post("/api/cache/sweep")
        assert response.status_code == 200
        assert response.json() == {"success": True, "removed": 0}

    def test_health(self, app_client: TestClient) -> None:
        response = app_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["cache_directory"] is True
        assert "hitRate" in body["cache"]
