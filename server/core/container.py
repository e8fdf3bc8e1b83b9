"""Dependency injection container for the application."""

from dependency_injector import containers, providers

from core.config import Settings
from core.record_store import RecordStore
from core.memory_index import MemoryIndex
from core.cache import CacheService
from core.cleanup import SweepScheduler
from services.redis_compat import RedisCompatClient


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    One cache per process: everything below is a Singleton, handed to
    call sites through the container instead of module globals.
    """

    # Settings
    settings = providers.Singleton(
        Settings,
    )

    # Storage tiers
    record_store = providers.Singleton(
        RecordStore,
        cache_dir=settings.provided.cache_dir,
    )

    memory_index = providers.Singleton(
        MemoryIndex,
        max_items=settings.provided.cache_max_memory_items,
        eviction_policy=settings.provided.cache_eviction_policy,
    )

    # Cache engine
    cache = providers.Singleton(
        CacheService,
        settings=settings,
        store=record_store,
        memory=memory_index,
    )

    # Background sweep
    sweeper = providers.Singleton(
        SweepScheduler,
        cache=cache,
        settings=settings,
    )

    # Redis-shaped client for callers expecting redis.asyncio
    redis_client = providers.Singleton(
        RedisCompatClient,
        cache=cache,
    )


# Global container instance
container = Container()
