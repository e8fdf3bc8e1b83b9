"""
FastAPI host process for the file-backed cache.

Owns the cache lifecycle (directory setup, background sweep, final sweep on
shutdown) and exposes stats for operational tooling.
"""

from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from core.container import container
from core.health import get_health_status, set_startup_time
from core.logging import configure_logging, get_logger
from routers import cache as cache_router

# Initialize settings and logging
settings = container.settings()
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    # Startup
    logger.info("Starting file cache service")
    set_startup_time()

    await container.redis_client().connect()

    sweeper = container.sweeper()
    if settings.cache_sweep_enabled:
        await sweeper.start()

    logger.info("Services started successfully")
    yield

    # Shutdown
    if sweeper.is_running:
        await sweeper.stop()

    await container.redis_client().quit()
    logger.info("Services shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="File Cache Service",
    version="1.0.0",
    description="Redis-compatible cache persisted to local JSON files",
    lifespan=lifespan,
    default_response_class=ORJSONResponse
)

app.include_router(cache_router.router)


@app.get("/health")
async def health_check():
    """Detailed health check."""
    status = await get_health_status(container.cache(), container.sweeper(), settings)
    status["timestamp"] = datetime.now().isoformat()
    return status


if __name__ == "__main__":
    import uvicorn
    logger.info("Starting file cache service",
                host=settings.host, port=settings.port, debug=settings.debug)
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
