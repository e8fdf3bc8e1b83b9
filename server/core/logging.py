"""Structured logging for the cache service.

Every event carries the service name and cache directory, bound once in
configure_logging() through structlog contextvars.
"""

import sys
import structlog
import logging
from pathlib import Path
from typing import List, Optional
from core.config import Settings

SERVICE_NAME = "file-cache"

# Per-request access lines drown out cache events outside debug mode
NOISY_LOGGERS = ("uvicorn.access",)


def _build_handlers(settings: Settings, level: int) -> List[logging.Handler]:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers: List[logging.Handler] = [console_handler]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    return handlers


def configure_logging(settings: Settings) -> None:
    """Configure stdlib handlers and the structlog pipeline from settings."""
    level = getattr(logging, settings.log_level)

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(settings, level),
        format="%(message)s",
        force=True,
    )

    quiet_level = level if settings.debug else max(level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
        processors.insert(0, structlog.stdlib.add_logger_name)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.insert(0, structlog.processors.TimeStamper(fmt="%H:%M:%S"))
        processors.append(structlog.dev.ConsoleRenderer(
            colors=False,
            pad_event=35,
            exception_formatter=structlog.dev.plain_traceback
        ))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(
        service=SERVICE_NAME,
        cache_dir=str(settings.cache_dir),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_cache_operation(logger: structlog.BoundLogger, operation: str,
                        key: str, hit: Optional[bool] = None, **kwargs) -> None:
    """Debug-level record of one cache command."""
    log_data = {
        "operation": operation,
        "cache_key": key,
        **kwargs
    }

    if hit is not None:
        log_data["cache_hit"] = hit

    logger.debug("Cache operation", **log_data)


def log_sweep_result(logger: structlog.BoundLogger, removed_files: int,
                     removed_memory: int) -> None:
    """Log a sweep pass; silent when nothing was removed."""
    if removed_files or removed_memory:
        logger.info(
            "Cleaned expired cache items",
            removed_files=removed_files,
            removed_memory=removed_memory,
        )
