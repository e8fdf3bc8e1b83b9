"""Environment-driven configuration with Pydantic v2."""

from typing import Literal, Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_MAX_MEMORY_ITEMS,
    DEFAULT_SWEEP_INTERVAL_MS,
    DEFAULT_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Application settings driven entirely by environment variables.

    Field names map to upper-case variables (cache_dir -> CACHE_DIR).
    """

    # Server Configuration
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3020, ge=1024, le=65535)
    debug: bool = Field(default=False)

    # Cache Configuration
    cache_dir: Path = Field(default=Path(DEFAULT_CACHE_DIR))
    cache_default_ttl: int = Field(default=DEFAULT_TTL_SECONDS, ge=1)
    cache_max_memory_items: int = Field(default=DEFAULT_MAX_MEMORY_ITEMS, ge=0)
    cache_eviction_policy: Literal["none", "lru"] = Field(default="none")

    # Sweep Scheduler
    cache_sweep_enabled: bool = Field(default=True)
    cache_sweep_interval_ms: int = Field(default=DEFAULT_SWEEP_INTERVAL_MS, ge=1000)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")
    log_file: Optional[str] = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check the level name against stdlib levels."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def sweep_interval_seconds(self) -> float:
        """Sweep period in seconds for asyncio.sleep."""
        return self.cache_sweep_interval_ms / 1000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "env_parse_none_str": "none",
    }
