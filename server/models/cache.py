"""File-backed cache models.

CacheRecord is the unit of storage in both tiers; its camelCase aliases
are the on-disk field names. CacheStats holds process-lifetime counters.
"""

from dataclasses import dataclass
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class CacheRecord(BaseModel):
    """One cached value with its write and expiry timestamps (epoch ms).

    Persisted as {"value", "expiresAt", "createdAt", "key"}.
    """

    model_config = ConfigDict(populate_by_name=True)

    key: str
    value: Any
    created_at: int = Field(alias="createdAt")
    expires_at: int = Field(alias="expiresAt")

    def to_disk(self) -> Dict[str, Any]:
        """Serializable dict using the on-disk field names."""
        return self.model_dump(by_alias=True)


@dataclass
class CacheStats:
    """Hit/miss/set counters. Not persisted, reset only by flush_all."""
    hits: int = 0
    misses: int = 0
    sets: int = 0

    @property
    def hit_rate(self) -> float:
        """hits / (hits + misses), 0 when nothing was read yet."""
        total = self.hits + self.misses
        return self.hits / total if total else 0

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.sets = 0

    def to_dict(self, memory_items: int, file_items: int) -> Dict[str, Any]:
        """Stats payload as exposed to operational tooling."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "memoryItems": memory_items,
            "fileItems": file_items,
            "hitRate": self.hit_rate,
        }
