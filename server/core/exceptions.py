"""Cache exception hierarchy.

Raised inside the storage layer and converted to plain results
(None / False / empty list) before reaching callers of CacheService.
"""


class CacheError(Exception):
    """Base exception for all cache errors."""


class StorageIOError(CacheError):
    """Write, delete or directory creation failed on the backing store."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"[{path}] {message}")


class CorruptRecordError(CacheError):
    """A persisted record file could not be parsed or validated."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(f"Corrupt record {filename}: {message}")


class InvalidTTLError(CacheError):
    """TTL is not a positive whole number of seconds."""

    def __init__(self, ttl):
        self.ttl = ttl
        super().__init__(f"TTL must be a positive integer, got {ttl!r}")
