"""Persisted record store: one JSON file per cache key.

Layout:
    {cache_dir}/{normalized_key}.json -> {"value", "expiresAt", "createdAt", "key"}

All methods are synchronous. CacheService calls them from coroutines
without awaiting in between, so a cache operation never yields halfway
through updating both tiers.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import ValidationError

from constants import RECORD_INDENT, RECORD_SUFFIX, TEMP_PREFIX, TEMP_SUFFIX
from core.exceptions import CorruptRecordError, StorageIOError
from core.keys import record_filename
from core.logging import get_logger
from models.cache import CacheRecord

logger = get_logger(__name__)

ListedRecord = Tuple[str, Union[CacheRecord, CorruptRecordError]]


class RecordStore:
    """Reads and writes CacheRecords as individual JSON files.

    Read and delete failures are reported as "not found" / no-op.
    Write failures are reported to the caller as False.
    """

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)

    def ensure_directory(self) -> bool:
        """Create the backing directory if missing. Safe to call repeatedly."""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error("Failed to create cache directory",
                         cache_dir=str(self.cache_dir), error=str(e))
            return False

    def path_for(self, key: str) -> Path:
        """Path of the record file for a raw key."""
        return self.cache_dir / record_filename(key)

    def _parse(self, path: Path) -> CacheRecord:
        """Load and validate one record file.

        Raises:
            OSError: file could not be read
            CorruptRecordError: content is not a valid record
        """
        data = path.read_bytes()
        try:
            return CacheRecord.model_validate(json.loads(data))
        except (ValueError, ValidationError) as e:
            raise CorruptRecordError(path.name, str(e)) from e

    def read_record(self, key: str) -> Optional[CacheRecord]:
        """Return the persisted record for key, None if absent or unreadable."""
        path = self.path_for(key)
        try:
            return self._parse(path)
        except FileNotFoundError:
            return None
        except CorruptRecordError as e:
            logger.debug("Ignoring corrupt cache record", key=key, error=str(e))
            return None
        except OSError as e:
            logger.debug("Failed to read cache record", key=key, error=str(e))
            return None

    def write_record(self, record: CacheRecord) -> bool:
        """Serialize record and replace its file. False on any failure."""
        return self.store_record(record) is not None

    def store_record(self, record: CacheRecord) -> Optional[CacheRecord]:
        """Persist record and return it as a later read will see it.

        The returned copy is rebuilt from the written JSON, so tuples come
        back as lists, dict keys as strings, and it shares no objects with
        the caller's value. None on any failure.
        """
        path = self.path_for(record.key)
        try:
            payload = json.dumps(record.to_disk(), indent=RECORD_INDENT)
        except (TypeError, ValueError) as e:
            logger.error("Cache value is not JSON serializable", key=record.key, error=str(e))
            return None

        try:
            self._write_atomic(path, payload)
        except StorageIOError as e:
            logger.error("Failed to write cache record", key=record.key, error=str(e))
            return None
        return CacheRecord.model_validate(json.loads(payload))

    def _write_atomic(self, path: Path, payload: str) -> None:
        """Write to a temp file in the same directory, then rename over path.

        A failed write leaves the previous file (if any) untouched.
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(
                suffix=TEMP_SUFFIX,
                prefix=TEMP_PREFIX,
                dir=self.cache_dir,
            )
        except OSError as e:
            raise StorageIOError(str(path), str(e)) from e

        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise StorageIOError(str(path), str(e)) from e

    def delete_record(self, key: str) -> bool:
        """Remove the record file for key. Absence is not an error."""
        return self.delete_file(record_filename(key))

    def delete_file(self, filename: str) -> bool:
        """Remove a record file by its on-disk name. Always True."""
        try:
            (self.cache_dir / filename).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to delete cache record", filename=filename, error=str(e))
        return True

    def _record_files(self) -> List[Path]:
        """All *.json files in the directory, sorted by name.

        Raises:
            StorageIOError: directory exists but cannot be listed
        """
        try:
            return sorted(
                p for p in self.cache_dir.iterdir()
                if p.name.endswith(RECORD_SUFFIX) and p.is_file()
            )
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageIOError(str(self.cache_dir), str(e)) from e

    def list_all_records(self) -> List[ListedRecord]:
        """Every persisted record as (filename, record-or-error).

        Unparsable files are reported with a CorruptRecordError rather than
        skipped. Files deleted while listing are left out.

        Raises:
            StorageIOError: directory exists but cannot be listed
        """
        listed: List[ListedRecord] = []
        for path in self._record_files():
            try:
                listed.append((path.name, self._parse(path)))
            except FileNotFoundError:
                continue
            except CorruptRecordError as e:
                listed.append((path.name, e))
            except OSError as e:
                listed.append((path.name, CorruptRecordError(path.name, str(e))))
        return listed

    def count_files(self) -> int:
        """Number of record files currently on disk."""
        return len(self._record_files())

    def clear(self) -> bool:
        """Delete every record file. False if listing or any deletion failed."""
        try:
            files = self._record_files()
        except StorageIOError as e:
            logger.error("Failed to list cache directory", error=str(e))
            return False

        ok = True
        for path in files:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error("Failed to delete cache record", filename=path.name, error=str(e))
                ok = False
        return ok
