"""JSON-file backed cache stores.

Each store is a single JSON document holding a version, a last-updated
marker and a key -> entry mapping. Every mutation is a locked
read-modify-write of the whole document followed by an atomic replace, so
concurrent analysis calls never lose each other's updates and readers never
observe a half-written file.
"""

import asyncio
import contextlib
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from riftimpact.core.metrics import mark_cache_lookup
from riftimpact.core.ports.cache_port import CacheEntry, CacheStorePort

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def utcnow() -> datetime:
    return datetime.now(UTC)


class CacheBlob(BaseModel):
    """Serialized state of one store file."""

    model_config = ConfigDict(extra="ignore")

    version: int = Field(SCHEMA_VERSION)
    last_updated: datetime | None = None
    entries: dict[str, CacheEntry] = Field(default_factory=dict)


class JsonFileStore(CacheStorePort):
    """Base store; subclasses only decide what "valid" means."""

    def __init__(
        self,
        path: Path | str,
        *,
        clock: Callable[[], datetime] = utcnow,
        name: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.name = name or self.path.stem
        self._clock = clock
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    # ------------------------------------------------------------------
    # Blocking file I/O (always run through asyncio.to_thread)
    # ------------------------------------------------------------------

    def _read_blob(self) -> CacheBlob:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return CacheBlob()
        except OSError as e:
            logger.warning(f"Cannot read cache {self.path}, treating as empty: {e}")
            return CacheBlob()
        except UnicodeDecodeError as e:
            logger.warning(f"Cache {self.path} is not valid UTF-8, rebuilding from upstream: {e}")
            return CacheBlob()

        try:
            blob = CacheBlob.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Corrupt cache {self.path} ({e.error_count()} errors), rebuilding from upstream"
            )
            return CacheBlob()

        if blob.version > SCHEMA_VERSION:
            logger.info(
                f"Cache {self.path} has schema version {blob.version}, reading as {SCHEMA_VERSION}"
            )
        return blob

    def _write_blob(self, blob: CacheBlob) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = blob.model_dump_json(indent=2)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise

    def _unlink(self) -> None:
        self.path.unlink(missing_ok=True)

    async def _load(self) -> CacheBlob:
        return await asyncio.to_thread(self._read_blob)

    async def _save(self, blob: CacheBlob) -> None:
        blob.entries = {
            key: entry for key, entry in blob.entries.items() if self.is_valid(entry)
        }
        blob.version = SCHEMA_VERSION
        blob.last_updated = self._clock()
        await asyncio.to_thread(self._write_blob, blob)

    # ------------------------------------------------------------------
    # CacheStorePort
    # ------------------------------------------------------------------

    async def get_entry(self, key: str) -> CacheEntry | None:
        async with self._lock:
            blob = await self._load()
        return blob.entries.get(key)

    async def get(self, key: str) -> Any | None:
        entry = await self.get_entry(key)
        if entry is None:
            mark_cache_lookup(self.name, "miss")
            return None
        if not self.is_valid(entry):
            mark_cache_lookup(self.name, "stale")
            logger.debug(f"Stale cache entry {key!r} in {self.name}")
            return None
        mark_cache_lookup(self.name, "hit")
        return entry.value

    async def put(self, key: str, value: Any, last_updated: datetime | None = None) -> None:
        async with self._lock:
            blob = await self._load()
            blob.entries[key] = CacheEntry(
                value=value, last_updated=last_updated or self._clock()
            )
            await self._save(blob)

    async def put_if_absent(self, key: str, value: Any) -> bool:
        async with self._lock:
            blob = await self._load()
            if self.is_valid(blob.entries.get(key)):
                return False
            blob.entries[key] = CacheEntry(value=value, last_updated=self._clock())
            await self._save(blob)
            return True

    async def values(self) -> dict[str, Any]:
        async with self._lock:
            blob = await self._load()
        return {key: entry.value for key, entry in blob.entries.items() if self.is_valid(entry)}

    async def delete(self) -> bool:
        async with self._lock:
            try:
                await asyncio.to_thread(self._unlink)
            except OSError as e:
                logger.error(f"Failed to delete cache {self.path}: {e}")
                return False
        logger.info(f"Cache {self.name} cleared")
        return True


class FreshnessWindowStore(JsonFileStore):
    """Entries expire once they are older than the freshness window.

    Expired entries are dropped from the file on the next write.
    """

    def __init__(
        self,
        path: Path | str,
        window: timedelta,
        *,
        clock: Callable[[], datetime] = utcnow,
        name: str | None = None,
    ) -> None:
        super().__init__(path, clock=clock, name=name)
        self.window = window

    def is_valid(self, entry: CacheEntry | None, max_age: timedelta | None = None) -> bool:
        if entry is None:
            return False
        threshold = max_age if max_age is not None else self.window
        return (self._clock() - entry.last_updated) < threshold


class PersistentStore(JsonFileStore):
    """Entries never expire; only ``delete`` removes them."""

    def is_valid(self, entry: CacheEntry | None, max_age: timedelta | None = None) -> bool:
        return entry is not None
