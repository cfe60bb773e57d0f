"""Port interface for persistent key-value cache stores."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator


class CacheEntry(BaseModel):
    """A cached value with the time it was written."""

    value: Any
    last_updated: datetime = Field(..., description="UTC write time")

    @field_validator("last_updated")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps written without an offset are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class CacheStorePort(ABC):
    """Port for caching operations.

    Stores differ only in ``is_valid``: a freshness-windowed store expires
    entries, a persistent store never does.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a valid value from cache, or None on miss/stale."""

    @abstractmethod
    async def get_entry(self, key: str) -> CacheEntry | None:
        """Get the raw entry regardless of validity."""

    @abstractmethod
    async def put(self, key: str, value: Any, last_updated: datetime | None = None) -> None:
        """Store a value, stamped now unless ``last_updated`` is given."""

    @abstractmethod
    async def put_if_absent(self, key: str, value: Any) -> bool:
        """Atomically store a value only if the key is unset. Returns True if stored."""

    @abstractmethod
    async def values(self) -> dict[str, Any]:
        """All currently valid values keyed by cache key."""

    @abstractmethod
    def is_valid(self, entry: CacheEntry | None, max_age: timedelta | None = None) -> bool:
        """Validity policy of this store."""

    @abstractmethod
    async def delete(self) -> bool:
        """Wipe the whole store. Idempotent; returns False only on I/O failure."""
