"""Adapters for external systems: Riot API and on-disk cache stores."""

from riftimpact.adapters.file_cache import FreshnessWindowStore, JsonFileStore, PersistentStore
from riftimpact.adapters.riot_api import RiotAPIAdapter

__all__ = [
    "FreshnessWindowStore",
    "JsonFileStore",
    "PersistentStore",
    "RiotAPIAdapter",
]
