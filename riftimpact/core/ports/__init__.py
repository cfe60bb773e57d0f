"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
All external dependencies must implement these interfaces.
"""

from riftimpact.core.ports.cache_port import CacheEntry, CacheStorePort
from riftimpact.core.ports.match_data_port import MatchDataPort, RateLimitError, RiotAPIError

__all__ = [
    "CacheEntry",
    "CacheStorePort",
    "MatchDataPort",
    "RateLimitError",
    "RiotAPIError",
]
