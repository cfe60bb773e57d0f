"""Lifetime classification history.

Matches are historical and immutable, so the first category recorded for a
match id is final. Recording relies on the store's atomic check-and-set, which
keeps first-writer-wins semantics when several analyses classify the same
match concurrently.
"""

import logging

from riftimpact.contracts.impact import ImpactCategory, LifetimeStats
from riftimpact.core.metrics import mark_classification
from riftimpact.core.ports.cache_port import CacheStorePort

logger = logging.getLogger(__name__)


class ImpactHistoryService:
    def __init__(self, store: CacheStorePort) -> None:
        self.store = store

    async def record(self, match_id: str, category: ImpactCategory) -> ImpactCategory:
        """Record a classification once.

        Returns:
            The category stored for ``match_id`` after the call: ``category``
            if this was the first classification, the existing one otherwise.
        """
        if await self.store.put_if_absent(match_id, category.value):
            mark_classification(category.value)
            logger.info(f"Classified {match_id} as {category.value}")
            return category

        existing = await self.store.get(match_id)
        if existing is None:
            return category
        return ImpactCategory(existing)

    async def get_category(self, match_id: str) -> ImpactCategory | None:
        value = await self.store.get(match_id)
        return ImpactCategory(value) if value is not None else None

    async def lifetime_stats(self) -> LifetimeStats:
        categories = []
        for match_id, value in (await self.store.values()).items():
            try:
                categories.append(ImpactCategory(value))
            except ValueError:
                logger.warning(f"Ignoring unknown category {value!r} for {match_id}")
        return LifetimeStats.from_categories(categories)

    async def clear(self) -> bool:
        return await self.store.delete()
