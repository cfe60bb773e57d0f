"""Cache-through access to upstream match data.

Sits between MatchDataPort and the scoring engine. Match id lists, match
details and timelines go through the freshness-windowed store; resolved
accounts go through the non-expiring identity store.
"""

import logging
from datetime import datetime

from pydantic import ValidationError

from riftimpact.contracts.account import RiotAccount
from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline
from riftimpact.core.ports.cache_port import CacheStorePort
from riftimpact.core.ports.match_data_port import MatchDataPort

logger = logging.getLogger(__name__)

TRACKED_PLAYER_KEY = "tracked_player"


def match_ids_key(puuid: str) -> str:
    return f"match_ids:{puuid}"


def match_key(match_id: str) -> str:
    return f"match:{match_id}"


def timeline_key(match_id: str) -> str:
    return f"timeline:{match_id}"


def account_key(game_name: str, tag_line: str) -> str:
    return f"account:{game_name}#{tag_line}".lower()


class MatchDataService:
    """Serve match data from cache, falling back to the upstream port.

    Upstream errors propagate unchanged; nothing is cached for a failed or
    empty fetch.
    """

    def __init__(
        self,
        upstream: MatchDataPort,
        match_store: CacheStorePort,
        identity_store: CacheStorePort,
    ) -> None:
        self.upstream = upstream
        self.match_store = match_store
        self.identity_store = identity_store

    async def get_match_ids(self, puuid: str, count: int) -> list[str]:
        """Newest-first match ids, fetching only what the cache lacks.

        A fresh cached list shorter than ``count`` is extended with the
        missing suffix (``start=len(cached)``) rather than refetched whole.
        """
        key = match_ids_key(puuid)
        entry = await self.match_store.get_entry(key)
        cached: list[str] = []
        head_stamp: datetime | None = None
        if entry is not None and self.match_store.is_valid(entry):
            cached = [str(m) for m in entry.value or []]
            head_stamp = entry.last_updated

        if len(cached) >= count:
            return cached[:count]

        if not cached:
            ids = await self.upstream.fetch_match_ids(puuid, count)
            if ids:
                await self.match_store.put(key, ids)
            return ids[:count]

        missing = count - len(cached)
        logger.debug(f"Partial match id hit for {puuid}: have {len(cached)}, fetching {missing}")
        suffix = await self.upstream.fetch_match_ids(puuid, missing, start=len(cached))
        seen = set(cached)
        merged = list(cached)
        for match_id in suffix:
            if match_id not in seen:
                seen.add(match_id)
                merged.append(match_id)
        if len(merged) > len(cached):
            # Keep the head's timestamp so merging never extends its freshness
            await self.match_store.put(key, merged, last_updated=head_stamp)
        return merged[:count]

    async def get_match_details(self, match_id: str) -> Match | None:
        cached = await self.match_store.get(match_key(match_id))
        if cached is not None:
            try:
                return Match.model_validate(cached)
            except ValidationError as e:
                logger.warning(
                    f"Discarding unreadable cached match {match_id}: {e.error_count()} errors"
                )

        match = await self.upstream.fetch_match_details(match_id)
        if match is not None:
            await self.match_store.put(match_key(match_id), match.to_payload())
        return match

    async def get_match_timeline(self, match_id: str) -> MatchTimeline | None:
        cached = await self.match_store.get(timeline_key(match_id))
        if cached is not None:
            try:
                return MatchTimeline.model_validate(cached)
            except ValidationError as e:
                logger.warning(
                    f"Discarding unreadable cached timeline {match_id}: {e.error_count()} errors"
                )

        timeline = await self.upstream.fetch_match_timeline(match_id)
        if timeline is not None:
            await self.match_store.put(timeline_key(match_id), timeline.to_payload())
        return timeline

    async def resolve_account(self, game_name: str, tag_line: str) -> RiotAccount | None:
        """Riot ID -> account, remembered indefinitely once resolved."""
        key = account_key(game_name, tag_line)
        cached = await self.identity_store.get(key)
        if cached is not None:
            try:
                return RiotAccount.model_validate(cached)
            except ValidationError:
                logger.warning(f"Discarding unreadable cached account for {game_name}#{tag_line}")

        account = await self.upstream.fetch_account_by_riot_id(game_name, tag_line)
        if account is not None:
            payload = account.to_payload()
            await self.identity_store.put(key, payload)
            await self.identity_store.put(TRACKED_PLAYER_KEY, payload)
            logger.info(f"Resolved {account.riot_id}")
        return account

    async def get_tracked_player(self) -> RiotAccount | None:
        """The most recently resolved account, if any."""
        cached = await self.identity_store.get(TRACKED_PLAYER_KEY)
        if cached is None:
            return None
        try:
            return RiotAccount.model_validate(cached)
        except ValidationError:
            logger.warning("Discarding unreadable tracked player entry")
            return None
