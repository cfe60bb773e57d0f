"""Cache-through behavior of MatchDataService.

Upstream is an AsyncMock; stores are real JSON files under tmp_path with a
manual clock so freshness can be stepped deterministically.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from riftimpact.adapters.file_cache import FreshnessWindowStore, PersistentStore
from riftimpact.contracts import RiotAccount
from riftimpact.core.ports.match_data_port import MatchDataPort, RiotAPIError
from riftimpact.core.services.match_data_service import (
    TRACKED_PLAYER_KEY,
    MatchDataService,
    account_key,
    match_ids_key,
    match_key,
)


@pytest.fixture
def upstream():
    return AsyncMock(spec=MatchDataPort)


@pytest.fixture
def match_store(tmp_path, clock):
    return FreshnessWindowStore(tmp_path / "match_cache.json", timedelta(minutes=10), clock=clock)


@pytest.fixture
def identity_store(tmp_path, clock):
    return PersistentStore(tmp_path / "user_cache.json", clock=clock)


@pytest.fixture
def service(upstream, match_store, identity_store):
    return MatchDataService(upstream, match_store, identity_store)


class TestMatchIds:
    @pytest.mark.asyncio
    async def test_cold_cache_fetches_and_stores(self, service, upstream, match_store):
        upstream.fetch_match_ids.return_value = ["NA1_3", "NA1_2", "NA1_1"]

        ids = await service.get_match_ids("puuid-1", 3)

        assert ids == ["NA1_3", "NA1_2", "NA1_1"]
        upstream.fetch_match_ids.assert_awaited_once_with("puuid-1", 3)
        assert await match_store.get(match_ids_key("puuid-1")) == ids

    @pytest.mark.asyncio
    async def test_fresh_hit_skips_upstream(self, service, upstream, match_store):
        await match_store.put(match_ids_key("puuid-1"), ["NA1_3", "NA1_2", "NA1_1"])

        ids = await service.get_match_ids("puuid-1", 2)

        assert ids == ["NA1_3", "NA1_2"]
        upstream.fetch_match_ids.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_hit_fetches_only_missing_suffix(
        self, service, upstream, match_store, clock
    ):
        await match_store.put(match_ids_key("puuid-1"), ["NA1_5", "NA1_4"])
        head_stamp = (await match_store.get_entry(match_ids_key("puuid-1"))).last_updated
        clock.advance(minutes=2)
        upstream.fetch_match_ids.return_value = ["NA1_3", "NA1_2", "NA1_1"]

        ids = await service.get_match_ids("puuid-1", 5)

        assert ids == ["NA1_5", "NA1_4", "NA1_3", "NA1_2", "NA1_1"]
        upstream.fetch_match_ids.assert_awaited_once_with("puuid-1", 3, start=2)
        entry = await match_store.get_entry(match_ids_key("puuid-1"))
        assert entry.value == ids
        assert entry.last_updated == head_stamp

    @pytest.mark.asyncio
    async def test_partial_hit_drops_duplicates(self, service, upstream, match_store):
        await match_store.put(match_ids_key("puuid-1"), ["NA1_5", "NA1_4"])
        # A new game was played meanwhile, shifting the upstream window by one
        upstream.fetch_match_ids.return_value = ["NA1_4", "NA1_3"]

        ids = await service.get_match_ids("puuid-1", 4)

        assert ids == ["NA1_5", "NA1_4", "NA1_3"]

    @pytest.mark.asyncio
    async def test_stale_list_is_refetched_whole(self, service, upstream, match_store, clock):
        await match_store.put(match_ids_key("puuid-1"), ["NA1_1"])
        clock.advance(minutes=11)
        upstream.fetch_match_ids.return_value = ["NA1_2", "NA1_1"]

        ids = await service.get_match_ids("puuid-1", 2)

        assert ids == ["NA1_2", "NA1_1"]
        upstream.fetch_match_ids.assert_awaited_once_with("puuid-1", 2)

    @pytest.mark.asyncio
    async def test_empty_upstream_result_is_not_cached(self, service, upstream, match_store):
        upstream.fetch_match_ids.return_value = []

        assert await service.get_match_ids("puuid-1", 5) == []
        assert await match_store.get_entry(match_ids_key("puuid-1")) is None


class TestMatchDetailsAndTimeline:
    @pytest.mark.asyncio
    async def test_details_cached_after_first_fetch(self, service, upstream, make_match):
        upstream.fetch_match_details.return_value = make_match(match_id="NA1_1")

        first = await service.get_match_details("NA1_1")
        second = await service.get_match_details("NA1_1")

        assert first == second
        upstream.fetch_match_details.assert_awaited_once_with("NA1_1")

    @pytest.mark.asyncio
    async def test_details_refetched_after_window(self, service, upstream, make_match, clock):
        upstream.fetch_match_details.return_value = make_match(match_id="NA1_1")

        await service.get_match_details("NA1_1")
        clock.advance(minutes=10)
        await service.get_match_details("NA1_1")

        assert upstream.fetch_match_details.await_count == 2

    @pytest.mark.asyncio
    async def test_unreadable_cached_match_falls_back_to_upstream(
        self, service, upstream, match_store, make_match
    ):
        await match_store.put(match_key("NA1_1"), {"metadata": "garbage"})
        upstream.fetch_match_details.return_value = make_match(match_id="NA1_1")

        match = await service.get_match_details("NA1_1")

        assert match.match_id == "NA1_1"
        upstream.fetch_match_details.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_match_is_not_cached(self, service, upstream, match_store):
        upstream.fetch_match_details.return_value = None

        assert await service.get_match_details("NA1_404") is None
        assert await match_store.values() == {}

    @pytest.mark.asyncio
    async def test_timeline_cached_after_first_fetch(self, service, upstream, make_timeline):
        upstream.fetch_match_timeline.return_value = make_timeline(frame_count=6)

        first = await service.get_match_timeline("NA1_1")
        second = await service.get_match_timeline("NA1_1")

        assert len(second.frames) == 6
        assert first == second
        upstream.fetch_match_timeline.assert_awaited_once_with("NA1_1")

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, service, upstream):
        upstream.fetch_match_details.side_effect = RiotAPIError("boom", status_code=500)

        with pytest.raises(RiotAPIError):
            await service.get_match_details("NA1_1")


class TestAccounts:
    @pytest.mark.asyncio
    async def test_resolve_caches_and_tracks(self, service, upstream, identity_store):
        account = RiotAccount(puuid="puuid-1", game_name="Player1", tag_line="NA1")
        upstream.fetch_account_by_riot_id.return_value = account

        assert await service.resolve_account("Player1", "NA1") == account
        # Lookup is case-insensitive on the cache key
        assert await service.resolve_account("player1", "na1") == account

        upstream.fetch_account_by_riot_id.assert_awaited_once_with("Player1", "NA1")
        assert await identity_store.get(account_key("PLAYER1", "Na1")) is not None
        assert await identity_store.get(TRACKED_PLAYER_KEY) == account.to_payload()
        assert await service.get_tracked_player() == account

    @pytest.mark.asyncio
    async def test_unknown_account(self, service, upstream):
        upstream.fetch_account_by_riot_id.return_value = None

        assert await service.resolve_account("Nobody", "000") is None
        assert await service.get_tracked_player() is None
