"""Performance analysis facade.

Single entry point for callers (CLI, UI bridges): fetches match data through
the cache, scores it, classifies the outcome and keeps lifetime history.
Analysis never raises; every failure comes back as a tagged AnalysisResult.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from pydantic import ValidationError

from riftimpact.adapters.file_cache import FreshnessWindowStore, PersistentStore
from riftimpact.adapters.riot_api import RiotAPIAdapter
from riftimpact.config.settings import Settings
from riftimpact.contracts.account import RiotAccount
from riftimpact.contracts.impact import AnalysisResult, LifetimeStats, MatchSummary
from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline
from riftimpact.core.metrics import mark_analysis
from riftimpact.core.observability import trace_service
from riftimpact.core.ports.cache_port import CacheStorePort
from riftimpact.core.ports.match_data_port import MatchDataPort, RiotAPIError
from riftimpact.core.scoring.calculator import generate_chart, split_average_point
from riftimpact.core.scoring.classifier import classify_outcome
from riftimpact.core.services.impact_history import ImpactHistoryService
from riftimpact.core.services.match_data_service import MatchDataService

logger = logging.getLogger(__name__)

MATCH_NOT_FOUND = "Match not found."
USER_NOT_IN_MATCH = "User not found in match."
TIMELINE_UNAVAILABLE = "Could not retrieve match timeline data."


def _final_creep_score(timeline: MatchTimeline, participant_id: int) -> int:
    if not timeline.frames:
        return 0
    frame = timeline.frames[-1].get_participant_frame(participant_id)
    return frame.creep_score if frame else 0


class PerformanceAnalysisService:
    """Production implementation of the analysis facade."""

    def __init__(
        self,
        upstream: MatchDataPort,
        match_store: CacheStorePort,
        identity_store: CacheStorePort,
        impact_store: CacheStorePort,
    ) -> None:
        self.match_store = match_store
        self.identity_store = identity_store
        self.impact_store = impact_store
        self.match_data = MatchDataService(upstream, match_store, identity_store)
        self.history = ImpactHistoryService(impact_store)

    @classmethod
    def from_settings(
        cls, settings: Settings, upstream: MatchDataPort | None = None
    ) -> PerformanceAnalysisService:
        """Wire the default JSON file stores and the Riot API adapter."""
        return cls(
            upstream=upstream or RiotAPIAdapter(settings),
            match_store=FreshnessWindowStore(
                settings.match_cache_path,
                window=timedelta(seconds=settings.match_cache_ttl_seconds),
                name="match",
            ),
            identity_store=PersistentStore(settings.identity_cache_path, name="identity"),
            impact_store=PersistentStore(settings.impact_cache_path, name="impact"),
        )

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    @trace_service
    async def analyze_match(self, match_id: str, tracked_puuid: str) -> AnalysisResult:
        try:
            match = await self.match_data.get_match_details(match_id)
            if match is None:
                return self._fail(match_id, MATCH_NOT_FOUND)
            if match.info.get_participant_by_puuid(tracked_puuid) is None:
                return self._fail(match_id, USER_NOT_IN_MATCH)
            timeline = await self.match_data.get_match_timeline(match_id)
            if timeline is None or not timeline.frames:
                return self._fail(match_id, TIMELINE_UNAVAILABLE)
            summary = await self._summarize(match_id, match, timeline, tracked_puuid)
        except RiotAPIError as e:
            return self._fail(match_id, str(e), status="upstream_error")
        except ValidationError as e:
            return self._fail(match_id, f"Malformed match data: {e}", status="invalid_data")
        except ValueError as e:
            return self._fail(match_id, str(e), status="invalid_input")
        except OSError as e:
            return self._fail(match_id, f"Cache I/O error: {e}", status="cache_error")

        mark_analysis("success")
        return AnalysisResult.ok(summary)

    async def _summarize(
        self, match_id: str, match: Match, timeline: MatchTimeline, tracked_puuid: str
    ) -> MatchSummary:
        me = match.info.get_participant_by_puuid(tracked_puuid)
        if me is None:
            raise ValueError(USER_NOT_IN_MATCH)

        series, average = split_average_point(generate_chart(match, timeline, tracked_puuid))
        if average is None:
            raise ValueError(f"No impact series could be built for match {match_id}")

        did_win = match.info.did_team_win(me.team_id)
        category = await self.history.record(
            match_id, classify_outcome(average.your_impact, average.team_impact, did_win)
        )

        return MatchSummary(
            id=match_id,
            summoner_name=me.display_name,
            champion=me.champion_name,
            kda=me.kda,
            cs=_final_creep_score(timeline, me.participant_id),
            game_result="Victory" if did_win else "Defeat",
            game_time=match.info.game_time,
            data=series,
            your_impact=average.your_impact,
            team_impact=average.team_impact,
            impact_category=category,
        )

    def _fail(self, match_id: str, error: str, status: str = "failed") -> AnalysisResult:
        logger.warning(f"Analysis of {match_id} failed: {error}")
        mark_analysis(status)
        return AnalysisResult.failure(error)

    async def analyze_recent_matches(self, tracked_puuid: str, count: int) -> list[AnalysisResult]:
        """Analyze the player's latest matches concurrently, newest first."""
        try:
            match_ids = await self.match_data.get_match_ids(tracked_puuid, count)
        except RiotAPIError as e:
            logger.warning(f"Could not list matches for {tracked_puuid}: {e}")
            return [AnalysisResult.failure(str(e))]
        return list(
            await asyncio.gather(*(self.analyze_match(m, tracked_puuid) for m in match_ids))
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_match_history(self, puuid: str, count: int) -> list[str]:
        return await self.match_data.get_match_ids(puuid, count)

    async def resolve_account(self, game_name: str, tag_line: str) -> RiotAccount | None:
        return await self.match_data.resolve_account(game_name, tag_line)

    async def get_tracked_player(self) -> RiotAccount | None:
        return await self.match_data.get_tracked_player()

    async def get_lifetime_stats(self) -> LifetimeStats:
        return await self.history.lifetime_stats()

    # ------------------------------------------------------------------
    # Cache maintenance
    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self.match_data.upstream.close()

    async def clear_match_cache(self) -> bool:
        return await self.match_store.delete()

    async def clear_classification_cache(self) -> bool:
        return await self.history.clear()

    async def clear_identity_cache(self) -> bool:
        return await self.identity_store.delete()

    async def clear_all_caches(self) -> bool:
        results = [
            await self.clear_match_cache(),
            await self.clear_classification_cache(),
            await self.clear_identity_cache(),
        ]
        return all(results)
