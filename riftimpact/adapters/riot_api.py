"""Riot API adapter using Match-V5 / Account-V1 REST over aiohttp.

Implements MatchDataPort with consistent async semantics and session reuse.
Payloads are validated into contracts here, once; nothing downstream reads
raw JSON. There is no retry/backoff here: a 429 surfaces as RateLimitError
carrying Retry-After.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from riftimpact.config.settings import Settings, get_settings
from riftimpact.contracts.account import RiotAccount
from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline
from riftimpact.core.metrics import mark_upstream_request
from riftimpact.core.observability import trace_adapter
from riftimpact.core.ports.match_data_port import MatchDataPort, RateLimitError, RiotAPIError

logger = logging.getLogger(__name__)

__all__ = ["RateLimitError", "RiotAPIAdapter", "RiotAPIError"]


class RiotAPIAdapter(MatchDataPort):
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._session: aiohttp.ClientSession | None = None
        self._session_loop: asyncio.AbstractEventLoop | None = None
        logger.info(f"Riot API adapter initialized ({self.settings.riot_api_base_url})")

    async def __aenter__(self) -> "RiotAPIAdapter":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        session = self._session
        if session is None or session.closed or self._session_loop is not loop:
            if session is not None and not session.closed:
                await session.close()
            timeout = aiohttp.ClientTimeout(total=self.settings.riot_api_timeout_seconds)
            session = aiohttp.ClientSession(timeout=timeout)
            self._session = session
            self._session_loop = loop
        return session

    async def close(self) -> None:
        try:
            if self._session is not None and not self._session.closed:
                await self._session.close()
        finally:
            self._session = None
            self._session_loop = None

    def _headers(self) -> dict[str, str]:
        if not self.settings.riot_api_key:
            raise RiotAPIError("API Key is not configured.")
        return {"X-Riot-Token": self.settings.riot_api_key}

    async def _get_json(
        self, endpoint: str, path: str, params: dict[str, Any] | None = None
    ) -> Any | None:
        """GET a Riot endpoint. Returns parsed JSON, or None on 404."""
        url = f"{self.settings.riot_api_base_url.rstrip('/')}{path}"
        headers = self._headers()
        session = await self._ensure_session()
        try:
            async with session.get(url, headers=headers, params=params) as resp:
                mark_upstream_request(endpoint, resp.status)
                if resp.status == 200:
                    return await resp.json()
                if resp.status == 404:
                    return None
                if resp.status == 429:
                    raise RateLimitError(int(resp.headers.get("Retry-After", "60")))
                body = await resp.text()
                raise RiotAPIError(
                    f"Failed to get {endpoint}. Status: {resp.status}, Response: {body}",
                    status_code=resp.status,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            mark_upstream_request(endpoint, "transport_error")
            raise RiotAPIError(f"Failed to get {endpoint}: {str(e) or type(e).__name__}") from e

    @trace_adapter
    async def fetch_match_ids(self, puuid: str, count: int, start: int = 0) -> list[str]:
        if not puuid:
            raise ValueError("PUUID cannot be empty")
        params: dict[str, Any] = {"start": max(0, start), "count": max(1, min(count, 100))}
        if self.settings.riot_match_queue_type:
            params["type"] = self.settings.riot_match_queue_type
        data = await self._get_json(
            "match_ids", f"/lol/match/v5/matches/by-puuid/{quote(puuid)}/ids", params
        )
        return [str(m) for m in data] if isinstance(data, list) else []

    @trace_adapter
    async def fetch_match_details(self, match_id: str) -> Match | None:
        if not match_id:
            raise ValueError("Match ID cannot be empty")
        data = await self._get_json("match", f"/lol/match/v5/matches/{quote(match_id)}")
        if data is None:
            return None
        return Match.model_validate(data)

    @trace_adapter
    async def fetch_match_timeline(self, match_id: str) -> MatchTimeline | None:
        if not match_id:
            raise ValueError("Match ID cannot be empty")
        data = await self._get_json(
            "timeline", f"/lol/match/v5/matches/{quote(match_id)}/timeline"
        )
        if data is None:
            return None
        return MatchTimeline.model_validate(data)

    @trace_adapter
    async def fetch_account_by_riot_id(self, game_name: str, tag_line: str) -> RiotAccount | None:
        if not game_name or not tag_line:
            raise ValueError("Game name and tag line must be provided.")
        data = await self._get_json(
            "account",
            f"/riot/account/v1/accounts/by-riot-id/{quote(game_name)}/{quote(tag_line)}",
        )
        if data is None:
            return None
        return RiotAccount.model_validate(data)
