"""Port interface for upstream match data retrieval.

Abstracts the Riot API so the engine only ever sees typed records.
"""

from abc import ABC, abstractmethod

from riftimpact.contracts.account import RiotAccount
from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline


class RiotAPIError(Exception):
    """Upstream failure: transport, auth, bad status or rate limit."""

    def __init__(
        self, message: str, status_code: int | None = None, retry_after: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after


class RateLimitError(RiotAPIError):
    def __init__(self, retry_after: int) -> None:
        super().__init__("Rate limit exceeded", status_code=429, retry_after=retry_after)


class MatchDataPort(ABC):
    """Port for Riot Match-V5 / Account-V1 operations.

    Implementations may raise ``RiotAPIError`` (transport, auth, rate limit);
    callers treat it as non-retryable for the current call.
    """

    @abstractmethod
    async def fetch_match_ids(self, puuid: str, count: int, start: int = 0) -> list[str]:
        """Retrieve match IDs for a player, newest first.

        Args:
            puuid: Player's persistent unique ID
            count: Maximum number of match IDs to return
            start: Offset into the player's history (0 = most recent)
        """

    @abstractmethod
    async def fetch_match_details(self, match_id: str) -> Match | None:
        """Get match details, or None if the match does not exist."""

    @abstractmethod
    async def fetch_match_timeline(self, match_id: str) -> MatchTimeline | None:
        """Get the match timeline, or None if it is unavailable."""

    @abstractmethod
    async def fetch_account_by_riot_id(self, game_name: str, tag_line: str) -> RiotAccount | None:
        """Resolve a Riot ID (game_name#tag) to an account."""

    async def close(self) -> None:
        """Release transport resources. No-op by default."""
