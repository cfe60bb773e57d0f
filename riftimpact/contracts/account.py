"""Riot Account-V1 contract."""

from pydantic import Field

from .common import RecordContract


class RiotAccount(RecordContract):
    """Resolved player identity."""

    puuid: str = Field(..., min_length=1, description="Player's PUUID")
    game_name: str = Field(..., description="Riot ID game name")
    tag_line: str = Field(..., description="Riot ID tag line")

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}"
