"""
Match information data contracts for Riot API Match-V5.
"""

from pydantic import Field

from .common import RecordContract


class Team(RecordContract):
    """Team information in a match."""

    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    win: bool = Field(False, description="Whether this team won")


class Participant(RecordContract):
    """Participant (player) information in a match."""

    # Identity
    puuid: str = Field(..., description="Player's PUUID")
    participant_id: int = Field(..., ge=1, le=16)
    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    summoner_name: str = Field("", description="Legacy summoner name (often empty)")
    riot_id_game_name: str | None = Field(None, description="Riot ID game name")
    riot_id_tagline: str | None = Field(None, description="Riot ID tagline")

    # Champion and role
    champion_name: str = Field("", description="Champion name")
    team_position: str = Field("", description="Assigned position")

    # Final totals
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    total_damage_dealt_to_champions: int = Field(0, ge=0)
    total_minions_killed: int = Field(0, ge=0)
    neutral_minions_killed: int = Field(0, ge=0)
    vision_score: int | None = Field(None, ge=0)
    win: bool = Field(False)

    @property
    def kda(self) -> str:
        """KDA as displayed to players, e.g. ``7/2/11``."""
        return f"{self.kills}/{self.deaths}/{self.assists}"

    @property
    def display_name(self) -> str:
        """Riot ID when available, falling back to the legacy summoner name."""
        if self.riot_id_game_name:
            if self.riot_id_tagline:
                return f"{self.riot_id_game_name}#{self.riot_id_tagline}"
            return self.riot_id_game_name
        return self.summoner_name


class MatchInfo(RecordContract):
    """Complete match information."""

    game_duration: int = Field(..., ge=0, description="Game duration in seconds")
    game_id: int | None = Field(None, description="Game ID")
    game_mode: str | None = Field(None, description="Game mode")
    queue_id: int | None = Field(None, description="Queue ID")
    participants: list[Participant] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)

    @property
    def duration_minutes(self) -> int:
        """Whole minutes played (seconds are truncated)."""
        return self.game_duration // 60

    @property
    def game_time(self) -> str:
        """Duration formatted as ``MM:SS``."""
        minutes, seconds = divmod(self.game_duration, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def get_participant_by_puuid(self, puuid: str) -> Participant | None:
        """Get participant by PUUID."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def get_team(self, team_id: int) -> Team | None:
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def did_team_win(self, team_id: int) -> bool:
        """Win flag for a team; a team missing from the record counts as a loss."""
        team = self.get_team(team_id)
        return bool(team and team.win)


class MatchMetadata(RecordContract):
    """Match metadata."""

    match_id: str = Field(..., description="Match ID")
    participants: list[str] = Field(default_factory=list, description="Participant PUUIDs")


class Match(RecordContract):
    """Complete match data from Riot API."""

    metadata: MatchMetadata
    info: MatchInfo

    @property
    def match_id(self) -> str:
        return self.metadata.match_id
