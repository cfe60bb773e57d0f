"""
Match Timeline data contracts for Riot API Match-V5.
This is the core data structure for impact scoring.
"""

from enum import Enum

from pydantic import Field

from .common import RecordContract


class EventType(str, Enum):
    """Timeline event types the engine inspects."""

    CHAMPION_KILL = "CHAMPION_KILL"


class DamageStats(RecordContract):
    """Damage statistics at a specific frame."""

    total_damage_done_to_champions: int = Field(0)


class ParticipantFrame(RecordContract):
    """Participant state as of a specific frame."""

    participant_id: int = Field(..., ge=1, le=16)
    current_gold: int = Field(0)
    total_gold: int = Field(0)
    level: int = Field(1, ge=1, le=30)
    minions_killed: int = Field(0)
    jungle_minions_killed: int = Field(0)
    damage_stats: DamageStats = Field(default_factory=DamageStats)

    @property
    def creep_score(self) -> int:
        return self.minions_killed + self.jungle_minions_killed


class TimelineEvent(RecordContract):
    """A single timeline event.

    Only the fields used by champion-kill accounting are modeled; killerId 0
    means the kill was executed by a non-champion (tower, minion, monster).
    """

    type: str
    timestamp: int = Field(0, description="Milliseconds since game start")
    killer_id: int = Field(0)
    victim_id: int = Field(0)
    assisting_participant_ids: list[int] = Field(default_factory=list)

    @property
    def is_champion_kill(self) -> bool:
        return self.type == EventType.CHAMPION_KILL.value


class Frame(RecordContract):
    """A single frame in the match timeline."""

    timestamp: int = Field(0, description="Frame timestamp in milliseconds")
    participant_frames: dict[str, ParticipantFrame] = Field(
        default_factory=dict, description="Participant states indexed by participant ID string"
    )
    events: list[TimelineEvent] = Field(
        default_factory=list, description="Events that occurred during this frame"
    )

    def get_participant_frame(self, participant_id: int) -> ParticipantFrame | None:
        return self.participant_frames.get(str(participant_id))


class TimelineInfo(RecordContract):
    """Timeline information containing frames."""

    frame_interval: int = Field(60000, description="Milliseconds between frames (usually 60000)")
    frames: list[Frame] = Field(default_factory=list, description="frame[0] is game start")


class TimelineMetadata(RecordContract):
    """Timeline metadata."""

    match_id: str = Field(..., description="Match ID")


class MatchTimeline(RecordContract):
    """Complete match timeline from Riot API Match-V5."""

    metadata: TimelineMetadata
    info: TimelineInfo

    @property
    def frames(self) -> list[Frame]:
        return self.info.frames
