"""Contract models for data validation."""

from .account import RiotAccount
from .common import BaseContract, RecordContract
from .impact import (
    AVERAGE_MINUTE,
    AnalysisResult,
    ChartPoint,
    ImpactCategory,
    LifetimeStats,
    MatchSummary,
)
from .match import Match, MatchInfo, MatchMetadata, Participant, Team
from .timeline import (
    DamageStats,
    EventType,
    Frame,
    MatchTimeline,
    ParticipantFrame,
    TimelineEvent,
    TimelineInfo,
    TimelineMetadata,
)

__all__ = [
    "AVERAGE_MINUTE",
    "AnalysisResult",
    "BaseContract",
    "ChartPoint",
    "DamageStats",
    "EventType",
    "Frame",
    "ImpactCategory",
    "LifetimeStats",
    "Match",
    "MatchInfo",
    "MatchMetadata",
    "MatchSummary",
    "MatchTimeline",
    "Participant",
    "ParticipantFrame",
    "RecordContract",
    "RiotAccount",
    "Team",
    "TimelineEvent",
    "TimelineInfo",
    "TimelineMetadata",
]
