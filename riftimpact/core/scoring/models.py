"""Scoring data models.

Data structures only, no business logic.
"""

from dataclasses import dataclass
from enum import IntEnum


class TeamSide(IntEnum):
    """Team classification relative to the tracked participant."""

    ALLY = 1
    ENEMY = 2


@dataclass(slots=True)
class ParticipantSnapshot:
    """Cumulative stats for one participant as of a minute boundary.

    Kill/death/assist counts cover frames 1..minute inclusive. Gold, creep
    score and damage reflect the latest participant frame walked.
    """

    participant_id: int
    team: TeamSide
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    gold: int = 0
    creep_score: int = 0
    damage_to_champions: int = 0


@dataclass(frozen=True, slots=True)
class PointValues:
    """Per-minute point weights for combat actions."""

    kill: float
    death: float
    assist: float
