"""Impact analysis contracts.

Defines the structured data handed to callers (UI bridge, CLI) after a match
has been scored and classified. Serialized keys are camelCase.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Literal

from pydantic import Field, computed_field

from .common import BaseContract, RecordContract

AVERAGE_MINUTE = -1
"""ChartPoint minute sentinel for the match-average entry."""


class ImpactCategory(str, Enum):
    """Outcome of comparing a player's impact with the result of the match."""

    IMPACT_WIN = "impactWin"
    IMPACT_LOSS = "impactLoss"
    GUARANTEED_WIN = "guaranteedWin"
    GUARANTEED_LOSS = "guaranteedLoss"


class ChartPoint(RecordContract):
    """Cumulative impact sampled at one checkpoint."""

    minute: int = Field(..., ge=AVERAGE_MINUTE, description="-1 marks the match average")
    your_impact: float
    team_impact: float

    @property
    def is_average(self) -> bool:
        return self.minute == AVERAGE_MINUTE


class MatchSummary(BaseContract):
    """Per-match analysis result for display."""

    id: str = Field(..., description="Match ID")
    summoner_name: str
    champion: str
    rank: str = Field("Unranked", description="Placeholder until ranked lookups exist")
    kda: str
    cs: int = Field(0, ge=0)
    vision_score: int | None = Field(
        None, description="Unimplemented metric; always null until a formula is chosen"
    )
    game_result: Literal["Victory", "Defeat"]
    game_time: str = Field(..., description="Duration as MM:SS")
    data: list[ChartPoint] = Field(default_factory=list, description="Chart series, no sentinel")
    your_impact: float = Field(0.0, description="Average of the sampled personal impact")
    team_impact: float = Field(0.0, description="Average of the sampled per-teammate impact")
    impact_category: ImpactCategory


class AnalysisResult(BaseContract):
    """Tagged success/failure wrapper returned by ``analyze_match``."""

    success: bool
    match_summary: MatchSummary | None = None
    error: str | None = None

    @classmethod
    def ok(cls, summary: MatchSummary) -> "AnalysisResult":
        return cls(success=True, match_summary=summary)

    @classmethod
    def failure(cls, error: str) -> "AnalysisResult":
        return cls(success=False, error=error)


class LifetimeStats(BaseContract):
    """All-time tally of classified matches."""

    impact_wins: int = Field(0, ge=0)
    impact_losses: int = Field(0, ge=0)
    guaranteed_wins: int = Field(0, ge=0)
    guaranteed_losses: int = Field(0, ge=0)

    @classmethod
    def from_categories(cls, categories: Iterable[ImpactCategory | str]) -> "LifetimeStats":
        counts = {category: 0 for category in ImpactCategory}
        for raw in categories:
            counts[ImpactCategory(raw)] += 1
        return cls(
            impact_wins=counts[ImpactCategory.IMPACT_WIN],
            impact_losses=counts[ImpactCategory.IMPACT_LOSS],
            guaranteed_wins=counts[ImpactCategory.GUARANTEED_WIN],
            guaranteed_losses=counts[ImpactCategory.GUARANTEED_LOSS],
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_matches(self) -> int:
        return self.impact_wins + self.impact_losses + self.guaranteed_wins + self.guaranteed_losses

    @computed_field  # type: ignore[prop-decorator]
    @property
    def luck_percentage(self) -> float:
        """Share of guaranteed outcomes that went the player's way.

        50 when no guaranteed outcome has been recorded yet.
        """
        guaranteed = self.guaranteed_wins + self.guaranteed_losses
        if guaranteed == 0:
            return 50.0
        return self.guaranteed_wins / guaranteed * 100
