"""Application services composing ports, stores and the scoring core."""

from riftimpact.core.services.impact_history import ImpactHistoryService
from riftimpact.core.services.match_data_service import MatchDataService
from riftimpact.core.services.performance_service import PerformanceAnalysisService

__all__ = [
    "ImpactHistoryService",
    "MatchDataService",
    "PerformanceAnalysisService",
]
