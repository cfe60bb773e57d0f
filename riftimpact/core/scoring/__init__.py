"""Impact scoring - time-weighted combat contribution.

Three pure stages:
1. Snapshot Builder: cumulative K/D/A per participant at a minute boundary
2. Impact Calculator: weighted deltas sampled at fixed checkpoints
3. Outcome Classifier: average impact vs. match result
"""

from riftimpact.core.scoring.calculator import (
    CHECKPOINT_MINUTES,
    generate_chart,
    point_values,
    split_average_point,
)
from riftimpact.core.scoring.classifier import classify_outcome
from riftimpact.core.scoring.models import ParticipantSnapshot, PointValues, TeamSide
from riftimpact.core.scoring.snapshot import build_snapshot

__all__ = [
    "CHECKPOINT_MINUTES",
    "ParticipantSnapshot",
    "PointValues",
    "TeamSide",
    "build_snapshot",
    "classify_outcome",
    "generate_chart",
    "point_values",
    "split_average_point",
]
