"""Outcome classification: was the result earned or carried?"""

from riftimpact.contracts.impact import ImpactCategory


def classify_outcome(your_impact: float, team_impact: float, did_win: bool) -> ImpactCategory:
    """Place a match in one of four quadrants.

    +---------+--------------------+-----------------+
    |         | you > team         | you <= team     |
    +=========+====================+=================+
    | win     | impactWin          | guaranteedWin   |
    | loss    | guaranteedLoss     | impactLoss      |
    +---------+--------------------+-----------------+
    """
    outperformed = your_impact > team_impact
    if did_win:
        return ImpactCategory.IMPACT_WIN if outperformed else ImpactCategory.GUARANTEED_WIN
    return ImpactCategory.GUARANTEED_LOSS if outperformed else ImpactCategory.IMPACT_LOSS
