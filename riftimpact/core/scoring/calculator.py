"""Time-weighted impact scoring - Pure domain functions with zero I/O.

Walks a match minute by minute, converts kill/death/assist deltas into
points whose value shrinks as the game goes on, and samples the running
totals at fixed checkpoints.

CRITICAL: This module MUST NOT contain any:
- Riot API calls
- Cache reads or writes
- File I/O
All I/O operations belong in the adapters layer.
"""

import logging

import numpy as np

from riftimpact.contracts.impact import AVERAGE_MINUTE, ChartPoint
from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline
from riftimpact.core.scoring.models import PointValues, TeamSide
from riftimpact.core.scoring.snapshot import MinuteSnapshot, build_snapshot, team_kills

logger = logging.getLogger(__name__)

CHECKPOINT_MINUTES: frozenset[int] = frozenset({1, 5, 10, 14, 20, 25, 30})

# Games longer than this report their final point at FINAL_MINUTE_LONG_GAME
LONG_GAME_MINUTES = 30
FINAL_MINUTE_LONG_GAME = 35

# Team differential is expressed per teammate; assumes 5-player teams
TEAMMATE_COUNT = 4

# (last minute inclusive, kill value); minutes past the table use _LATE_KILL_VALUE
_KILL_VALUE_STEPS: tuple[tuple[int, float], ...] = (
    (1, 25.0),
    (5, 20.0),
    (10, 17.5),
    (14, 15.0),
    (20, 10.0),
    (30, 5.0),
)
_LATE_KILL_VALUE = 2.5


def point_values(minute: int) -> PointValues:
    """Point weights for combat actions during ``minute``.

    Deaths cost as much as a kill earns; assists are worth half a kill.
    """
    kill_value = _LATE_KILL_VALUE
    for last_minute, value in _KILL_VALUE_STEPS:
        if minute <= last_minute:
            kill_value = value
            break
    return PointValues(kill=kill_value, death=-kill_value, assist=kill_value / 2)


def final_minute(duration_minutes: int) -> int:
    """Minute label of the closing chart point."""
    if duration_minutes > LONG_GAME_MINUTES:
        return FINAL_MINUTE_LONG_GAME
    return duration_minutes


def generate_chart(match: Match, timeline: MatchTimeline, tracked_puuid: str) -> list[ChartPoint]:
    """Build the impact series for one participant.

    Returns:
        One point per reached checkpoint, then the final point, then the
        average sentinel (``minute == -1``) holding the mean of all preceding
        points. Empty when ``tracked_puuid`` did not play in the match.
    """
    me = match.info.get_participant_by_puuid(tracked_puuid)
    if me is None:
        logger.warning(f"Participant not found in match {match.match_id}")
        return []

    duration_minutes = match.info.duration_minutes
    last_minute = min(duration_minutes, len(timeline.frames) - 1)

    solo_score = 0.0
    team_score = 0.0
    points: list[ChartPoint] = []
    previous: MinuteSnapshot | None = None

    for minute in range(1, last_minute + 1):
        values = point_values(minute)
        current = build_snapshot(minute, match, timeline, me.team_id)
        mine = current[me.participant_id]

        my_kills = mine.kills
        my_deaths = mine.deaths
        my_assists = mine.assists
        ally_kills = team_kills(current, TeamSide.ALLY)
        enemy_kills = team_kills(current, TeamSide.ENEMY)

        if previous is not None:
            mine_before = previous[me.participant_id]
            my_kills -= mine_before.kills
            my_deaths -= mine_before.deaths
            my_assists -= mine_before.assists
            ally_kills -= team_kills(previous, TeamSide.ALLY)
            enemy_kills -= team_kills(previous, TeamSide.ENEMY)

        solo_score += (
            my_kills * values.kill + my_deaths * values.death + my_assists * values.assist
        )
        team_score += (ally_kills - enemy_kills) * values.kill

        if minute in CHECKPOINT_MINUTES:
            points.append(
                ChartPoint(
                    minute=minute,
                    your_impact=solo_score,
                    team_impact=team_score / TEAMMATE_COUNT,
                )
            )
        previous = current

    points.append(
        ChartPoint(
            minute=final_minute(duration_minutes),
            your_impact=solo_score,
            team_impact=team_score / TEAMMATE_COUNT,
        )
    )
    points.append(
        ChartPoint(
            minute=AVERAGE_MINUTE,
            your_impact=np.mean([p.your_impact for p in points]).item(),
            team_impact=np.mean([p.team_impact for p in points]).item(),
        )
    )

    logger.debug(
        f"Generated {len(points)} chart points for match {match.match_id} "
        f"(duration={duration_minutes}m, frames={len(timeline.frames)})"
    )
    return points


def split_average_point(points: list[ChartPoint]) -> tuple[list[ChartPoint], ChartPoint | None]:
    """Separate the chart series from the average sentinel.

    UI layers chart the series only; the sentinel feeds outcome classification.
    """
    series = [p for p in points if not p.is_average]
    average = next((p for p in points if p.is_average), None)
    return series, average
