"""Per-minute cumulative stats reconstruction from a Match-V5 timeline.

Pure domain logic: no I/O. Every call recomputes from frame 1, so calls for
different minutes never share state.
"""

import logging

from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline
from riftimpact.core.scoring.models import ParticipantSnapshot, TeamSide

logger = logging.getLogger(__name__)

MinuteSnapshot = dict[int, ParticipantSnapshot]
"""Snapshots keyed by participant id."""


def build_snapshot(
    minute: int,
    match: Match,
    timeline: MatchTimeline,
    tracked_team_id: int,
) -> MinuteSnapshot:
    """Reconstruct every participant's cumulative K/D/A as of ``minute``.

    Args:
        minute: Minute boundary (>= 1). Values past the last frame are clamped
            to the last frame index, since the closing minutes of a match may
            not have a full frame.
        match: Match details supplying participants and team ids.
        timeline: Timeline whose frame ``i`` holds the events of minute ``i``.
        tracked_team_id: Team id of the tracked participant; participants on
            it are classified ``ALLY``, everyone else ``ENEMY``.

    Returns:
        Snapshots keyed by participant id, or an empty dict when no
        participant belongs to ``tracked_team_id``.

    Raises:
        ValueError: If ``minute`` is below 1.
    """
    if minute < 1:
        raise ValueError(f"minute must be >= 1, got {minute}")

    participants = match.info.participants
    if not any(p.team_id == tracked_team_id for p in participants):
        logger.warning(
            f"Tracked team {tracked_team_id} not present in match {match.match_id}"
        )
        return {}

    snapshots: MinuteSnapshot = {
        p.participant_id: ParticipantSnapshot(
            participant_id=p.participant_id,
            team=TeamSide.ALLY if p.team_id == tracked_team_id else TeamSide.ENEMY,
        )
        for p in participants
    }

    frames = timeline.frames
    last_minute = min(minute, len(frames) - 1)

    for frame in frames[1 : last_minute + 1]:
        for participant_frame in frame.participant_frames.values():
            stats = snapshots.get(participant_frame.participant_id)
            if stats is not None:
                stats.gold = participant_frame.total_gold
                stats.creep_score = participant_frame.creep_score
                stats.damage_to_champions = (
                    participant_frame.damage_stats.total_damage_done_to_champions
                )

        for event in frame.events:
            if not event.is_champion_kill:
                continue
            victim = snapshots.get(event.victim_id)
            if victim is not None:
                victim.deaths += 1
            killer = snapshots.get(event.killer_id)
            if killer is not None:
                killer.kills += 1
            for assist_id in event.assisting_participant_ids:
                assister = snapshots.get(assist_id)
                if assister is not None:
                    assister.assists += 1

    return snapshots


def team_kills(snapshot: MinuteSnapshot, side: TeamSide) -> int:
    """Total kills credited to one side in a snapshot."""
    return sum(stats.kills for stats in snapshot.values() if stats.team == side)
