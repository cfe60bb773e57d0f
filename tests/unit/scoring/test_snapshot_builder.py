"""Unit tests for per-minute snapshot reconstruction.

Pure domain logic: contracts in, snapshots out. No mocking.
"""

import pytest

from riftimpact.core.scoring.models import TeamSide
from riftimpact.core.scoring.snapshot import build_snapshot, team_kills


class TestBuildSnapshot:
    def test_counts_kills_deaths_and_assists_up_to_minute(self, make_match, make_timeline):
        match = make_match()
        timeline = make_timeline(
            kills=[(2, 1, 6, [2, 3]), (4, 6, 1, [7]), (8, 1, 7, [])],
        )

        snapshot = build_snapshot(5, match, timeline, tracked_team_id=100)

        assert snapshot[1].kills == 1
        assert snapshot[1].deaths == 1
        assert snapshot[6].kills == 1
        assert snapshot[6].deaths == 1
        assert snapshot[2].assists == 1
        assert snapshot[3].assists == 1
        assert snapshot[7].assists == 1
        assert snapshot[7].deaths == 0, "Minute 8 kill must not be counted at minute 5"

    def test_classifies_teams_relative_to_tracked_team(self, make_match, make_timeline):
        snapshot = build_snapshot(1, make_match(), make_timeline(), tracked_team_id=200)

        assert len(snapshot) == 10
        assert all(snapshot[pid].team is TeamSide.ENEMY for pid in range(1, 6))
        assert all(snapshot[pid].team is TeamSide.ALLY for pid in range(6, 11))

    def test_minute_past_last_frame_is_clamped(self, make_match, make_timeline):
        match = make_match()
        timeline = make_timeline(frame_count=6, kills=[(5, 1, 6, [])])

        clamped = build_snapshot(40, match, timeline, tracked_team_id=100)
        last = build_snapshot(5, match, timeline, tracked_team_id=100)

        assert clamped[1].kills == last[1].kills == 1

    def test_frame_zero_is_never_walked(self, make_match, make_timeline):
        match = make_match()
        timeline = make_timeline(kills=[(0, 1, 6, [])])

        snapshot = build_snapshot(3, match, timeline, tracked_team_id=100)

        assert snapshot[1].kills == 0

    def test_non_champion_killer_counts_only_the_death(self, make_match, make_timeline):
        match = make_match()
        # killerId 0 is a tower/minion execute
        timeline = make_timeline(kills=[(3, 0, 1, [])])

        snapshot = build_snapshot(3, match, timeline, tracked_team_id=100)

        assert snapshot[1].deaths == 1
        assert sum(s.kills for s in snapshot.values()) == 0

    def test_unknown_participant_ids_are_ignored(self, make_match, make_timeline):
        match = make_match()
        timeline = make_timeline(kills=[(3, 42, 43, [44, 1])])

        snapshot = build_snapshot(3, match, timeline, tracked_team_id=100)

        assert set(snapshot) == set(range(1, 11))
        assert snapshot[1].assists == 1

    def test_tracks_latest_frame_economy(self, make_match, make_timeline):
        snapshot = build_snapshot(10, make_match(), make_timeline(), tracked_team_id=100)

        assert snapshot[1].gold == 500 + 10 * 300
        assert snapshot[1].creep_score == 10 * 7 + 10
        assert snapshot[2].creep_score == 10 * 7
        assert snapshot[1].damage_to_champions == 1000

    def test_missing_tracked_team_returns_empty(self, make_match, make_timeline):
        snapshot = build_snapshot(5, make_match(), make_timeline(), tracked_team_id=300)

        assert snapshot == {}

    @pytest.mark.parametrize("minute", [0, -1])
    def test_rejects_minutes_below_one(self, make_match, make_timeline, minute):
        with pytest.raises(ValueError):
            build_snapshot(minute, make_match(), make_timeline(), tracked_team_id=100)

    def test_calls_do_not_share_state(self, make_match, make_timeline):
        match = make_match()
        timeline = make_timeline(kills=[(2, 1, 6, [])])

        first = build_snapshot(5, match, timeline, tracked_team_id=100)
        first[1].kills = 99
        second = build_snapshot(5, match, timeline, tracked_team_id=100)

        assert second[1].kills == 1


def test_team_kills_sums_by_side(make_match, make_timeline):
    timeline = make_timeline(kills=[(2, 1, 6, []), (3, 2, 7, []), (4, 8, 3, [])])

    snapshot = build_snapshot(5, make_match(), timeline, tracked_team_id=100)

    assert team_kills(snapshot, TeamSide.ALLY) == 2
    assert team_kills(snapshot, TeamSide.ENEMY) == 1
