"""Shared fixtures for riftimpact tests.

Builders produce Riot-shaped (camelCase) payloads validated into contracts,
so tests exercise the same parsing path as live data.

Standard roster: participants 1-5 on team 100 (``puuid-1`` .. ``puuid-5``),
participants 6-10 on team 200. ``puuid-1`` is the tracked player.
"""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from riftimpact.contracts.match import Match
from riftimpact.contracts.timeline import MatchTimeline

TRACKED_PUUID = "puuid-1"

# (minute, killer_id, victim_id, assisting ids)
KillSpec = tuple[int, int, int, Iterable[int]]


def build_match_payload(
    match_id: str = "NA1_1000",
    duration_seconds: int = 1860,
    blue_win: bool = True,
) -> dict[str, Any]:
    participants = [
        {
            "puuid": f"puuid-{pid}",
            "participantId": pid,
            "teamId": 100 if pid <= 5 else 200,
            "summonerName": f"Summoner{pid}",
            "riotIdGameName": f"Player{pid}",
            "riotIdTagline": "NA1",
            "championName": "Ahri" if pid == 1 else f"Champ{pid}",
            "teamPosition": "MIDDLE",
            "kills": 7 if pid == 1 else 1,
            "deaths": 2,
            "assists": 11 if pid == 1 else 3,
            "win": blue_win if pid <= 5 else not blue_win,
            "someNewPatchField": {"ignored": True},
        }
        for pid in range(1, 11)
    ]
    return {
        "metadata": {
            "matchId": match_id,
            "participants": [p["puuid"] for p in participants],
        },
        "info": {
            "gameDuration": duration_seconds,
            "gameId": 1000,
            "gameMode": "CLASSIC",
            "queueId": 420,
            "participants": participants,
            "teams": [
                {"teamId": 100, "win": blue_win},
                {"teamId": 200, "win": not blue_win},
            ],
        },
    }


def build_timeline_payload(
    match_id: str = "NA1_1000",
    frame_count: int = 32,
    kills: Iterable[KillSpec] = (),
) -> dict[str, Any]:
    events_by_minute: dict[int, list[dict[str, Any]]] = {}
    for minute, killer, victim, assists in kills:
        events_by_minute.setdefault(minute, []).append(
            {
                "type": "CHAMPION_KILL",
                "timestamp": minute * 60000 - 1500,
                "killerId": killer,
                "victimId": victim,
                "assistingParticipantIds": list(assists),
            }
        )

    frames = []
    for i in range(frame_count):
        events: list[dict[str, Any]] = [
            {"type": "WARD_PLACED", "timestamp": i * 60000, "creatorId": 1}
        ]
        events.extend(events_by_minute.get(i, []))
        frames.append(
            {
                "timestamp": i * 60000,
                "participantFrames": {
                    str(pid): {
                        "participantId": pid,
                        "currentGold": 100,
                        "totalGold": 500 + i * 300,
                        "level": min(18, 1 + i // 2),
                        "minionsKilled": i * 7,
                        "jungleMinionsKilled": i if pid == 1 else 0,
                        "damageStats": {"totalDamageDoneToChampions": i * 100},
                    }
                    for pid in range(1, 11)
                },
                "events": events,
            }
        )
    return {
        "metadata": {"matchId": match_id},
        "info": {"frameInterval": 60000, "frames": frames},
    }


@pytest.fixture
def make_match() -> Callable[..., Match]:
    def _make(**kwargs: Any) -> Match:
        return Match.model_validate(build_match_payload(**kwargs))

    return _make


@pytest.fixture
def make_timeline() -> Callable[..., MatchTimeline]:
    def _make(**kwargs: Any) -> MatchTimeline:
        return MatchTimeline.model_validate(build_timeline_payload(**kwargs))

    return _make


class FakeClock:
    """Manually advanced UTC clock for cache freshness tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
