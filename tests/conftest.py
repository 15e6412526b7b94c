"""Shared fixtures and fakes for the standings tests."""

from typing import Callable, Dict, List, Optional

import httpx
import pytest

from nfl_hq.data.teams import TEAMS
from nfl_hq.models.enums import EventType, GameResult, RecordStatus
from nfl_hq.models.game import ScheduledGame, Schedule
from nfl_hq.models.standing import DetailedStats, TeamRecord, TeamStanding
from nfl_hq.models.team import Team
from nfl_hq.utils.retry import RetryPolicy


class SleepRecorder:
    """Async sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeScheduleScraper:
    """Stands in for ScheduleScraper; serves canned schedules and counts calls."""

    def __init__(
        self,
        schedules: Optional[Dict[str, List[ScheduledGame]]] = None,
        unavailable: tuple = (),
        raising: tuple = (),
    ):
        self.schedules = schedules or {}
        self.unavailable = set(unavailable)
        self.raising = set(raising)
        self.calls: List[str] = []
        self.closed = False

    async def fetch_schedule(self, team: Team) -> Schedule:
        self.calls.append(team.id)
        if team.id in self.raising:
            raise RuntimeError(f"boom for {team.id}")
        if team.id in self.unavailable:
            return Schedule.unavailable(team.id)
        return Schedule(team_id=team.id, games=self.schedules.get(team.id, []))

    async def close(self):
        self.closed = True


class FakeSosScraper:
    def __init__(self, sos: Optional[Dict[str, float]] = None):
        self.sos = sos or {}
        self.calls = 0

    async def fetch_strength_of_schedule(self) -> Dict[str, float]:
        self.calls += 1
        return dict(self.sos)

    async def close(self):
        pass


def game(
    opponent: str,
    result: Optional[GameResult],
    week: int = 1,
    event_type: int = EventType.REGULAR_SEASON,
    is_home: Optional[bool] = True,
) -> ScheduledGame:
    return ScheduledGame(
        week=week,
        opponent=opponent,
        event_type=event_type,
        result=result,
        is_home=is_home,
    )


def standing(
    team_id: str,
    wins: int = 0,
    losses: int = 0,
    ties: int = 0,
    stats: Optional[DetailedStats] = None,
    **fields,
) -> TeamStanding:
    team = TEAMS[team_id]
    return TeamStanding(
        team_id=team.id,
        full_name=team.full_name,
        abbreviation=team.abbreviation,
        conference=team.conference,
        division=team.division,
        record=TeamRecord(wins=wins, losses=losses, ties=ties),
        record_status=RecordStatus.REAL if wins + losses + ties else RecordStatus.NO_GAMES,
        stats=stats or DetailedStats(),
        **fields,
    )


def sportskeeda_game(
    team_id: int,
    opponent_id: int,
    team_score: Optional[int] = None,
    opponent_score: Optional[int] = None,
    event_type: int = 1,
    status: str = "Final",
    home: bool = True,
    week: int = 1,
    opponent_slug: Optional[str] = None,
) -> dict:
    """Builds one game in the upstream schedule JSON shape."""
    team_entry = {
        "team_id": team_id,
        "location_type": "home" if home else "away",
        "team_slug": "self",
    }
    opponent_entry = {
        "team_id": opponent_id,
        "location_type": "away" if home else "home",
        "abbr": "OPP",
    }
    if opponent_slug:
        opponent_entry["team_slug"] = opponent_slug
    if team_score is not None:
        team_entry["score"] = team_score
        team_entry["is_winner"] = team_score > (opponent_score or 0)
    if opponent_score is not None:
        opponent_entry["score"] = opponent_score
        opponent_entry["is_winner"] = opponent_score > (team_score or 0)
    return {
        "event_id": 1000 + week,
        "event_type": event_type,
        "week": week,
        "status": status,
        "start_date": {"full": "2025-09-07T17:00:00Z"},
        "teams": [team_entry, opponent_entry],
        "venue": {"venue_name": "Highmark Stadium"},
        "tv_stations": ["CBS"],
    }


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(max_retries=2, base_delay=1.0, multiplier=2.0)
