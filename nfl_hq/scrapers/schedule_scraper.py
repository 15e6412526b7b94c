# nfl_hq/scrapers/schedule_scraper.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from nfl_hq.config.settings import settings
from nfl_hq.data.teams import get_team_by_sportskeeda_id
from nfl_hq.models.enums import EventType, GameResult
from nfl_hq.models.game import GameScore, ScheduledGame, Schedule
from nfl_hq.models.team import Team
from .base_scraper import BaseScraper


def _parse_start_date(raw: Any) -> Optional[datetime]:
    if isinstance(raw, dict):
        raw = raw.get("full")
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def _week_label(event_type: int, week: Any) -> Union[int, str]:
    if event_type == EventType.PRESEASON:
        return f"Pre-{week}"
    if event_type == EventType.POSTSEASON:
        return f"Playoff-{week}"
    return week if week is not None else "TBD"


def _opponent_slug(opponent: Dict[str, Any]) -> str:
    slug = opponent.get("team_slug")
    if slug:
        return slug
    known = get_team_by_sportskeeda_id(opponent.get("team_id"))
    return known.id if known else str(opponent.get("team_id", "unknown"))


def parse_game(raw_game: Dict[str, Any], sportskeeda_id: int) -> Optional[ScheduledGame]:
    """Converts one upstream game into a ScheduledGame seen from ``sportskeeda_id``.

    Returns None when the game does not involve the team. The result is only
    set for games marked Final where both teams carry a numeric score.
    """
    teams = raw_game["teams"]
    team = next((t for t in teams if t.get("team_id") == sportskeeda_id), None)
    opponent = next((t for t in teams if t.get("team_id") != sportskeeda_id), None)
    if team is None or opponent is None:
        return None

    event_type = int(raw_game.get("event_type", EventType.REGULAR_SEASON))
    team_score = team.get("score")
    opponent_score = opponent.get("score")

    result: Optional[GameResult] = None
    score: Optional[GameScore] = None
    if (
        raw_game.get("status") == "Final"
        and isinstance(team_score, (int, float))
        and isinstance(opponent_score, (int, float))
    ):
        score = GameScore(team=int(team_score), opponent=int(opponent_score))
        if team_score == opponent_score:
            result = GameResult.TIE
        elif team.get("is_winner"):
            result = GameResult.WIN
        else:
            result = GameResult.LOSS

    location_type = team.get("location_type")
    venue = raw_game.get("venue") or {}
    tv_stations = raw_game.get("tv_stations") or []

    return ScheduledGame(
        week=_week_label(event_type, raw_game.get("week")),
        date=_parse_start_date(raw_game.get("start_date")),
        opponent=_opponent_slug(opponent),
        opponent_abbr=opponent.get("abbr"),
        is_home=None if location_type is None else location_type == "home",
        event_type=event_type,
        result=result,
        score=score,
        tv=", ".join(tv_stations) or None,
        venue=venue.get("venue_name") if isinstance(venue, dict) else None,
    )


def parse_schedule(payload: Dict[str, Any], sportskeeda_id: int) -> List[ScheduledGame]:
    """Parses the schedule response body. Raises on an unexpected shape."""
    raw_games = payload["schedule"]
    if not isinstance(raw_games, list):
        raise TypeError("'schedule' is not a list")

    games = []
    for raw_game in raw_games:
        game = parse_game(raw_game, sportskeeda_id)
        if game is not None:
            games.append(game)
    return games


class ScheduleScraper(BaseScraper):
    """Fetches per-team season schedules from the Sportskeeda schedule API."""

    source_name: str = "Sportskeeda schedule"

    def __init__(self, *args, season: Optional[int] = None, base_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.season = season or settings.season
        self.base_url = (base_url or settings.schedule_api_base_url).rstrip("/")

    def schedule_url(self) -> str:
        return f"{self.base_url}/{self.season}"

    async def fetch_schedule(self, team: Team) -> Schedule:
        """Returns the team's schedule, or the unavailable sentinel once retries are exhausted."""
        try:
            games = await self._get_json(
                self.schedule_url(),
                params={"team": team.sportskeeda_id},
                parse=lambda payload: parse_schedule(payload, team.sportskeeda_id),
            )
        except Exception as e:
            logger.error(
                f"Schedule for {team.id} unavailable after {self.retry_policy.max_attempts} attempts: {e!r}"
            )
            return Schedule.unavailable(team.id)

        logger.debug(f"Fetched {len(games)} games for {team.id}")
        return Schedule(team_id=team.id, games=games)
