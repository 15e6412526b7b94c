from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import EventType, GameResult


class GameScore(BaseModel):
    """Final score seen from the scheduled team's side."""

    model_config = ConfigDict(frozen=True)

    team: int
    opponent: int


class ScheduledGame(BaseModel):
    """A single entry of a team's schedule as reported upstream."""

    model_config = ConfigDict(frozen=True)

    week: Union[int, str]
    opponent: str  # Opponent team slug
    event_type: int = EventType.REGULAR_SEASON
    result: Optional[GameResult] = None  # None until the game is final
    date: Optional[datetime] = None
    opponent_abbr: Optional[str] = None
    is_home: Optional[bool] = None
    score: Optional[GameScore] = None
    tv: Optional[str] = None
    venue: Optional[str] = None

    @property
    def is_regular_season(self) -> bool:
        return self.event_type == EventType.REGULAR_SEASON

    @property
    def is_completed(self) -> bool:
        return self.result is not None


class Schedule(BaseModel):
    """A team's game list together with whether the fetch actually succeeded."""

    team_id: str
    games: List[ScheduledGame] = Field(default_factory=list)
    available: bool = True

    @classmethod
    def unavailable(cls, team_id: str) -> "Schedule":
        """The "no data" result returned once every attempt has failed."""
        return cls(team_id=team_id, games=[], available=False)
