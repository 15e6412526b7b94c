from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .enums import Conference, Division, RecordStatus, SeedType


class _CamelModel(BaseModel):
    """Base for models serialized into the public standings payload."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class TeamRecord(_CamelModel):
    """Won-lost-tied counts. Ties count as half a win toward the percentage."""

    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    ties: int = Field(0, ge=0)

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        if self.games_played == 0:
            return 0.0
        return (self.wins + self.ties * 0.5) / self.games_played

    @property
    def record_string(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ties}"

    def split_string(self) -> str:
        """Short form used for splits: ties are only shown when there are any."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    def __add__(self, other: "TeamRecord") -> "TeamRecord":
        return TeamRecord(
            wins=self.wins + other.wins,
            losses=self.losses + other.losses,
            ties=self.ties + other.ties,
        )


class DetailedStats(_CamelModel):
    """Split records and streak information derived from one schedule."""

    home: TeamRecord = TeamRecord()
    away: TeamRecord = TeamRecord()
    conference: TeamRecord = TeamRecord()
    division: TeamRecord = TeamRecord()
    streak: str = "-"
    last10: str = "0-0"
    head_to_head: Dict[str, TeamRecord] = Field(default_factory=dict)
    opponents_beaten: List[str] = Field(default_factory=list)
    all_opponents: List[str] = Field(default_factory=list)


class TeamStanding(_CamelModel):
    """One team's row in the standings. Replaced wholesale, never mutated."""

    team_id: str
    full_name: str
    abbreviation: str
    conference: Conference
    division: Division
    record: TeamRecord
    record_status: RecordStatus = RecordStatus.REAL
    division_rank: str = ""
    stats: DetailedStats = DetailedStats()
    strength_of_schedule: float = 0.0
    strength_of_victory: float = 0.0

    @computed_field(alias="recordString")  # type: ignore[misc]
    @property
    def record_string(self) -> str:
        return self.record.record_string

    @computed_field(alias="winPercentage")  # type: ignore[misc]
    @property
    def win_percentage(self) -> float:
        return self.record.win_percentage

    @computed_field(alias="homeRecord")  # type: ignore[misc]
    @property
    def home_record(self) -> str:
        return self.stats.home.split_string()

    @computed_field(alias="awayRecord")  # type: ignore[misc]
    @property
    def away_record(self) -> str:
        return self.stats.away.split_string()

    @computed_field(alias="confRecord")  # type: ignore[misc]
    @property
    def conf_record(self) -> str:
        return self.stats.conference.split_string()

    @computed_field(alias="divRecord")  # type: ignore[misc]
    @property
    def div_record(self) -> str:
        return self.stats.division.split_string()


class PlayoffSeed(_CamelModel):
    seed: int = Field(..., ge=1, le=7)
    team: TeamStanding
    seed_type: SeedType


class ConferencePlayoffs(_CamelModel):
    seeds: List[PlayoffSeed] = Field(default_factory=list)


class StandingsSnapshot(_CamelModel):
    """Full output of one standings computation."""

    standings: List[TeamStanding]
    divisions: Dict[str, List[TeamStanding]]
    playoff_picture: Dict[str, ConferencePlayoffs] = Field(default_factory=dict)
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    is_stale: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using the camelCase keys of the public API."""
        return self.model_dump(mode="json", by_alias=True)
