# nfl_hq/models/team.py
from pydantic import BaseModel, ConfigDict

from .enums import Conference, Division


class Team(BaseModel):
    """Static reference data for one franchise."""

    model_config = ConfigDict(frozen=True)

    id: str  # URL slug, e.g. "buffalo-bills"
    name: str
    city: str
    full_name: str
    abbreviation: str
    conference: Conference
    division: Division
    sportskeeda_id: int
