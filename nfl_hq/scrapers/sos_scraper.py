# nfl_hq/scrapers/sos_scraper.py

from typing import Any, Dict, List, Optional

from loguru import logger

from nfl_hq.config.settings import settings
from .base_scraper import BaseScraper

# Column layout of the draft order sheet (row 0 is the header)
SOS_COLUMN = 8
TEAM_SLUG_COLUMN = 11


def parse_sos_rows(rows: List[List[Any]]) -> Dict[str, float]:
    """Maps team slug to strength of schedule. The first row seen for a slug wins."""
    if not isinstance(rows, list):
        raise TypeError("draft order sheet is not a list of rows")

    sos_by_team: Dict[str, float] = {}
    for row in rows[1:]:
        if not isinstance(row, list) or len(row) <= TEAM_SLUG_COLUMN:
            continue
        team_slug = row[TEAM_SLUG_COLUMN]
        try:
            sos = float(row[SOS_COLUMN])
        except (TypeError, ValueError):
            continue
        if team_slug and team_slug not in sos_by_team:
            sos_by_team[team_slug] = sos
    return sos_by_team


class StrengthOfScheduleScraper(BaseScraper):
    """Reads strength of schedule per team from the draft order sheet."""

    source_name: str = "Sportskeeda draft order"

    def __init__(self, *args, url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.url = url or settings.sos_url

    async def fetch_strength_of_schedule(self) -> Dict[str, float]:
        """Returns {team slug: sos}; an empty mapping when the sheet is unavailable."""
        try:
            sos_by_team = await self._get_json(self.url, parse=parse_sos_rows)
        except Exception as e:
            logger.error(f"Failed to fetch strength of schedule data: {e!r}")
            return {}

        logger.info(f"Loaded strength of schedule for {len(sos_by_team)} teams")
        return sos_by_team
