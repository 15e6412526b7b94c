# nfl_hq/standings/service.py

from datetime import datetime, timezone
from typing import Callable, List, Optional

from loguru import logger

from nfl_hq.cache.response_cache import ResponseCache
from nfl_hq.data.teams import get_all_teams
from nfl_hq.models.standing import StandingsSnapshot
from nfl_hq.models.team import Team
from nfl_hq.scrapers.schedule_scraper import ScheduleScraper
from nfl_hq.scrapers.sos_scraper import StrengthOfScheduleScraper
from .orchestrator import BatchOrchestrator
from .playoffs import calculate_playoff_picture
from .ranker import rank_divisions
from .strength import apply_strength_metrics


class StandingsUnavailableError(Exception):
    """Raised when standings cannot be computed and nothing is cached."""

    pass


def _mark_stale(snapshot: StandingsSnapshot) -> StandingsSnapshot:
    return snapshot.model_copy(update={"is_stale": True})


class StandingsService:
    """Composes the standings pipeline behind a read-through cache.

    ``get_standings`` is the only query. Results are either fresh, served from
    cache within the TTL, or the last good snapshot flagged ``is_stale`` when
    recomputation fails.
    """

    def __init__(
        self,
        schedule_scraper: Optional[ScheduleScraper] = None,
        sos_scraper: Optional[StrengthOfScheduleScraper] = None,
        orchestrator: Optional[BatchOrchestrator] = None,
        cache: Optional[ResponseCache[StandingsSnapshot]] = None,
        team_source: Callable[[], List[Team]] = get_all_teams,
    ):
        self.schedule_scraper = schedule_scraper or ScheduleScraper()
        self.sos_scraper = sos_scraper or StrengthOfScheduleScraper()
        self.orchestrator = orchestrator or BatchOrchestrator(self.schedule_scraper)
        self.cache = cache if cache is not None else ResponseCache(name="standings")
        self.team_source = team_source

    async def compute_snapshot(self) -> StandingsSnapshot:
        """Runs the full pipeline once, bypassing the cache."""
        teams = self.team_source()
        if not teams:
            raise StandingsUnavailableError("Team reference store returned no teams")

        standings = await self.orchestrator.compute_standings(teams)
        sos_by_team = await self.sos_scraper.fetch_strength_of_schedule()
        standings = apply_strength_metrics(standings, sos_by_team)
        divisions, flat = rank_divisions(standings)

        snapshot = StandingsSnapshot(
            standings=flat,
            divisions=divisions,
            playoff_picture=calculate_playoff_picture(divisions),
            last_updated=datetime.now(timezone.utc),
        )
        logger.success(
            f"Standings computed for {len(flat)} teams across {len(divisions)} divisions"
        )
        return snapshot

    async def get_standings(self) -> StandingsSnapshot:
        """Current standings: fresh, cached, or the last good snapshot marked stale."""
        try:
            return await self.cache.read_through(
                self.compute_snapshot, on_fallback=_mark_stale
            )
        except StandingsUnavailableError:
            raise
        except Exception as e:
            logger.exception("Standings pipeline failed with no cached fallback")
            raise StandingsUnavailableError("Failed to fetch standings data") from e

    async def close(self):
        await self.schedule_scraper.close()
        await self.sos_scraper.close()
