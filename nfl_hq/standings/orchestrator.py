# nfl_hq/standings/orchestrator.py

import asyncio
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from nfl_hq.config.settings import settings
from nfl_hq.models.enums import RecordStatus
from nfl_hq.models.standing import TeamRecord, TeamStanding
from nfl_hq.models.team import Team
from nfl_hq.scrapers.schedule_scraper import ScheduleScraper
from nfl_hq.utils.retry import SleepFn
from .calculator import calculate_detailed_stats, calculate_record


def _standing(team: Team, **fields) -> TeamStanding:
    return TeamStanding(
        team_id=team.id,
        full_name=team.full_name,
        abbreviation=team.abbreviation,
        conference=team.conference,
        division=team.division,
        **fields,
    )


def degraded_standing(team: Team) -> TeamStanding:
    """0-0-0 placeholder for a team whose schedule could not be obtained."""
    return _standing(team, record=TeamRecord(), record_status=RecordStatus.UNKNOWN)


class BatchOrchestrator:
    """Computes a TeamStanding per team, a fixed-size batch at a time.

    Teams inside a batch are fetched concurrently; the next batch starts only
    after every team of the current one has settled, following a short pause.
    """

    def __init__(
        self,
        scraper: ScheduleScraper,
        batch_size: Optional[int] = None,
        batch_delay: Optional[float] = None,
        sleep: Optional[SleepFn] = None,
    ):
        self.scraper = scraper
        self.batch_size = batch_size or settings.batch_size
        self.batch_delay = (
            batch_delay if batch_delay is not None else settings.batch_delay_seconds
        )
        self._sleep = sleep or asyncio.sleep

    async def compute_team_standing(
        self, team: Team, teams_by_id: Mapping[str, Team]
    ) -> TeamStanding:
        """Opponents are resolved against ``teams_by_id`` for the split records."""
        schedule = await self.scraper.fetch_schedule(team)
        if not schedule.available:
            return degraded_standing(team)

        record = calculate_record(schedule.games)
        stats = calculate_detailed_stats(team, schedule.games, teams_by_id)
        status = RecordStatus.REAL if record.games_played else RecordStatus.NO_GAMES
        return _standing(team, record=record, record_status=status, stats=stats)

    async def _safe_compute(
        self, team: Team, teams_by_id: Mapping[str, Team]
    ) -> TeamStanding:
        try:
            return await self.compute_team_standing(team, teams_by_id)
        except Exception as e:
            logger.warning(f"Degrading {team.id} to 0-0-0 after error: {e!r}")
            return degraded_standing(team)

    async def compute_standings(self, teams: Sequence[Team]) -> List[TeamStanding]:
        """Returns one standing per team. Order is not meaningful."""
        results: List[TeamStanding] = []
        teams_by_id: Dict[str, Team] = {team.id: team for team in teams}
        batches = [
            teams[i : i + self.batch_size]
            for i in range(0, len(teams), self.batch_size)
        ]

        for index, batch in enumerate(batches, start=1):
            logger.debug(f"Processing batch {index}/{len(batches)} ({len(batch)} teams)")
            batch_results = await asyncio.gather(
                *(self._safe_compute(team, teams_by_id) for team in batch)
            )
            results.extend(batch_results)

            if index < len(batches):
                await self._sleep(self.batch_delay)

        degraded = sum(1 for s in results if s.record_status == RecordStatus.UNKNOWN)
        if degraded:
            logger.warning(f"{degraded} of {len(results)} teams degraded to 0-0-0")
        logger.info(f"Computed records for {len(results)} teams in {len(batches)} batches")
        return results
