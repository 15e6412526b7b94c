"""Tests for batched fan-out and per-team degradation."""

import asyncio

from conftest import FakeScheduleScraper, game

from nfl_hq.data.teams import TEAMS, get_all_teams
from nfl_hq.models.enums import Conference, Division, GameResult, RecordStatus
from nfl_hq.models.standing import TeamRecord
from nfl_hq.models.team import Team
from nfl_hq.standings.orchestrator import BatchOrchestrator


class ConcurrencyTracker(FakeScheduleScraper):
    """Tracks how many fetches are in flight at once."""

    def __init__(self):
        super().__init__()
        self.in_flight = 0
        self.peak = 0

    async def fetch_schedule(self, team):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0)
        try:
            return await super().fetch_schedule(team)
        finally:
            self.in_flight -= 1


class TestBatchOrchestrator:
    def test_batches_and_delays(self, sleep_recorder):
        tracker = ConcurrencyTracker()
        orchestrator = BatchOrchestrator(
            tracker, batch_size=8, batch_delay=0.1, sleep=sleep_recorder
        )
        standings = asyncio.run(orchestrator.compute_standings(get_all_teams()))

        assert len(standings) == 32
        assert sorted(tracker.calls) == sorted(t.id for t in get_all_teams())
        # Four batches, a pause between each pair, none after the last
        assert sleep_recorder.calls == [0.1, 0.1, 0.1]
        assert tracker.peak == 8

    def test_records_and_status(self, sleep_recorder):
        scraper = FakeScheduleScraper(
            schedules={
                "buffalo-bills": [
                    game("miami-dolphins", GameResult.WIN, week=1),
                    game("new-york-jets", GameResult.LOSS, week=2),
                ],
                "miami-dolphins": [game("buffalo-bills", None, week=1)],
            }
        )
        orchestrator = BatchOrchestrator(scraper, sleep=sleep_recorder)
        standings = {s.team_id: s for s in asyncio.run(orchestrator.compute_standings(get_all_teams()))}

        bills = standings["buffalo-bills"]
        assert bills.record == TeamRecord(wins=1, losses=1)
        assert bills.record_status == RecordStatus.REAL
        assert bills.record_string == "1-1-0"
        assert bills.win_percentage == 0.5
        assert bills.division_rank == ""

        assert standings["miami-dolphins"].record_status == RecordStatus.NO_GAMES

    def test_unavailable_schedule_degrades_to_zero(self, sleep_recorder):
        scraper = FakeScheduleScraper(unavailable=("buffalo-bills",))
        orchestrator = BatchOrchestrator(scraper, sleep=sleep_recorder)
        standings = {s.team_id: s for s in asyncio.run(orchestrator.compute_standings(get_all_teams()))}

        assert len(standings) == 32
        assert standings["buffalo-bills"].record == TeamRecord()
        assert standings["buffalo-bills"].record_status == RecordStatus.UNKNOWN

    def test_unexpected_team_error_does_not_abort_batch(self, sleep_recorder):
        scraper = FakeScheduleScraper(raising=("dallas-cowboys",))
        orchestrator = BatchOrchestrator(scraper, sleep=sleep_recorder)
        standings = asyncio.run(orchestrator.compute_standings(get_all_teams()))

        assert len(standings) == 32
        cowboys = next(s for s in standings if s.team_id == "dallas-cowboys")
        assert cowboys.record_string == "0-0-0"
        assert cowboys.record_status == RecordStatus.UNKNOWN

    def test_partial_last_batch(self, sleep_recorder):
        scraper = FakeScheduleScraper()
        orchestrator = BatchOrchestrator(scraper, batch_size=5, sleep=sleep_recorder)
        standings = asyncio.run(orchestrator.compute_standings(get_all_teams()[:12]))

        assert len(standings) == 12
        assert len(sleep_recorder.calls) == 2

    def test_splits_follow_the_given_team_list(self, sleep_recorder):
        monarchs = Team(
            id="london-monarchs",
            name="Monarchs",
            city="London",
            full_name="London Monarchs",
            abbreviation="LON",
            conference=Conference.AFC,
            division=Division.AFC_EAST,
            sportskeeda_id=9001,
        )
        # Moved out of the AFC for this run only
        jets = TEAMS["new-york-jets"].model_copy(
            update={"conference": Conference.NFC, "division": Division.NFC_EAST}
        )
        scraper = FakeScheduleScraper(
            schedules={
                "buffalo-bills": [
                    game("london-monarchs", GameResult.WIN, week=1),
                    game("new-york-jets", GameResult.LOSS, week=2),
                ],
            }
        )
        orchestrator = BatchOrchestrator(scraper, sleep=sleep_recorder)
        teams = [TEAMS["buffalo-bills"], jets, monarchs]
        standings = {s.team_id: s for s in asyncio.run(orchestrator.compute_standings(teams))}

        stats = standings["buffalo-bills"].stats
        assert stats.division == TeamRecord(wins=1)
        assert stats.conference == TeamRecord(wins=1)
        assert standings["new-york-jets"].division == Division.NFC_EAST
