# nfl_hq/standings/calculator.py
"""Pure reductions from a schedule to records. No I/O happens here."""

from typing import Dict, Iterable, List, Mapping

from nfl_hq.models.enums import GameResult
from nfl_hq.models.game import ScheduledGame
from nfl_hq.models.standing import DetailedStats, TeamRecord
from nfl_hq.models.team import Team

_RESULT_DELTAS = {
    GameResult.WIN: TeamRecord(wins=1),
    GameResult.LOSS: TeamRecord(losses=1),
    GameResult.TIE: TeamRecord(ties=1),
}


def completed_regular_season_games(games: Iterable[ScheduledGame]) -> List[ScheduledGame]:
    return [game for game in games if game.is_regular_season and game.is_completed]


def calculate_record(games: Iterable[ScheduledGame]) -> TeamRecord:
    """Counts wins, losses and ties over completed regular season games."""
    counted = completed_regular_season_games(games)
    return TeamRecord(
        wins=sum(1 for game in counted if game.result == GameResult.WIN),
        losses=sum(1 for game in counted if game.result == GameResult.LOSS),
        ties=sum(1 for game in counted if game.result == GameResult.TIE),
    )


def calculate_win_percentage(record: TeamRecord) -> float:
    """(wins + 0.5 * ties) / games played, or 0 when no games were played."""
    return record.win_percentage


def format_record(record: TeamRecord) -> str:
    return record.record_string


def _streak(results: List[GameResult]) -> str:
    if not results:
        return "-"
    last = results[-1]
    count = 0
    for result in reversed(results):
        if result != last:
            break
        count += 1
    return f"{last.value}{count}"


def _last10(results: List[GameResult]) -> str:
    recent = results[-10:]
    wins = sum(1 for r in recent if r == GameResult.WIN)
    losses = sum(1 for r in recent if r == GameResult.LOSS)
    return f"{wins}-{losses}"


def calculate_detailed_stats(
    team: Team, games: Iterable[ScheduledGame], teams: Mapping[str, Team]
) -> DetailedStats:
    """Split records, streak and opponent bookkeeping for tie-breakers.

    Games are processed in schedule order. Opponents missing from ``teams``
    still count toward home/away and head-to-head, but not toward the
    conference or division splits.
    """
    home = away = conference = division = TeamRecord()
    head_to_head: Dict[str, TeamRecord] = {}
    opponents_beaten: List[str] = []
    all_opponents: List[str] = []
    results: List[GameResult] = []

    for game in completed_regular_season_games(games):
        delta = _RESULT_DELTAS[game.result]
        results.append(game.result)

        if game.opponent not in head_to_head:
            head_to_head[game.opponent] = TeamRecord()
            all_opponents.append(game.opponent)
        head_to_head[game.opponent] = head_to_head[game.opponent] + delta
        if game.result == GameResult.WIN:
            opponents_beaten.append(game.opponent)

        if game.is_home:
            home = home + delta
        else:
            away = away + delta

        opponent = teams.get(game.opponent)
        if opponent is not None:
            if opponent.conference == team.conference:
                conference = conference + delta
            if opponent.division == team.division:
                division = division + delta

    return DetailedStats(
        home=home,
        away=away,
        conference=conference,
        division=division,
        streak=_streak(results),
        last10=_last10(results),
        head_to_head=head_to_head,
        opponents_beaten=opponents_beaten,
        all_opponents=all_opponents,
    )
