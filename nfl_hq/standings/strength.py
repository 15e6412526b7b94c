# nfl_hq/standings/strength.py

from typing import Dict, List, Mapping

from nfl_hq.models.standing import TeamRecord, TeamStanding


def strength_of_victory(
    standing: TeamStanding, records_by_team: Mapping[str, TeamRecord]
) -> float:
    """Combined win percentage of the opponents this team beat, once per win.

    Opponents without a known record are skipped. Ties count as half a win.
    """
    combined = TeamRecord()
    for opponent_id in standing.stats.opponents_beaten:
        opponent_record = records_by_team.get(opponent_id)
        if opponent_record is not None:
            combined = combined + opponent_record
    return combined.win_percentage


def apply_strength_metrics(
    standings: List[TeamStanding], sos_by_team: Mapping[str, float]
) -> List[TeamStanding]:
    """Returns new standings carrying strength of schedule and of victory."""
    records_by_team: Dict[str, TeamRecord] = {s.team_id: s.record for s in standings}
    return [
        standing.model_copy(
            update={
                "strength_of_schedule": sos_by_team.get(standing.team_id, 0.0),
                "strength_of_victory": strength_of_victory(standing, records_by_team),
            }
        )
        for standing in standings
    ]
