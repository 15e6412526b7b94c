# nfl_hq/standings/ranker.py

from typing import Dict, List, Tuple

from nfl_hq.models.enums import Division
from nfl_hq.models.standing import TeamStanding

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}


def format_ordinal(rank: int) -> str:
    """Division rank label. Only 1-4 have their own suffix; 11 is "11th"."""
    return _ORDINALS.get(rank, f"{rank}th")


def division_sort_key(standing: TeamStanding) -> Tuple[float, int, int]:
    # win% desc, wins desc, losses asc
    return (-standing.win_percentage, -standing.record.wins, standing.record.losses)


def rank_division(standings: List[TeamStanding]) -> List[TeamStanding]:
    """Sorts one division and returns ranked copies.

    The sort is stable: teams equal on every key (e.g. all 0-0-0 before the
    season starts) keep their input order.
    """
    ordered = sorted(standings, key=division_sort_key)
    return [
        standing.model_copy(update={"division_rank": format_ordinal(position)})
        for position, standing in enumerate(ordered, start=1)
    ]


def rank_divisions(
    standings: List[TeamStanding],
) -> Tuple[Dict[str, List[TeamStanding]], List[TeamStanding]]:
    """Groups by division and ranks each group.

    Returns the division map (keyed by division name, in league order) and
    the flat list of ranked standings in the same grouping order.
    """
    grouped: Dict[Division, List[TeamStanding]] = {}
    for standing in standings:
        grouped.setdefault(standing.division, []).append(standing)

    divisions: Dict[str, List[TeamStanding]] = {}
    flat: List[TeamStanding] = []
    for division in Division:
        if division not in grouped:
            continue
        ranked = rank_division(grouped[division])
        divisions[division.value] = ranked
        flat.extend(ranked)
    return divisions, flat
