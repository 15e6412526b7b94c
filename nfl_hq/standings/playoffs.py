# nfl_hq/standings/playoffs.py

from functools import cmp_to_key
from typing import Dict, List, Mapping

from nfl_hq.models.enums import Conference, Division, SeedType
from nfl_hq.models.standing import (
    ConferencePlayoffs,
    PlayoffSeed,
    TeamRecord,
    TeamStanding,
)

DIVISION_WINNER_SEEDS = 4
WILD_CARD_SEEDS = 3
MIN_COMMON_OPPONENTS = 4


def _prefer_higher(a: float, b: float) -> int:
    if a == b:
        return 0
    return -1 if a > b else 1


def _common_games_record(team: TeamStanding, opponents: List[str]) -> TeamRecord:
    combined = TeamRecord()
    for opponent_id in opponents:
        h2h = team.stats.head_to_head.get(opponent_id)
        if h2h is not None:
            combined = combined + h2h
    return combined


def compare_for_seeding(
    a: TeamStanding, b: TeamStanding, use_common_games: bool = True
) -> int:
    """Orders two teams for seeding; negative means ``a`` is seeded ahead."""
    result = _prefer_higher(a.win_percentage, b.win_percentage)
    if result:
        return result

    h2h = a.stats.head_to_head.get(b.team_id)
    if h2h is not None and h2h.games_played > 0:
        a_pct = h2h.win_percentage
        result = _prefer_higher(a_pct, 1 - a_pct)
        if result:
            return result

    result = _prefer_higher(
        a.stats.conference.win_percentage, b.stats.conference.win_percentage
    )
    if result:
        return result

    if use_common_games:
        b_opponents = set(b.stats.all_opponents)
        common = [opp for opp in a.stats.all_opponents if opp in b_opponents]
        if len(common) >= MIN_COMMON_OPPONENTS:
            a_common = _common_games_record(a, common)
            b_common = _common_games_record(b, common)
            if a_common.games_played and b_common.games_played:
                result = _prefer_higher(
                    a_common.win_percentage, b_common.win_percentage
                )
                if result:
                    return result

    result = _prefer_higher(a.strength_of_victory, b.strength_of_victory)
    if result:
        return result

    # Lower strength of schedule ranks ahead; zero means unknown
    if a.strength_of_schedule and b.strength_of_schedule:
        result = -_prefer_higher(a.strength_of_schedule, b.strength_of_schedule)
        if result:
            return result

    result = _prefer_higher(a.record.wins, b.record.wins)
    if result:
        return result
    return -_prefer_higher(a.record.losses, b.record.losses)


def _division_winner_key(a: TeamStanding, b: TeamStanding) -> int:
    return compare_for_seeding(a, b, use_common_games=False)


def calculate_conference_playoffs(
    conference: Conference, divisions: Mapping[str, List[TeamStanding]]
) -> ConferencePlayoffs:
    """Seeds 1-4 go to division winners, 5-7 to the best remaining teams."""
    division_winners: List[TeamStanding] = []
    wild_card_candidates: List[TeamStanding] = []
    for division in Division:
        if division.conference != conference:
            continue
        ranked = divisions.get(division.value) or []
        if ranked:
            division_winners.append(ranked[0])
            wild_card_candidates.extend(ranked[1:])

    seeded_winners = sorted(division_winners, key=cmp_to_key(_division_winner_key))
    wild_cards = sorted(wild_card_candidates, key=cmp_to_key(compare_for_seeding))

    seeds = [
        PlayoffSeed(seed=index, team=team, seed_type=SeedType.DIVISION_WINNER)
        for index, team in enumerate(seeded_winners[:DIVISION_WINNER_SEEDS], start=1)
    ]
    seeds.extend(
        PlayoffSeed(seed=index, team=team, seed_type=SeedType.WILD_CARD)
        for index, team in enumerate(
            wild_cards[:WILD_CARD_SEEDS], start=DIVISION_WINNER_SEEDS + 1
        )
    )
    return ConferencePlayoffs(seeds=seeds)


def calculate_playoff_picture(
    divisions: Mapping[str, List[TeamStanding]],
) -> Dict[str, ConferencePlayoffs]:
    return {
        conference.value.lower(): calculate_conference_playoffs(conference, divisions)
        for conference in Conference
    }
