# nfl_hq/data/teams.py
from typing import Dict, List, Optional, Tuple

from nfl_hq.models.enums import Division
from nfl_hq.models.team import Team

# slug: (city, name, abbreviation, division, sportskeeda team id)
_TEAM_ROWS: Dict[str, Tuple[str, str, str, Division, int]] = {
    "arizona-cardinals": ("Arizona", "Cardinals", "ARI", Division.NFC_WEST, 355),
    "atlanta-falcons": ("Atlanta", "Falcons", "ATL", Division.NFC_SOUTH, 323),
    "baltimore-ravens": ("Baltimore", "Ravens", "BAL", Division.AFC_NORTH, 366),
    "buffalo-bills": ("Buffalo", "Bills", "BUF", Division.AFC_EAST, 324),
    "carolina-panthers": ("Carolina", "Panthers", "CAR", Division.NFC_SOUTH, 364),
    "chicago-bears": ("Chicago", "Bears", "CHI", Division.NFC_NORTH, 326),
    "cincinnati-bengals": ("Cincinnati", "Bengals", "CIN", Division.AFC_NORTH, 327),
    "cleveland-browns": ("Cleveland", "Browns", "CLE", Division.AFC_NORTH, 329),
    "dallas-cowboys": ("Dallas", "Cowboys", "DAL", Division.NFC_EAST, 331),
    "denver-broncos": ("Denver", "Broncos", "DEN", Division.AFC_WEST, 332),
    "detroit-lions": ("Detroit", "Lions", "DET", Division.NFC_NORTH, 334),
    "green-bay-packers": ("Green Bay", "Packers", "GB", Division.NFC_NORTH, 335),
    "houston-texans": ("Houston", "Texans", "HOU", Division.AFC_SOUTH, 325),
    "indianapolis-colts": ("Indianapolis", "Colts", "IND", Division.AFC_SOUTH, 338),
    "jacksonville-jaguars": ("Jacksonville", "Jaguars", "JAX", Division.AFC_SOUTH, 365),
    "kansas-city-chiefs": ("Kansas City", "Chiefs", "KC", Division.AFC_WEST, 339),
    "las-vegas-raiders": ("Las Vegas", "Raiders", "LV", Division.AFC_WEST, 341),
    "los-angeles-chargers": ("Los Angeles", "Chargers", "LAC", Division.AFC_WEST, 357),
    "los-angeles-rams": ("Los Angeles", "Rams", "LAR", Division.NFC_WEST, 343),
    "miami-dolphins": ("Miami", "Dolphins", "MIA", Division.AFC_EAST, 345),
    "minnesota-vikings": ("Minnesota", "Vikings", "MIN", Division.NFC_NORTH, 347),
    "new-england-patriots": ("New England", "Patriots", "NE", Division.AFC_EAST, 348),
    "new-orleans-saints": ("New Orleans", "Saints", "NO", Division.NFC_SOUTH, 350),
    "new-york-giants": ("New York", "Giants", "NYG", Division.NFC_EAST, 351),
    "new-york-jets": ("New York", "Jets", "NYJ", Division.AFC_EAST, 352),
    "philadelphia-eagles": ("Philadelphia", "Eagles", "PHI", Division.NFC_EAST, 354),
    "pittsburgh-steelers": ("Pittsburgh", "Steelers", "PIT", Division.AFC_NORTH, 356),
    "san-francisco-49ers": ("San Francisco", "49ers", "SF", Division.NFC_WEST, 359),
    "seattle-seahawks": ("Seattle", "Seahawks", "SEA", Division.NFC_WEST, 361),
    "tampa-bay-buccaneers": ("Tampa Bay", "Buccaneers", "TB", Division.NFC_SOUTH, 362),
    "tennessee-titans": ("Tennessee", "Titans", "TEN", Division.AFC_SOUTH, 336),
    "washington-commanders": ("Washington", "Commanders", "WSH", Division.NFC_EAST, 363),
}

TEAMS: Dict[str, Team] = {
    slug: Team(
        id=slug,
        name=name,
        city=city,
        full_name=f"{city} {name}",
        abbreviation=abbr,
        conference=division.conference,
        division=division,
        sportskeeda_id=sk_id,
    )
    for slug, (city, name, abbr, division, sk_id) in _TEAM_ROWS.items()
}

_TEAMS_BY_SPORTSKEEDA_ID: Dict[int, Team] = {
    team.sportskeeda_id: team for team in TEAMS.values()
}


def get_all_teams() -> List[Team]:
    """All 32 teams in slug order."""
    return list(TEAMS.values())


def get_team(team_id: str) -> Optional[Team]:
    return TEAMS.get(team_id)


def get_team_by_sportskeeda_id(sportskeeda_id: int) -> Optional[Team]:
    return _TEAMS_BY_SPORTSKEEDA_ID.get(sportskeeda_id)


def teams_in_division(division: Division) -> List[Team]:
    return [team for team in TEAMS.values() if team.division == division]
