from enum import Enum, IntEnum


class Conference(str, Enum):
    AFC = "AFC"
    NFC = "NFC"


class Division(str, Enum):
    AFC_EAST = "AFC East"
    AFC_NORTH = "AFC North"
    AFC_SOUTH = "AFC South"
    AFC_WEST = "AFC West"
    NFC_EAST = "NFC East"
    NFC_NORTH = "NFC North"
    NFC_SOUTH = "NFC South"
    NFC_WEST = "NFC West"

    @property
    def conference(self) -> Conference:
        return Conference(self.value.split(" ", 1)[0])


class EventType(IntEnum):
    """Sportskeeda event_type codes. Only REGULAR_SEASON counts toward a record."""

    PRESEASON = 0
    REGULAR_SEASON = 1
    POSTSEASON = 2


class GameResult(str, Enum):
    WIN = "W"
    LOSS = "L"
    TIE = "T"


class RecordStatus(str, Enum):
    UNKNOWN = "unknown"  # Schedule unavailable, record degraded to 0-0-0
    NO_GAMES = "no_games"  # Schedule fetched, nothing completed yet
    REAL = "real"


class SeedType(str, Enum):
    DIVISION_WINNER = "division-winner"
    WILD_CARD = "wild-card"
