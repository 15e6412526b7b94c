import sys
import asyncio
import json

# --- Settings/Logging ---
from nfl_hq.logging.setup import setup_logging
from nfl_hq.config.settings import settings

setup_logging()

from loguru import logger

from rich.console import Console
from rich.table import Table

from nfl_hq.models.standing import StandingsSnapshot
from nfl_hq.standings.service import StandingsService, StandingsUnavailableError

OUTPUT_FILENAME = "standings.json"

console = Console()


def render_snapshot(snapshot: StandingsSnapshot) -> None:
    """Prints one table per division followed by the playoff seeds."""
    for division, teams in snapshot.divisions.items():
        table = Table(title=division, title_justify="left")
        table.add_column("Rank")
        table.add_column("Team")
        table.add_column("W-L-T", justify="right")
        table.add_column("Pct", justify="right")
        table.add_column("Home")
        table.add_column("Away")
        table.add_column("Div")
        table.add_column("Conf")
        table.add_column("Strk")
        for team in teams:
            table.add_row(
                team.division_rank,
                team.full_name,
                team.record_string,
                f"{team.win_percentage:.3f}",
                team.home_record,
                team.away_record,
                team.div_record,
                team.conf_record,
                team.stats.streak,
            )
        console.print(table)

    for conference, playoffs in snapshot.playoff_picture.items():
        table = Table(title=f"{conference.upper()} playoff picture", title_justify="left")
        table.add_column("Seed", justify="right")
        table.add_column("Team")
        table.add_column("Record", justify="right")
        table.add_column("Type")
        for seed in playoffs.seeds:
            table.add_row(
                str(seed.seed),
                seed.team.full_name,
                seed.team.record_string,
                seed.seed_type.value,
            )
        console.print(table)


async def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting NFL HQ standings run for the {settings.season} season")

    service = StandingsService()
    try:
        snapshot = await service.get_standings()
        if snapshot.is_stale:
            logger.warning("Serving stale standings from cache.")

        render_snapshot(snapshot)

        try:
            with open(OUTPUT_FILENAME, "w", encoding="utf-8") as f:
                json.dump(snapshot.to_payload(), f, indent=4, ensure_ascii=False)
            logger.success(f"Successfully saved standings to {OUTPUT_FILENAME}")
        except IOError as e:
            logger.error(f"Failed to write standings to {OUTPUT_FILENAME}: {e}")
    except StandingsUnavailableError as e:
        logger.error(f"Standings unavailable: {e}")
        raise SystemExit(1)
    finally:
        await service.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
