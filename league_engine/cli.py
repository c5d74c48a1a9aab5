"""
CLI entry point for League Engine.

Usage:
    league-table table --source data/teams.json
    league-table --use-sample table --sort points --desc
    league-table history 3 --limit 5
    league-table export standings.xlsx
"""

import argparse
import asyncio
import logging
import sys

from league_engine.config import Config
from league_engine.controller import LeagueController
from league_engine.data.loader import StaticLoader
from league_engine.data.sample_data import generate_sample_league
from league_engine.data.storage import MemoryStore
from league_engine.export import export_standings, standings_frame
from league_engine.models import SortDirection, SortField

logger = logging.getLogger("league_engine")


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="league-table",
        description="League standings from a match log",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="JSON file or http(s) URL with teams and matches (default: LEAGUE_DATA_SOURCE)",
    )
    parser.add_argument(
        "--use-sample",
        action="store_true",
        help="Use a generated sample league instead of loading the source",
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="Seed for sample data (default: 42)"
    )
    parser.add_argument(
        "--sort",
        choices=[f.value for f in SortField],
        default=SortField.POSITION.value,
        help="Column to sort the table on (default: position)",
    )
    parser.add_argument("--desc", action="store_true", help="Sort descending")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("table", help="Print the standings table")

    history_parser = subparsers.add_parser("history", help="Print a team's matches")
    history_parser.add_argument("team_id", type=int, help="Team id")
    history_parser.add_argument("--limit", type=int, default=None, help="Most recent N matches")

    export_parser = subparsers.add_parser("export", help="Write the table to a file")
    export_parser.add_argument("path", help="Output path (.csv, .xlsx or .json)")

    return parser.parse_args(argv)


def build_controller(args: argparse.Namespace) -> LeagueController:
    config = Config()
    if args.source:
        config.data_source = args.source

    if args.use_sample:
        # Sample runs never touch the persisted favorite
        return LeagueController(
            config,
            loader=StaticLoader(generate_sample_league(seed=args.seed)),
            store=MemoryStore(),
        )
    return LeagueController(config)


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    controller = build_controller(args)
    asyncio.run(controller.bootstrap())

    if not controller.teams:
        logger.error("No teams loaded")
        return 1

    controller.sort_by = SortField(args.sort)
    controller.sort_direction = SortDirection.DESC if args.desc else SortDirection.ASC
    table = controller.get_sorted_view()

    if args.command == "table":
        print(standings_frame(table).to_string(index=False))
        favorite = controller.favorite_team
        if favorite is not None:
            print(f"\nFavorite: {favorite.name} (position {favorite.position})")

    elif args.command == "history":
        team = controller.get_team(args.team_id)
        if team is None:
            logger.error(f"Unknown team id {args.team_id}")
            return 1
        print(f"{team.name}: {team.wins}W {team.draws}D {team.losses}L, {team.points} pts")
        for m in controller.get_team_history(args.team_id, args.limit):
            venue = "H" if m.is_home else "A"
            print(
                f"  {m.date:%Y-%m-%d} [{venue}] {m.home_team} {m.home_score}-{m.away_score} "
                f"{m.away_team}  {m.result.value}"
            )

    elif args.command == "export":
        path = export_standings(table, args.path)
        print(f"Exported {len(table)} teams to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
