"""Command line interface for maintaining subway lines in a JSON store."""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from subway_lines.adapters.config import AppConfig, LineConfigurationLoader
from subway_lines.adapters.json_file import CorruptStoreError, JsonFileLineRepository
from subway_lines.application.services import SectionService
from subway_lines.domain.errors import SubwayError
from subway_lines.domain.models import ChainChange, Station

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="subway-lines",
        description="Maintain subway lines as ordered chains of stations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  subway-lines add-line "Line 8" pink
  subway-lines add-section "Line 8" Amsa Cheonho 12
  subway-lines add-section "Line 8" Amsa Gangdong 5
  subway-lines stations "Line 8"
  subway-lines remove-station "Line 8" Gangdong
        """,
    )
    parser.add_argument("--data-file", help="JSON store to use (overrides DATA_FILE)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    lines_parser = subparsers.add_parser("lines", help="List all lines with their stations")
    lines_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stations_parser = subparsers.add_parser("stations", help="List the stations of a line")
    stations_parser.add_argument("line", help="Line name")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    add_line_parser = subparsers.add_parser("add-line", help="Register a new line")
    add_line_parser.add_argument("name", help="Line name")
    add_line_parser.add_argument("color", help="Line color")

    add_section_parser = subparsers.add_parser(
        "add-section", help="Insert a segment, splitting an existing one if needed"
    )
    add_section_parser.add_argument("line", help="Line name")
    add_section_parser.add_argument("source", help="Upstream station")
    add_section_parser.add_argument("target", help="Downstream station")
    add_section_parser.add_argument("distance", type=int, help="Distance from source to target")

    remove_parser = subparsers.add_parser("remove-station", help="Remove a station from a line")
    remove_parser.add_argument("line", help="Line name")
    remove_parser.add_argument("station", help="Station name")

    import_parser = subparsers.add_parser(
        "import-config", help="Import lines from the TOML configuration file"
    )
    import_parser.add_argument("--config-file", help="TOML file to import (overrides CONFIG_FILE)")

    return parser


def _print_change(change: ChainChange) -> None:
    for segment in change.removed:
        print(f"  - {segment}")
    for segment in change.added:
        print(f"  + {segment}")


def _format_stations(stations: list[Station]) -> str:
    return " -> ".join(station.name for station in stations) or "(no stations)"


async def run_command(args: argparse.Namespace, config: AppConfig) -> None:
    """Execute a parsed command against the configured JSON store."""
    service = SectionService(JsonFileLineRepository(config.data_file))

    if args.command == "lines":
        lines = await service.get_all_lines()
        if args.json:
            payload = [
                {
                    "id": line.id,
                    "name": line.name,
                    "color": line.color,
                    "stations": [station.name for station in stations],
                }
                for line, stations in lines
            ]
            print(json.dumps(payload, indent=2, ensure_ascii=False))
            return
        if not lines:
            print("No lines registered.")
        for line, stations in lines:
            print(f"{line.name} ({line.color}): {_format_stations(stations)}")

    elif args.command == "stations":
        line = await service.find_line_by_name(args.line)
        stations = await service.get_ordered_stations(line.id)
        if args.json:
            print(json.dumps([station.name for station in stations], ensure_ascii=False))
        else:
            print(_format_stations(stations))

    elif args.command == "add-line":
        line = await service.register_line(args.name, args.color)
        print(f"Registered {line.name} ({line.color}) with id {line.id}")

    elif args.command == "add-section":
        line = await service.find_line_by_name(args.line)
        change = await service.add_section(
            line.id, Station(args.source), Station(args.target), args.distance
        )
        print(f"Updated {line.name}:")
        _print_change(change)

    elif args.command == "remove-station":
        line = await service.find_line_by_name(args.line)
        change = await service.remove_station(line.id, Station(args.station))
        print(f"Updated {line.name}:")
        _print_change(change)

    elif args.command == "import-config":
        if args.config_file:
            config.config_file = args.config_file
        line_configs = LineConfigurationLoader.load(config)
        imported = await service.import_lines(line_configs)
        logger.info(f"Imported {len(imported)} of {len(line_configs)} configured line(s)")
        for line in imported:
            print(f"Imported {line.name}")


async def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = AppConfig()
    except ValidationError as e:
        configure_logging("INFO")
        logger.error(f"Invalid settings: {e}")
        return 1
    if args.data_file:
        config.data_file = args.data_file
    configure_logging(config.log_level)

    try:
        await run_command(args, config)
    except SubwayError as e:
        logger.error(f"{args.command} failed: {e}")
        print(e.to_details().model_dump_json(), file=sys.stderr)
        return 1
    except CorruptStoreError as e:
        logger.error(f"Could not read data file {config.data_file}: {e}")
        return 1
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
