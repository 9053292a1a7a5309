#!/usr/bin/env python3
"""Helper script to find which lines serve a station."""

import asyncio
import sys

from subway_lines.adapters.config import AppConfig
from subway_lines.adapters.json_file import JsonFileLineRepository
from subway_lines.application.services import SectionService
from subway_lines.domain.models import Station


def _print_line_position(line_name: str, stations: list[Station], station: Station) -> None:
    """Print where the station sits on a line."""
    position = stations.index(station)
    previous_stop = stations[position - 1].name if position > 0 else "(head)"
    next_stop = stations[position + 1].name if position + 1 < len(stations) else "(tail)"
    print(f"  {line_name}: stop {position + 1} of {len(stations)}")
    print(f"    {previous_stop} → {station.name} → {next_stop}")


async def find_station(name: str, data_file: str) -> None:
    """Find the lines containing a station."""
    station = Station(name)
    print(f"Searching for: {name}")

    service = SectionService(JsonFileLineRepository(data_file))
    matches = [
        (line, stations) for line, stations in await service.get_all_lines() if station in stations
    ]
    if not matches:
        print(f"Station not found on any line: {name}")
        sys.exit(1)

    print(f"\nFound on {len(matches)} line(s):")
    for line, stations in matches:
        _print_line_position(line.name, stations, station)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python find_station.py <station_name> [data_file]")
        print('Example: python find_station.py "Jamsil" subway_lines.json')
        sys.exit(1)

    station_name = sys.argv[1]
    data_file = sys.argv[2] if len(sys.argv) > 2 else AppConfig().data_file

    asyncio.run(find_station(station_name, data_file))
