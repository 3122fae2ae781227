#!/usr/bin/env python3
"""
bart-status — BART Real-Time Departure Board TUI

A terminal user interface showing live departures for a BART station with
auto-refresh. Uses the BART legacy API (http://api.bart.gov/api/etd.aspx).

Usage:
    bart-status [station]
    bart-status MONT                  # Montgomery St.
    bart-status "Powell"              # Station names work too
    bart-status 12TH --abbreviate     # Short destination labels
    bart-status EMBR --dir s          # Southbound trains only
    bart-status RICH --compact        # Single-line for status bars
    bart-status --select              # Pick a station from a list
    bart-status --list-stations       # Show all station codes
"""

import argparse
import logging
import sys

from rich.console import Console

from .config import DEFAULT_STATION, DIRECTIONS, REFRESH_INTERVAL, Config, default_api_key
from .controller import PollController
from .display import build_station_table
from .exceptions import ConfigError
from .prompt import select_station_interactively
from .stations import lookup_station
from .surface import ConsoleSurface, LiveSurface

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int = 0, log_file: str | None = None) -> None:
    """Send log records to stderr, or to a file when one is given."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    target = {"filename": log_file} if log_file else {"stream": sys.stderr}
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        **target,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bart-status",
        description="Show BART departures for a station in real-time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s MONT                  # Montgomery St.
    %(prog)s "Powell"              # Unambiguous station names work too
    %(prog)s 12TH --abbreviate     # Short destination labels
    %(prog)s EMBR --dir s          # Southbound trains only
    %(prog)s RICH --compact        # Single-line output for status bars
    %(prog)s --select              # Pick a station from a list

Station codes are 4-letter codes like MONT (Montgomery St.), EMBR
(Embarcadero), 12TH (12th St. Oakland City Center). Use --list-stations to
see them all. Set BART_API_KEY to use your own API key.
        """
    )
    parser.add_argument(
        "station",
        nargs="?",
        help=f"Station code or name (default: {DEFAULT_STATION})"
    )
    parser.add_argument(
        "-r", "--refresh",
        type=int,
        default=REFRESH_INTERVAL,
        help=f"Refresh interval in seconds (default: {REFRESH_INTERVAL})"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Display once and exit (no auto-refresh)"
    )
    parser.add_argument(
        "--compact", "-c",
        action="store_true",
        help="Compact single-line output (for status bars, tmux, etc.)"
    )
    parser.add_argument(
        "--abbreviate", "-a",
        action="store_true",
        help="Show abbreviated destination names"
    )
    parser.add_argument(
        "--dir",
        dest="direction",
        choices=DIRECTIONS,
        help="Only show northbound (n) or southbound (s) trains"
    )
    parser.add_argument(
        "--key",
        dest="api_key",
        metavar="KEY",
        help="BART API key (default: $BART_API_KEY or the public key)"
    )
    parser.add_argument(
        "--select",
        action="store_true",
        help="Choose the station interactively"
    )
    parser.add_argument(
        "--list-stations",
        action="store_true",
        help="List all station codes and exit"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log more (-v for info, -vv for debug)"
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write log output to a file instead of stderr"
    )
    return parser


def build_config(args: argparse.Namespace, station: str | None = None) -> Config:
    """Turn parsed arguments into a validated Config. Raises ConfigError."""
    station = station or args.station
    return Config(
        api_key=args.api_key or default_api_key(),
        station=lookup_station(station) if station else DEFAULT_STATION,
        abbreviate=args.abbreviate,
        refresh_interval=args.refresh,
        direction=args.direction,
        compact_mode=args.compact,
    )


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    console = Console()

    try:
        if args.list_stations:
            console.print(build_station_table(highlight=build_config(args).station))
            return

        station = None
        if args.select:
            station = select_station_interactively(console, current=args.station)
        config = build_config(args, station)
    except ConfigError as e:
        console.print(f"[red]{e}[/]")
        sys.exit(2)

    logger.info("Tracking %s", config.station)

    if args.once:
        controller = PollController(
            config, lambda: ConsoleSurface(console), show_waiting=False,
        )
        controller.start()
        controller.stop()
        return

    if config.compact_mode:
        controller = PollController(
            config, lambda: ConsoleSurface(console, clear=True), show_waiting=False,
        )
    else:
        controller = PollController(config, lambda: LiveSurface(console))

    try:
        controller.run()
    except KeyboardInterrupt:
        console.print("\n[dim]Tracking stopped.[/]")
        sys.exit(0)


if __name__ == "__main__":
    main()
