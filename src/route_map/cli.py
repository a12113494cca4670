"""
Route Map - Command-line entry point.

Loads the OpenFlights dataset, then prints the direct flights and
every chained itinerary between two cities.

Usage:
    route-map "Warsaw" "Barcelona" --max-connections 2
    route-map            # prompts for the cities and connection budget
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from src.route_map.application.find_itineraries import FindItineraries
from src.route_map.config import Settings
from src.route_map.exceptions import RouteMapError
from src.route_map.presentation import (
    format_connected_routes,
    format_link,
    format_summary,
    sort_itineraries,
)
from src.route_map.schemas.search_config import ReferenceDistancePolicy, SearchConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONNECTIONS = 2

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_TIMEOUT = 2


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the root logger to write to stderr.

    Args:
        verbose: Log at DEBUG instead of INFO.
    """
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="route-map",
        description="Find direct and connecting flights between two cities",
    )
    parser.add_argument("source", nargs="?", help="Source city")
    parser.add_argument("destination", nargs="?", help="Destination city")
    parser.add_argument(
        "-c",
        "--max-connections",
        type=int,
        default=None,
        help=f"Maximum flights per itinerary (default: {DEFAULT_MAX_CONNECTIONS})",
    )
    parser.add_argument("--data-dir", help="Directory with the OpenFlights .dat files")
    parser.add_argument("--db", dest="db_path", help="SQLite file to load the dataset into")
    parser.add_argument("--timeout", type=float, help="Search deadline in seconds")
    parser.add_argument(
        "--reference-policy",
        choices=[policy.value for policy in ReferenceDistancePolicy],
        help="How the reference straight distance is chosen",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def prompt_missing(args: argparse.Namespace) -> None:
    """
    Ask for any search input not given on the command line.

    The connection budget is only prompted for in interactive mode,
    i.e. when a city was missing too.

    Raises:
        ValueError: If the connection budget answer is not an integer.
    """
    interactive = not (args.source and args.destination)
    if not args.source:
        args.source = input("Source city: ").strip()
    if not args.destination:
        args.destination = input("Destination city: ").strip()
    if args.max_connections is None:
        answer = ""
        if interactive:
            answer = input(f"Max connections [{DEFAULT_MAX_CONNECTIONS}]: ").strip()
        args.max_connections = int(answer) if answer else DEFAULT_MAX_CONNECTIONS


async def run_search(
    finder: FindItineraries,
    source: str,
    destination: str,
    max_connections: int,
    timeout: Optional[float] = None,
) -> List[str]:
    """
    Run both searches and render the report lines.

    Raises:
        asyncio.TimeoutError: If either search passes the deadline.
        StoreError: If a lookup fails.
    """
    direct = await finder.direct_links(source, destination, timeout=timeout)
    indirect = await finder.indirect_routes(
        source, destination, max_connections, timeout=timeout
    )

    lines = [f"{source} ✈ {destination}", "[Direct flights]"]
    if direct:
        lines.extend(format_link(link) for link in direct)
    else:
        lines.append("none")

    lines.append("[Indirect flights]")
    if indirect:
        for itinerary in sort_itineraries(indirect):
            lines.extend(format_connected_routes(itinerary))
    else:
        lines.append("none")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_env()
        config = SearchConfig.create(
            reference_policy=args.reference_policy or settings.reference_policy
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return EXIT_ERROR

    data_dir = args.data_dir or settings.data_dir
    db_path = args.db_path or settings.db_path
    timeout = args.timeout if args.timeout is not None else settings.search_timeout

    try:
        finder = FindItineraries(data_dir=data_dir, db_path=db_path, config=config)
    except RouteMapError as e:
        logger.critical("Could not prepare the flight network: %s", e)
        return EXIT_ERROR

    try:
        print("Database ready")
        for line in format_summary(finder.summary()):
            print(f"  {line}")

        try:
            prompt_missing(args)
        except ValueError as e:
            logger.error("Invalid input: %s", e)
            return EXIT_ERROR

        lines = asyncio.run(
            run_search(
                finder,
                args.source,
                args.destination,
                args.max_connections,
                timeout=timeout,
            )
        )
    except asyncio.TimeoutError:
        logger.error("Search did not finish within %.1fs", timeout)
        return EXIT_TIMEOUT
    except RouteMapError as e:
        logger.error("Search failed: %s", e)
        return EXIT_ERROR
    finally:
        finder.close()

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
