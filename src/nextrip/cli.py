"""Command-line entry point: print the countdown to the next bus."""

import argparse
import asyncio
import logging
import sys

from .countdown import extract_departure_instant, format_countdown
from .errors import NexTripError, ValidationError
from .models import TripQuery
from .nextrip_client import DEFAULT_TIMEOUT, NexTripClient
from .resolver import resolve_direction, resolve_route, resolve_stop

logger = logging.getLogger(__name__)

ACCEPTED_DIRECTIONS = ("north", "south", "east", "west")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message):
        raise ValidationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="nextrip",
        usage="%(prog)s [-h] [-v] [--timeout SECONDS] ROUTE STOP DIRECTION",
        description="Countdown to the next Metro Transit departure.",
        epilog=(
            "ROUTE and STOP are case-insensitive substrings of the route and stop "
            "descriptions; DIRECTION is one of north, south, east or west.\n\n"
            "Example:\n"
            '  nextrip "State Fair - Ltd Stop - Minneapolis - State Fair" delasalle east'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("arguments", nargs="*", metavar="ARG", help=argparse.SUPPRESS)
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"HTTP timeout per request (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log API requests")
    return parser


def validate_arguments(arguments: list[str]) -> TripQuery:
    """Check the positional arguments and bundle them into a TripQuery."""
    if len(arguments) != 3:
        raise ValidationError("Incorrect number of arguments given. Expecting 3 arguments")

    route, stop, direction = arguments
    if direction.lower() not in ACCEPTED_DIRECTIONS:
        raise ValidationError(
            "Invalid direction given. Must be either north, south, east, or west"
        )
    return TripQuery(route=route, stop=stop, direction=direction)


async def next_departure_countdown(client: NexTripClient, query: TripQuery) -> str:
    """Resolve the query to NexTrip IDs and format the time to the next departure."""
    route_id = await resolve_route(client, query.route)
    direction_id = await resolve_direction(client, query.direction, route_id)
    stop_id = await resolve_stop(client, query.stop, route_id, direction_id)
    instant = await extract_departure_instant(client, route_id, direction_id, stop_id)
    return format_countdown(instant)


async def main(argv: list[str] | None = None) -> int:
    """Run one countdown lookup and return the process exit status."""
    try:
        options = build_parser().parse_intermixed_args(argv)
        query = validate_arguments(options.arguments)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        async with NexTripClient(timeout=options.timeout) as client:
            result = await next_departure_countdown(client, query)
    except NexTripError as e:
        logger.debug("Lookup aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


def cli():
    """Entry point for console script."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
