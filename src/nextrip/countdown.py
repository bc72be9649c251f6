"""Turn the next NexTrip departure into a minutes/seconds countdown."""

import logging
import re
from datetime import datetime, timedelta, timezone

from .errors import MalformedResponseError, NoMoreDeparturesError
from .nextrip_client import NexTripClient

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# e.g. "/Date(1600000000000-0500)/"
DEPARTURE_TIME_RE = re.compile(r"Date\((-?\d+)([+-])(\d{2})(\d{2})\)")


def parse_departure_time(value: str) -> datetime:
    """Parse a NexTrip ``Date(<millis><offset>)`` string.

    Returns:
        An aware datetime for the given epoch milliseconds, expressed in the
        UTC offset the API sent along with it.
    """
    match = DEPARTURE_TIME_RE.search(value)
    if not match:
        raise MalformedResponseError(f"Unrecognized departure time: {value!r}")

    millis, sign, hours, minutes = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes))
    if sign == "-":
        offset = -offset

    instant = EPOCH + timedelta(milliseconds=int(millis))
    return instant.astimezone(timezone(offset))


async def extract_departure_instant(
    client: NexTripClient,
    route_id: str | int,
    direction_id: str | int,
    stop_id: str | int,
) -> datetime:
    """Return when the next bus leaves the stop."""
    departures = await client.get_departures(route_id, direction_id, stop_id)
    if not departures:
        raise NoMoreDeparturesError()

    instant = parse_departure_time(departures[0].departure_time)
    logger.debug("Next departure at %s", instant.isoformat())
    return instant


def format_countdown(instant: datetime, now: datetime | None = None) -> str:
    """Format the time left until `instant` as "<m> Minutes <s> Seconds".

    Both the seconds and the minutes are truncated toward zero. A departure
    already in the past yields negative numbers.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    difference = int((instant - now).total_seconds())
    minutes = int(difference / 60)
    seconds = difference - minutes * 60
    return f"{minutes} Minutes {seconds} Seconds"
