"""Resolve free-text route, direction and stop descriptions to NexTrip IDs.

Every lookup is a case-insensitive substring match against the display text
the API returns. Routes and stops must match exactly one record; directions
take the first record that matches.
"""

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from .errors import AmbiguousMatchError, NotFoundError
from .nextrip_client import NexTripClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _normalize(text: str) -> str:
    """Normalize text for matching: casefold only."""
    return text.casefold()


def _matches(records: Iterable[T], query: str, text: Callable[[T], str]) -> list[T]:
    """Return the records whose text contains the query."""
    needle = _normalize(query)
    return [record for record in records if needle in _normalize(text(record))]


async def resolve_route(client: NexTripClient, description: str) -> str | int:
    """Find the ID of the one route whose description contains `description`.

    Raises:
        NotFoundError: no route matched.
        AmbiguousMatchError: more than one route matched.
    """
    matches = _matches(await client.get_routes(), description, lambda r: r.description)

    if len(matches) > 1:
        raise AmbiguousMatchError(
            "route",
            description,
            f"Multiple Routes were found with description '{description}'.",
        )
    if not matches:
        raise NotFoundError(
            "route",
            description,
            f"Route was not found with description '{description}'.",
        )

    route_id = matches[0].route_id
    logger.debug("Route %r resolved to %s", description, route_id)
    return route_id


async def resolve_direction(
    client: NexTripClient, direction: str, route_id: str | int
) -> str | int:
    """Find the ID of the first direction of `route_id` whose text contains `direction`.

    Raises:
        NotFoundError: no direction matched.
    """
    needle = _normalize(direction)
    for info in await client.get_directions(route_id):
        if needle in _normalize(info.text):
            logger.debug("Direction %r resolved to %s (%s)", direction, info.value, info.text)
            return info.value

    raise NotFoundError(
        "direction",
        direction,
        f"Direction '{direction}' was not found for route '{route_id}'.",
    )


async def resolve_stop(
    client: NexTripClient, stop: str, route_id: str | int, direction_id: str | int
) -> str | int:
    """Find the ID of the one stop on a route/direction whose text contains `stop`.

    Raises:
        NotFoundError: no stop matched.
        AmbiguousMatchError: more than one stop matched.
    """
    stops = await client.get_stops(route_id, direction_id)
    matches = _matches(stops, stop, lambda s: s.text)

    if len(matches) > 1:
        raise AmbiguousMatchError(
            "stop",
            stop,
            f"Multiple Stops were found with description '{stop}'.",
        )
    if not matches:
        raise NotFoundError(
            "stop",
            stop,
            f"Stop '{stop}' was not found for route '{route_id}' "
            f"in direction '{direction_id}'.",
        )

    stop_id = matches[0].value
    logger.debug("Stop %r resolved to %s", stop, stop_id)
    return stop_id
