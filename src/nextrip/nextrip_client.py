"""NexTrip API client for fetching Metro Transit departure data."""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import MalformedResponseError, NetworkError
from .models import Departure, Direction, Route, Stop

logger = logging.getLogger(__name__)

BASE_URL = "http://svc.metrotransit.org/NexTrip"
USER_AGENT = "nextrip/0.1.0"
DEFAULT_TIMEOUT = 10.0  # seconds

_ROUTES = TypeAdapter(list[Route])
_TEXT_VALUE_PAIRS = TypeAdapter(list[Direction])
_DEPARTURES = TypeAdapter(list[Departure])


class NexTripClient:
    """Client for interacting with the NexTrip API."""

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def _request(self, path: str) -> Any:
        """GET a NexTrip resource and return the decoded JSON body."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)

        try:
            response = await self.client.get(url, params={"format": "json"})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"NexTrip API returned HTTP {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Could not reach the NexTrip API: {e}") from e

        logger.debug("%s -> %s", url, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"NexTrip API returned invalid JSON for {path}"
            ) from e

    @staticmethod
    def _decode(adapter: TypeAdapter, payload: Any, path: str) -> list:
        try:
            return adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"Unexpected response shape from {path}: {e.error_count()} error(s)"
            ) from e

    async def get_routes(self) -> list[Route]:
        """Get every route served by the network.

        Returns:
            Routes in the order the API lists them.
        """
        path = "/Routes"
        return self._decode(_ROUTES, await self._request(path), path)

    async def get_directions(self, route: str | int) -> list[Direction]:
        """Get the directions a route runs in.

        Args:
            route: Route ID (e.g., 940)
        """
        path = f"/Directions/{route}"
        return self._decode(_TEXT_VALUE_PAIRS, await self._request(path), path)

    async def get_stops(self, route: str | int, direction: str | int) -> list[Stop]:
        """Get the stops served by a route in one direction.

        Args:
            route: Route ID (e.g., 940)
            direction: Direction ID (e.g., 2)
        """
        path = f"/Stops/{route}/{direction}"
        return self._decode(_TEXT_VALUE_PAIRS, await self._request(path), path)

    async def get_departures(
        self,
        route: str | int,
        direction: str | int,
        stop: str | int,
    ) -> list[Departure]:
        """Get upcoming departures at a stop, earliest first.

        Args:
            route: Route ID (e.g., 940)
            direction: Direction ID (e.g., 2)
            stop: Stop ID (e.g., "FAIR")
        """
        path = f"/{route}/{direction}/{stop}"
        return self._decode(_DEPARTURES, await self._request(path), path)
