"""Tests for NexTrip client."""

import httpx
import pytest
import respx

from nextrip.errors import MalformedResponseError, NetworkError
from nextrip.nextrip_client import BASE_URL, NexTripClient


@pytest.mark.asyncio
async def test_client_initialization():
    """Test client context manager."""
    async with NexTripClient() as client:
        assert client.client is not None


@pytest.mark.asyncio
async def test_request_outside_context_manager():
    """Using the client without 'async with' is a programming error."""
    with pytest.raises(RuntimeError):
        await NexTripClient().get_routes()


@pytest.mark.asyncio
@respx.mock
async def test_get_routes():
    """Routes are decoded from the upstream field names."""
    route = respx.get(f"{BASE_URL}/Routes").mock(
        return_value=httpx.Response(
            200,
            json=[
                {"Description": "METRO Blue Line", "ProviderID": "8", "Route": "901"},
                {"Description": "State Fair - Ltd Stop - Minneapolis - State Fair", "ProviderID": "8", "Route": "940"},
            ],
        )
    )

    async with NexTripClient() as client:
        routes = await client.get_routes()

    assert [r.route_id for r in routes] == ["901", "940"]
    assert routes[0].description == "METRO Blue Line"
    assert route.calls.last.request.url.params["format"] == "json"


@pytest.mark.asyncio
@respx.mock
async def test_get_directions_and_stops_paths():
    """Directions and stops are fetched from route-scoped paths."""
    respx.get(f"{BASE_URL}/Directions/940").mock(
        return_value=httpx.Response(200, json=[{"Text": "EASTBOUND", "Value": "2"}])
    )
    respx.get(f"{BASE_URL}/Stops/940/2").mock(
        return_value=httpx.Response(200, json=[{"Text": "Delasalle Dr and Loring Park", "Value": "DELA"}])
    )

    async with NexTripClient() as client:
        directions = await client.get_directions("940")
        stops = await client.get_stops("940", "2")

    assert directions[0].value == "2"
    assert directions[0].text == "EASTBOUND"
    assert stops[0].value == "DELA"


@pytest.mark.asyncio
@respx.mock
async def test_get_departures():
    """Departures keep the raw DepartureTime string and ignore unknown fields."""
    respx.get(f"{BASE_URL}/940/2/DELA").mock(
        return_value=httpx.Response(
            200,
            json=[
                {
                    "Actual": False,
                    "DepartureText": "4:15",
                    "DepartureTime": "/Date(1600000000000-0500)/",
                    "Route": "940",
                    "RouteDirection": "EASTBOUND",
                    "VehicleHeading": 0,
                    "Gate": 5,
                    "SomethingNew": "ignored",
                }
            ],
        )
    )

    async with NexTripClient() as client:
        departures = await client.get_departures("940", "2", "DELA")

    assert len(departures) == 1
    assert departures[0].departure_time == "/Date(1600000000000-0500)/"


@pytest.mark.asyncio
@respx.mock
async def test_redirect_is_followed():
    """An http to https redirect still yields decoded routes."""
    secure_url = BASE_URL.replace("http://", "https://", 1)
    respx.get(f"{BASE_URL}/Routes").mock(
        return_value=httpx.Response(301, headers={"Location": f"{secure_url}/Routes?format=json"})
    )
    respx.get(f"{secure_url}/Routes").mock(
        return_value=httpx.Response(200, json=[{"Description": "METRO Blue Line", "Route": "901"}])
    )

    async with NexTripClient() as client:
        routes = await client.get_routes()

    assert [r.route_id for r in routes] == ["901"]


@pytest.mark.asyncio
@respx.mock
async def test_http_error_status_raises_network_error():
    """Non-success statuses surface as NetworkError."""
    respx.get(f"{BASE_URL}/Routes").mock(return_value=httpx.Response(503))

    async with NexTripClient() as client:
        with pytest.raises(NetworkError, match="503"):
            await client.get_routes()


@pytest.mark.asyncio
@respx.mock
async def test_connection_failure_raises_network_error():
    """Transport failures surface as NetworkError."""
    respx.get(f"{BASE_URL}/Routes").mock(side_effect=httpx.ConnectError("refused"))

    async with NexTripClient() as client:
        with pytest.raises(NetworkError):
            await client.get_routes()


@pytest.mark.asyncio
@respx.mock
async def test_invalid_json_raises_malformed_response():
    """A body that is not JSON surfaces as MalformedResponseError."""
    respx.get(f"{BASE_URL}/Routes").mock(
        return_value=httpx.Response(200, text="<html>maintenance</html>")
    )

    async with NexTripClient() as client:
        with pytest.raises(MalformedResponseError):
            await client.get_routes()


@pytest.mark.asyncio
@respx.mock
async def test_unexpected_shape_raises_malformed_response():
    """Valid JSON with the wrong record shape is rejected."""
    respx.get(f"{BASE_URL}/Directions/940").mock(
        return_value=httpx.Response(200, json={"Text": "EASTBOUND"})
    )
    respx.get(f"{BASE_URL}/Stops/940/2").mock(
        return_value=httpx.Response(200, json=[{"Text": "Delasalle Dr"}])
    )

    async with NexTripClient() as client:
        with pytest.raises(MalformedResponseError):
            await client.get_directions("940")
        with pytest.raises(MalformedResponseError):
            await client.get_stops("940", "2")


if __name__ == "__main__":
    pytest.main([__file__])
