"""Data models for NexTrip API responses."""

from pydantic import BaseModel, ConfigDict, Field


class NexTripRecord(BaseModel):
    """Base for records decoded from the NexTrip API (read-only)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Route(NexTripRecord):
    """A transit line as listed by /Routes."""

    route_id: str | int = Field(alias="Route")
    description: str = Field(alias="Description")
    provider_id: str | int | None = Field(default=None, alias="ProviderID")


class TextValuePair(NexTripRecord):
    """A direction or stop choice: an opaque value with display text."""

    value: str | int = Field(alias="Value")
    text: str = Field(alias="Text")


# Directions and stops share the same wire shape.
Direction = TextValuePair
Stop = TextValuePair


class Departure(NexTripRecord):
    """An upcoming departure at a stop."""

    departure_time: str = Field(alias="DepartureTime")  # "/Date(<millis><+-hhmm>)/"


class TripQuery(BaseModel):
    """Validated command-line input for one countdown lookup."""

    model_config = ConfigDict(frozen=True)

    route: str
    stop: str
    direction: str
