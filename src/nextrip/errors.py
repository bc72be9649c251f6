"""Exceptions raised while resolving and timing a NexTrip departure."""


class NexTripError(Exception):
    """Base class for every failure that aborts a countdown lookup."""


class ValidationError(NexTripError):
    """Command-line input was rejected before any request was made."""


class NetworkError(NexTripError):
    """The NexTrip API could not be reached or answered with an error status."""


class MalformedResponseError(NexTripError):
    """The NexTrip API answered with something we could not decode."""


class NotFoundError(NexTripError):
    """No record matched a resolution query."""

    def __init__(self, kind: str, query: str, message: str | None = None):
        self.kind = kind
        self.query = query
        super().__init__(message or f"No {kind} matched '{query}'.")


class AmbiguousMatchError(NexTripError):
    """More than one record matched a query that must be unique."""

    def __init__(self, kind: str, query: str, message: str | None = None):
        self.kind = kind
        self.query = query
        super().__init__(message or f"Multiple {kind}s matched '{query}'.")


class NoMoreDeparturesError(NexTripError):
    """The stop has no upcoming departures left today."""

    def __init__(self, message: str = "Last bus for the day has already left"):
        super().__init__(message)
