# bikewatch/errors.py


class BikewatchError(Exception):
    """Base class for everything bikewatch raises on purpose."""


class FetchError(BikewatchError):
    """A station or trip document could not be fetched (network / IO)."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"could not fetch {location}: {reason}")
        self.location = location
        self.reason = reason


class MalformedDocumentError(BikewatchError):
    """The fetched document does not have the expected shape."""


class MalformedTripError(BikewatchError):
    """A single trip row cannot be turned into a TripRecord."""


class MalformedStationError(BikewatchError):
    """A single station entry cannot be turned into a StationRecord."""
