# bikewatch/data/source.py
from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from pathlib import Path

from bikewatch.config import DEFAULT_STATIONS_URL, DEFAULT_TRIPS_URL
from bikewatch.errors import FetchError, MalformedDocumentError
from bikewatch.util import console
from bikewatch.util.stations import StationRecord, parse_stations
from bikewatch.util.trips import TripBatch, read_trip_csv

USER_AGENT = "bikewatch/1.0"


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _http_get_text(url: str, timeout: int = 30) -> str:
    """
    HTTP GET -> decoded body. Any HTTP or transport failure becomes FetchError
    (with the status and the start of the error body printed).
    """
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read().decode("utf-8-sig", errors="replace")

    except urllib.error.HTTPError as e:
        body = ""
        try:
            body = e.read().decode("utf-8", errors="replace")
        except OSError:
            body = ""

        console.error(f"[fetch] HTTP ERROR: {e.code} {e.reason} ({url})")
        if body:
            console.error(body[:500])
        raise FetchError(url, f"HTTP {e.code} {e.reason}") from e

    except (urllib.error.URLError, OSError) as e:
        console.error(f"[fetch] ERROR: {e!r} ({url})")
        raise FetchError(url, str(e)) from e


def read_text(location: str | Path, timeout: int = 30) -> str:
    """Body of a URL or a local file."""
    location = str(location)
    if _is_url(location):
        return _http_get_text(location, timeout=timeout)

    try:
        return Path(location).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        console.error(f"[fetch] ERROR: {e!r}")
        raise FetchError(location, str(e)) from e


class DataSource:
    """
    Where station metadata and trips come from. Both locations may be URLs or
    local paths.

    fetch_stations / fetch_trips raise FetchError when the document can't be
    retrieved and MalformedDocumentError when it has the wrong shape; an empty
    document is not an error.
    """

    def __init__(
        self,
        stations_url: str = DEFAULT_STATIONS_URL,
        trips_url: str = DEFAULT_TRIPS_URL,
        *,
        timeout: int = 30,
        show_progress: bool = False,
    ):
        self.stations_url = str(stations_url)
        self.trips_url = str(trips_url)
        self.timeout = timeout
        self.show_progress = show_progress

    def fetch_stations(self) -> list[StationRecord]:
        console.info(f"Loading stations from {self.stations_url}…")
        raw = read_text(self.stations_url, timeout=self.timeout)

        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(f"stations document is not JSON: {e}") from e

        stations = parse_stations(doc)
        console.done(f"Loaded {len(stations)} stations")
        return stations

    def fetch_trips(self) -> TripBatch:
        console.info(f"Loading trips from {self.trips_url}…")
        raw = read_text(self.trips_url, timeout=self.timeout)

        batch = read_trip_csv(io.StringIO(raw), show_progress=self.show_progress)
        console.done(f"Loaded {len(batch.trips)} trips")
        return batch
