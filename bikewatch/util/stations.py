# bikewatch/util/stations.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bikewatch.errors import MalformedDocumentError, MalformedStationError
from bikewatch.util import console


@dataclass(frozen=True)
class StationRecord:
    """
    One Bluebikes dock. `id` is the GBFS short_name, which is what the trip
    CSV uses in start_station_id / end_station_id.

    arrivals / departures / total_traffic are query outputs: they describe
    whatever window the record was last computed for.
    """
    id: str
    name: str
    lon: float
    lat: float
    capacity: int | None = None
    arrivals: int = 0
    departures: int = 0
    total_traffic: int = 0

    @property
    def departure_ratio(self) -> float | None:
        if self.total_traffic <= 0:
            return None
        return self.departures / self.total_traffic

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "lon": self.lon,
            "lat": self.lat,
            "capacity": self.capacity,
            "arrivals": self.arrivals,
            "departures": self.departures,
            "total_traffic": self.total_traffic,
        }


def station_from_json(raw: dict[str, Any]) -> StationRecord:
    if not isinstance(raw, dict):
        raise MalformedStationError(f"station entry is not an object: {raw!r}")

    sid = raw.get("short_name")
    if sid is None or not str(sid).strip():
        raise MalformedStationError(f"station has no short_name: {raw.get('name')!r}")

    try:
        lon = float(raw["lon"])
        lat = float(raw["lat"])
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedStationError(f"station {sid} has bad coordinates") from e

    cap = raw.get("capacity")
    try:
        cap = int(cap) if cap is not None else None
    except (TypeError, ValueError):
        cap = None

    return StationRecord(
        id=str(sid).strip(),
        name=str(raw.get("name") or sid),
        lon=lon,
        lat=lat,
        capacity=cap,
    )


def parse_stations(doc: Any) -> list[StationRecord]:
    """
    Turn a GBFS-style station document into StationRecords:

      {"data": {"stations": [{"short_name": ..., "name": ..., "lat": ..., "lon": ...}, ...]}}

    Entries that can't be read are skipped and counted; a document without
    data.stations is a MalformedDocumentError.
    """
    try:
        raw = doc["data"]["stations"]
    except (KeyError, TypeError) as e:
        raise MalformedDocumentError("station document has no data.stations list") from e

    if not isinstance(raw, list):
        raise MalformedDocumentError("data.stations is not a list")

    stations: list[StationRecord] = []
    skipped = 0
    for s in raw:
        try:
            stations.append(station_from_json(s))
        except MalformedStationError:
            skipped += 1

    if skipped:
        console.warn(f"Skipped {skipped} malformed station entries")

    return stations


def load_stations(path: str | Path) -> list[StationRecord]:
    """Load stations from a local bluebikes-stations.json."""
    with open(path) as f:
        return parse_stations(json.load(f))
