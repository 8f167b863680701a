"""
tests/conftest.py

Shared builders: trips on a fixed day and a couple of tiny station lists.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from bikewatch.util.stations import StationRecord
from bikewatch.util.trips import TripRecord

DAY = (2024, 3, 1)


def at(hhmm: str, day: int = DAY[2]) -> datetime:
    h, m = (int(x) for x in hhmm.split(":"))
    return datetime(DAY[0], DAY[1], day, h, m)


def trip(start: str, end: str, s0: str = "A", s1: str = "B") -> TripRecord:
    return TripRecord(
        started_at=at(start),
        ended_at=at(end),
        start_station_id=s0,
        end_station_id=s1,
    )


def station(sid: str, lon: float = -71.09, lat: float = 42.36, name: str | None = None) -> StationRecord:
    return StationRecord(id=sid, name=name or f"Station {sid}", lon=lon, lat=lat)


@pytest.fixture
def ab_trips() -> list[TripRecord]:
    return [
        trip("00:05", "00:10", "A", "B"),
        trip("00:50", "01:05", "B", "A"),
    ]


@pytest.fixture
def ab_stations() -> list[StationRecord]:
    return [
        station("A", lon=-71.0942, lat=42.3601),
        station("B", lon=-71.1040, lat=42.3656),
    ]
