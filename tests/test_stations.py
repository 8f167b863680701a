"""
tests/test_stations.py

Tests for util/stations.py: GBFS station document parsing.
"""

from __future__ import annotations

import json

import pytest

from bikewatch.errors import MalformedDocumentError, MalformedStationError
from bikewatch.util.stations import StationRecord, load_stations, parse_stations, station_from_json


def doc(*stations):
    return {"data": {"stations": list(stations)}}


def raw(short_name="A32000", name="Kendall T", lat=42.3625, lon=-71.0843, **extra):
    return {"short_name": short_name, "name": name, "lat": lat, "lon": lon, **extra}


class TestStationFromJson:

    def test_good_entry(self):
        s = station_from_json(raw(capacity=19))
        assert s == StationRecord(id="A32000", name="Kendall T", lon=-71.0843, lat=42.3625, capacity=19)

    def test_missing_short_name(self):
        with pytest.raises(MalformedStationError):
            station_from_json(raw(short_name=None))

    def test_bad_coordinates(self):
        with pytest.raises(MalformedStationError):
            station_from_json(raw(lat="north"))

    def test_capacity_optional(self):
        assert station_from_json(raw()).capacity is None
        assert station_from_json(raw(capacity="x")).capacity is None


class TestParseStations:

    def test_skips_bad_entries(self):
        out = parse_stations(doc(raw(), raw(short_name=""), "junk", raw(short_name="B1")))
        assert [s.id for s in out] == ["A32000", "B1"]

    def test_empty_list_is_fine(self):
        assert parse_stations(doc()) == []

    @pytest.mark.parametrize("bad", [{}, {"data": {}}, {"data": {"stations": {}}}, [], None])
    def test_wrong_shape(self, bad):
        with pytest.raises(MalformedDocumentError):
            parse_stations(bad)

    def test_load_from_file(self, tmp_path):
        p = tmp_path / "stations.json"
        p.write_text(json.dumps(doc(raw(), raw(short_name="B1"))))
        assert len(load_stations(p)) == 2


class TestStationRecord:

    def test_departure_ratio(self):
        s = StationRecord(id="A", name="A", lon=0, lat=0, arrivals=1, departures=3, total_traffic=4)
        assert s.departure_ratio == 0.75

    def test_departure_ratio_no_traffic(self):
        assert StationRecord(id="A", name="A", lon=0, lat=0).departure_ratio is None
