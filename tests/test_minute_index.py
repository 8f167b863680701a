"""
tests/test_minute_index.py

Tests for traffic/minute_index.py: bucketing trips by minute of day.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from bikewatch.traffic.minute_index import MinuteBuckets, ingest
from bikewatch.util.trips import TripRecord, minute_of_day

from conftest import trip


# ---------------------------------------------------------------------------
# minute_of_day / TripRecord
# ---------------------------------------------------------------------------

class TestMinuteOfDay:

    def test_midnight_is_zero(self):
        assert minute_of_day(datetime(2024, 3, 1, 0, 0)) == 0

    def test_last_minute(self):
        assert minute_of_day(datetime(2024, 3, 1, 23, 59, 59)) == 1439

    def test_seconds_are_dropped(self):
        assert minute_of_day(datetime(2024, 3, 1, 8, 30, 59)) == 510

    def test_aware_timestamp_uses_local_clock(self):
        ts = datetime(2024, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=3)))
        local = ts.astimezone()
        assert minute_of_day(ts) == local.hour * 60 + local.minute

    def test_trip_minutes_computed_once(self):
        t = trip("07:15", "07:42")
        assert t.start_minute == 435
        assert t.end_minute == 462

    def test_trip_is_frozen(self):
        t = trip("07:15", "07:42")
        with pytest.raises(AttributeError):
            t.start_minute = 1


# ---------------------------------------------------------------------------
# MinuteBuckets
# ---------------------------------------------------------------------------

class TestMinuteBuckets:

    def test_has_1440_slots(self):
        b = MinuteBuckets()
        assert len(b) == 1440
        assert all(len(slot) == 0 for slot in b)

    def test_append_out_of_range(self):
        b = MinuteBuckets()
        with pytest.raises(IndexError):
            b.append(1440, trip("00:00", "00:01"))
        with pytest.raises(IndexError):
            b.append(-1, trip("00:00", "00:01"))

    def test_frozen_rejects_append(self):
        b = MinuteBuckets().freeze()
        assert b.frozen
        with pytest.raises(RuntimeError):
            b.append(0, trip("00:00", "00:01"))

    def test_frozen_slots_are_tuples(self):
        b = MinuteBuckets()
        b.append(3, trip("00:03", "00:04"))
        b.freeze()
        assert isinstance(b[3], tuple)
        assert b.counts()[3] == 1
        assert b.total() == 1


# ---------------------------------------------------------------------------
# ingest
# ---------------------------------------------------------------------------

class TestIngest:

    def test_empty_ingest_all_zero(self):
        idx = ingest([])
        assert idx.trip_count == 0
        assert idx.departures.counts() == [0] * 1440
        assert idx.arrivals.counts() == [0] * 1440

    def test_each_trip_in_exactly_one_slot_per_index(self, ab_trips):
        idx = ingest(ab_trips)
        for t in ab_trips:
            dep_slots = [m for m, slot in enumerate(idx.departures) if t in slot]
            arr_slots = [m for m, slot in enumerate(idx.arrivals) if t in slot]
            assert dep_slots == [t.start_minute]
            assert arr_slots == [t.end_minute]

    def test_totals_match_input(self):
        trips = [trip(f"{h:02d}:{m:02d}", "23:59") for h in range(0, 24, 3) for m in (0, 17, 59)]
        idx = ingest(trips)
        assert idx.trip_count == len(trips)
        assert idx.departures.total() == len(trips)
        assert idx.arrivals.total() == len(trips)
        assert len(idx.arrivals[1439]) == len(trips)

    def test_insertion_order_kept_within_bucket(self):
        a = trip("09:00", "09:30", "A", "B")
        b = trip("09:00", "09:45", "C", "D")
        c = trip("09:00", "09:10", "E", "F")
        idx = ingest([a, b, c])
        assert list(idx.departures[540]) == [a, b, c]

    def test_overnight_trip(self):
        t = TripRecord(
            started_at=datetime(2024, 3, 1, 23, 50),
            ended_at=datetime(2024, 3, 2, 0, 20),
            start_station_id="A",
            end_station_id="B",
        )
        idx = ingest([t])
        assert idx.departures[1430] == (t,)
        assert idx.arrivals[20] == (t,)

    def test_index_is_frozen(self, ab_trips):
        idx = ingest(ab_trips)
        assert idx.departures.frozen and idx.arrivals.frozen

    def test_accepts_generator(self, ab_trips):
        idx = ingest(t for t in ab_trips)
        assert idx.trip_count == 2
