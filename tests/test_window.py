"""
tests/test_window.py

Tests for traffic/window.py: ±60 minute windows and bucket selection.
"""

from __future__ import annotations

import pytest

from bikewatch.traffic.minute_index import ingest
from bikewatch.traffic.window import ANY_TIME, TimeWindow, clamp_slider, select_window

from conftest import trip


def one_trip_per_minute():
    trips = []
    for m in range(1440):
        hhmm = f"{m // 60:02d}:{m % 60:02d}"
        trips.append(trip(hhmm, hhmm, f"S{m}", f"S{m}"))
    return trips


# ---------------------------------------------------------------------------
# TimeWindow
# ---------------------------------------------------------------------------

class TestTimeWindow:

    def test_unbounded_sentinel(self):
        assert TimeWindow.UNBOUNDED.unbounded
        assert TimeWindow.UNBOUNDED.slider_value == ANY_TIME

    def test_from_slider(self):
        assert TimeWindow.from_slider(-1) is TimeWindow.UNBOUNDED
        assert TimeWindow.from_slider(600).minute == 600

    @pytest.mark.parametrize("bad", [-2, 1440, 5000])
    def test_rejects_out_of_range(self, bad):
        with pytest.raises(ValueError):
            TimeWindow(bad)

    def test_bounds_no_wrap(self):
        assert TimeWindow(719).bounds() == (659, 779)

    def test_bounds_wrap(self):
        assert TimeWindow(0).bounds() == (1380, 60)
        assert TimeWindow(1400).bounds() == (1340, 20)

    @pytest.mark.parametrize("m", [0, 1, 59, 60, 61, 719, 1379, 1380, 1439])
    def test_always_120_distinct_buckets(self, m):
        minutes = TimeWindow(m).minutes()
        assert len(minutes) == 120
        assert len(set(minutes)) == 120

    def test_m0_wraps_past_midnight(self):
        assert TimeWindow(0).minutes() == list(range(1380, 1440)) + list(range(0, 60))

    def test_m719_no_wrap(self):
        assert TimeWindow(719).minutes() == list(range(659, 779))

    def test_clamp_slider(self):
        assert clamp_slider(-50) == -1
        assert clamp_slider(2000) == 1439
        assert clamp_slider(42) == 42


# ---------------------------------------------------------------------------
# select_window
# ---------------------------------------------------------------------------

class TestSelectWindow:

    def test_unbounded_returns_everything_in_minute_order(self):
        trips = one_trip_per_minute()
        idx = ingest(reversed(trips))
        selected = select_window(idx.departures, TimeWindow.UNBOUNDED)
        assert selected == trips

    def test_unbounded_is_idempotent(self, ab_trips):
        idx = ingest(ab_trips)
        first = select_window(idx.arrivals, TimeWindow.UNBOUNDED)
        second = select_window(idx.arrivals, TimeWindow.UNBOUNDED)
        assert first == second == ab_trips

    def test_windowed_covers_exact_buckets(self):
        idx = ingest(one_trip_per_minute())
        selected = select_window(idx.departures, TimeWindow(719))
        assert [t.start_minute for t in selected] == list(range(659, 779))

    def test_wrapped_order_is_late_then_early(self):
        idx = ingest(one_trip_per_minute())
        selected = select_window(idx.departures, TimeWindow(0))
        mins = [t.start_minute for t in selected]
        assert mins == list(range(1380, 1440)) + list(range(0, 60))

    def test_upper_bound_is_exclusive(self):
        inside = trip("01:59", "01:59")
        edge = trip("02:00", "02:00")
        lower = trip("00:00", "00:00")
        idx = ingest([inside, edge, lower])
        selected = select_window(idx.departures, TimeWindow(60))
        assert inside in selected
        assert lower in selected
        assert edge not in selected

    def test_query_does_not_mutate_index(self, ab_trips):
        idx = ingest(ab_trips)
        before = idx.departures.counts()
        select_window(idx.departures, TimeWindow(5)).clear()
        assert idx.departures.counts() == before
