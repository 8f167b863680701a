# bikewatch/traffic/aggregator.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from bikewatch.traffic.minute_index import MinuteBucketIndex, MinuteBuckets, ingest
from bikewatch.traffic.window import TimeWindow, select_window
from bikewatch.util.stations import StationRecord
from bikewatch.util.trips import TripRecord

DEPARTURES = "departures"
ARRIVALS = "arrivals"


def _count_by(trips: Iterable[TripRecord], attr: str) -> dict[str, int]:
    counts: dict[str, int] = {}
    for t in trips:
        sid = getattr(t, attr)
        counts[sid] = counts.get(sid, 0) + 1
    return counts


def compute_station_traffic(
    index: MinuteBucketIndex,
    stations: Sequence[StationRecord],
    window: TimeWindow = TimeWindow.UNBOUNDED,
) -> list[StationRecord]:
    """
    Arrivals / departures / total per station for `window`.

    Returns new StationRecords in the same order as `stations`; the inputs are
    left untouched. Stations with no trips in the window come back with zeros.
    """
    deps = select_window(index.departures, window)
    arrs = select_window(index.arrivals, window)

    departure_counts = _count_by(deps, "start_station_id")
    arrival_counts = _count_by(arrs, "end_station_id")

    out = []
    for s in stations:
        a = arrival_counts.get(s.id, 0)
        d = departure_counts.get(s.id, 0)
        out.append(replace(s, arrivals=a, departures=d, total_traffic=a + d))
    return out


@dataclass(frozen=True)
class TrafficAggregator:
    """
    Station list + frozen minute index, built once and then only queried.
    """
    stations: tuple[StationRecord, ...]
    index: MinuteBucketIndex

    @classmethod
    def build(
        cls,
        stations: Iterable[StationRecord],
        trips: Iterable[TripRecord],
    ) -> "TrafficAggregator":
        return cls(stations=tuple(stations), index=ingest(trips))

    @property
    def trip_count(self) -> int:
        return self.index.trip_count

    def buckets(self, kind: str) -> MinuteBuckets:
        if kind == DEPARTURES:
            return self.index.departures
        if kind == ARRIVALS:
            return self.index.arrivals
        raise ValueError(f"kind must be {DEPARTURES!r} or {ARRIVALS!r}, got {kind!r}")

    def select(self, kind: str, window: TimeWindow) -> list[TripRecord]:
        return select_window(self.buckets(kind), window)

    def station_traffic(self, window: TimeWindow = TimeWindow.UNBOUNDED) -> list[StationRecord]:
        return compute_station_traffic(self.index, self.stations, window)
