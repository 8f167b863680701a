# bikewatch/traffic/minute_index.py
from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable, Iterator, Sequence

from bikewatch.util.trips import MINUTES_PER_DAY, TripRecord


class MinuteBuckets(Sequence):
    """
    1440 slots, slot i = trips whose event minute-of-day is i.

    Appendable while building; freeze() turns every slot into a tuple and
    further appends raise. Readers only ever see a frozen container.
    """

    __slots__ = ("_slots", "_frozen")

    def __init__(self):
        self._slots: list = [[] for _ in range(MINUTES_PER_DAY)]
        self._frozen = False

    def append(self, minute: int, trip: TripRecord) -> None:
        if self._frozen:
            raise RuntimeError("MinuteBuckets is frozen")
        if not 0 <= minute < MINUTES_PER_DAY:
            raise IndexError(f"minute {minute} outside 0..{MINUTES_PER_DAY - 1}")
        self._slots[minute].append(trip)

    def freeze(self) -> "MinuteBuckets":
        if not self._frozen:
            self._slots = [tuple(s) for s in self._slots]
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, minute):
        return self._slots[minute]

    def __len__(self) -> int:
        return MINUTES_PER_DAY

    def __iter__(self) -> Iterator[Sequence[TripRecord]]:
        return iter(self._slots)

    def total(self) -> int:
        return sum(len(s) for s in self._slots)

    def counts(self) -> list[int]:
        """Trips per minute, handy for histograms."""
        return [len(s) for s in self._slots]


@dataclass(frozen=True)
class MinuteBucketIndex:
    departures: MinuteBuckets   # keyed by start minute
    arrivals: MinuteBuckets     # keyed by end minute
    trip_count: int


def ingest(trips: Iterable[TripRecord]) -> MinuteBucketIndex:
    """
    Bucket every trip by start minute (departures) and end minute (arrivals).

    Within a bucket trips keep their input order. The returned index is frozen.
    """
    departures = MinuteBuckets()
    arrivals = MinuteBuckets()

    n = 0
    for trip in trips:
        departures.append(trip.start_minute, trip)
        arrivals.append(trip.end_minute, trip)
        n += 1

    return MinuteBucketIndex(
        departures=departures.freeze(),
        arrivals=arrivals.freeze(),
        trip_count=n,
    )
