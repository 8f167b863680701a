# bikewatch/traffic/window.py
from __future__ import annotations

from dataclasses import dataclass
from itertools import chain

from bikewatch.traffic.minute_index import MinuteBuckets
from bikewatch.util.trips import MINUTES_PER_DAY, TripRecord

HALF_WIDTH_MINUTES = 60

# slider value meaning "no time filter"
ANY_TIME = -1


@dataclass(frozen=True)
class TimeWindow:
    """
    minute is None  -> unbounded (every trip)
    minute in 0..1439 -> buckets [minute-60, minute+60) mod 1440
    """
    minute: int | None = None

    def __post_init__(self):
        if self.minute is not None and not 0 <= self.minute < MINUTES_PER_DAY:
            raise ValueError(f"window minute must be in 0..{MINUTES_PER_DAY - 1}, got {self.minute}")

    @classmethod
    def from_slider(cls, value: int) -> "TimeWindow":
        """Slider range is [-1, 1439]; -1 means any time."""
        value = int(value)
        if value == ANY_TIME:
            return cls.UNBOUNDED
        return cls(value)

    @property
    def unbounded(self) -> bool:
        return self.minute is None

    @property
    def slider_value(self) -> int:
        return ANY_TIME if self.minute is None else self.minute

    def bounds(self) -> tuple[int, int]:
        """(lo, hi) bucket bounds, half-open. Wraps when lo > hi."""
        if self.minute is None:
            return 0, MINUTES_PER_DAY
        lo = (self.minute - HALF_WIDTH_MINUTES + MINUTES_PER_DAY) % MINUTES_PER_DAY
        hi = (self.minute + HALF_WIDTH_MINUTES) % MINUTES_PER_DAY
        return lo, hi

    def bucket_ranges(self) -> list[range]:
        if self.minute is None:
            return [range(0, MINUTES_PER_DAY)]
        lo, hi = self.bounds()
        if lo <= hi:
            return [range(lo, hi)]
        return [range(lo, MINUTES_PER_DAY), range(0, hi)]

    def minutes(self) -> list[int]:
        """Every bucket index the window covers, in selection order."""
        return [m for r in self.bucket_ranges() for m in r]


TimeWindow.UNBOUNDED = TimeWindow()


def clamp_slider(value: int) -> int:
    return max(ANY_TIME, min(MINUTES_PER_DAY - 1, int(value)))


def select_window(buckets: MinuteBuckets, window: TimeWindow) -> list[TripRecord]:
    """
    Trips in the buckets covered by `window`, concatenated in bucket order.

    Wrapped windows return [lo, 1440) first, then [0, hi).
    """
    return list(chain.from_iterable(buckets[m] for m in window.minutes()))
