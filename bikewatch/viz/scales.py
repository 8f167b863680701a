# bikewatch/viz/scales.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from bikewatch.config import RADIUS_RANGE_ALL_DAY, RADIUS_RANGE_WINDOW
from bikewatch.traffic.window import TimeWindow
from bikewatch.util.stations import StationRecord

DEPARTURES_COLOR = "#4682b4"  # steelblue
ARRIVALS_COLOR = "#ff8c00"    # darkorange

FLOW_LEVELS = (0.0, 0.5, 1.0)


@dataclass(frozen=True)
class RadiusScale:
    """
    Square-root scale: area grows linearly with traffic.

    domain_max <= 0 (no traffic anywhere) maps everything to the low end.
    """
    domain_max: float
    range_min: float
    range_max: float

    def __call__(self, value: float) -> float:
        if self.domain_max <= 0:
            return self.range_min
        v = max(0.0, float(value))
        t = math.sqrt(v) / math.sqrt(self.domain_max)
        return self.range_min + (self.range_max - self.range_min) * t

    @property
    def range(self) -> tuple[float, float]:
        return self.range_min, self.range_max


def radius_range_for(window: TimeWindow) -> tuple[float, float]:
    """[0, 25] for all-day traffic, [3, 50] once a time window is active."""
    return RADIUS_RANGE_ALL_DAY if window.unbounded else RADIUS_RANGE_WINDOW


def radius_scale_for(stations: Iterable[StationRecord], window: TimeWindow) -> RadiusScale:
    peak = max((s.total_traffic for s in stations), default=0)
    lo, hi = radius_range_for(window)
    return RadiusScale(domain_max=float(peak), range_min=lo, range_max=hi)


def quantize_flow(departure_ratio: float | None) -> float:
    """
    Snap a departures share to 0 / 0.5 / 1 (thresholds at 1/3 and 2/3).
    No traffic at all counts as balanced.
    """
    if departure_ratio is None:
        return 0.5
    r = min(1.0, max(0.0, departure_ratio))
    idx = min(len(FLOW_LEVELS) - 1, int(r * len(FLOW_LEVELS)))
    return FLOW_LEVELS[idx]


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    c = color.lstrip("#")
    return int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)


def mix_colors(a: str, b: str, weight_a: float) -> str:
    """`weight_a` of colour a, the rest b (straight sRGB interpolation)."""
    ra, ga, ba = _hex_to_rgb(a)
    rb, gb, bb = _hex_to_rgb(b)
    w = min(1.0, max(0.0, weight_a))
    mixed = (
        round(ra * w + rb * (1 - w)),
        round(ga * w + gb * (1 - w)),
        round(ba * w + bb * (1 - w)),
    )
    return "#{:02x}{:02x}{:02x}".format(*mixed)


def flow_color(station: StationRecord) -> str:
    return mix_colors(DEPARTURES_COLOR, ARRIVALS_COLOR, quantize_flow(station.departure_ratio))
