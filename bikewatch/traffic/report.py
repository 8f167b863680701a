# bikewatch/traffic/report.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from bikewatch.util.stations import StationRecord

COLUMNS = ["id", "name", "lon", "lat", "capacity", "arrivals", "departures", "total_traffic"]


def traffic_frame(stations: Iterable[StationRecord]) -> pd.DataFrame:
    """One row per station, indexed by station id, in input order."""
    df = pd.DataFrame([s.to_dict() for s in stations], columns=COLUMNS)
    return df.set_index("id")


def busiest(stations: Iterable[StationRecord], n: int = 10) -> pd.DataFrame:
    df = traffic_frame(stations)
    return df.sort_values("total_traffic", ascending=False, kind="stable").head(n)


def write_traffic_csv(stations: Iterable[StationRecord], out_csv: str | Path) -> Path:
    out_csv = Path(out_csv)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    traffic_frame(stations).to_csv(out_csv, index=True)
    return out_csv
