# bikewatch/util/trips.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

import pandas as pd
from tqdm import tqdm

from bikewatch.errors import MalformedDocumentError, MalformedTripError
from bikewatch.util import console

REQUIRED_COLUMNS = ("start_station_id", "end_station_id", "started_at", "ended_at")

MINUTES_PER_DAY = 1440


def minute_of_day(ts: datetime) -> int:
    """Local wall-clock minutes since midnight, 0..1439."""
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.hour * 60 + ts.minute


@dataclass(frozen=True)
class TripRecord:
    started_at: datetime
    ended_at: datetime
    start_station_id: str
    end_station_id: str
    start_minute: int = field(init=False)
    end_minute: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "start_minute", minute_of_day(self.started_at))
        object.__setattr__(self, "end_minute", minute_of_day(self.ended_at))


@dataclass
class TripBatch:
    """
    Result of parsing a trip CSV.

    trips:      rows that made it through
    total_rows: rows in the source document
    skipped:    rows dropped for a bad timestamp or a blank station id
    """
    trips: list[TripRecord]
    total_rows: int
    skipped: int


def _parse_timestamp(value: Any) -> datetime:
    # NaT is a datetime subclass, so check for missing first
    if value is None or pd.isna(value):
        raise MalformedTripError(f"missing timestamp: {value!r}")
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        raise MalformedTripError(f"unparseable timestamp: {value!r}")
    return ts.to_pydatetime()


def trip_from_row(row: Mapping[str, Any]) -> TripRecord:
    """
    Build a TripRecord from one CSV-style row. Raises MalformedTripError on a
    missing field, a blank station id or a timestamp that doesn't parse.
    """
    try:
        s0 = row["start_station_id"]
        s1 = row["end_station_id"]
        started = row["started_at"]
        ended = row["ended_at"]
    except KeyError as e:
        raise MalformedTripError(f"trip row missing field {e.args[0]!r}") from e

    s0 = "" if s0 is None or pd.isna(s0) else str(s0).strip()
    s1 = "" if s1 is None or pd.isna(s1) else str(s1).strip()
    if not s0 or not s1:
        raise MalformedTripError("trip row has a blank station id")

    return TripRecord(
        started_at=_parse_timestamp(started),
        ended_at=_parse_timestamp(ended),
        start_station_id=s0,
        end_station_id=s1,
    )


def _to_datetimes(col: pd.Series) -> pd.Series:
    """
    Vectorised timestamp parse; bad values become NaT.

    Offsets that change inside one file (DST) are normalised through UTC; the
    resulting aware timestamps are read in local time by minute_of_day.
    """
    try:
        return pd.to_datetime(col, errors="coerce", format="mixed")
    except ValueError:
        # mixed UTC offsets
        try:
            return pd.to_datetime(col, errors="coerce", format="mixed", utc=True)
        except ValueError as e:
            raise MalformedDocumentError(f"trips CSV timestamps could not be parsed: {e}") from e


def parse_trip_frame(df: pd.DataFrame, *, show_progress: bool = False) -> TripBatch:
    """
    Clean a raw trips DataFrame into TripRecords.

    Column names are matched after stripping whitespace. Every row goes through
    trip_from_row; rows it rejects (bad timestamp, empty station id) are
    dropped and counted.
    """
    colmap = {str(c).strip(): c for c in df.columns}
    missing = [c for c in REQUIRED_COLUMNS if c not in colmap]
    if missing:
        raise MalformedDocumentError(f"trips CSV missing columns: {', '.join(missing)}")

    total_rows = len(df)

    out = pd.DataFrame(
        {
            "start_station_id": df[colmap["start_station_id"]],
            "end_station_id": df[colmap["end_station_id"]],
            "started_at": _to_datetimes(df[colmap["started_at"]]),
            "ended_at": _to_datetimes(df[colmap["ended_at"]]),
        }
    )

    rows = out.to_dict("records")
    if show_progress:
        rows = tqdm(rows, total=len(out), desc="Parsing trips")

    trips = []
    for row in rows:
        try:
            trips.append(trip_from_row(row))
        except MalformedTripError:
            continue

    skipped = total_rows - len(trips)
    if skipped:
        console.warn(f"Skipped {skipped} of {total_rows} trip rows (bad timestamp or station id)")

    return TripBatch(trips=trips, total_rows=total_rows, skipped=skipped)


def read_trip_csv(source, *, show_progress: bool = False) -> TripBatch:
    """
    Read a Bluebikes traffic CSV (path or file-like). Expected columns:

      ride_id, bike_type, started_at, ended_at, start_station_id, end_station_id, is_member

    Only the four trip columns are used.
    """
    try:
        df = pd.read_csv(
            source,
            dtype={"start_station_id": "string", "end_station_id": "string"},
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        df = pd.DataFrame(columns=list(REQUIRED_COLUMNS))
    except pd.errors.ParserError as e:
        raise MalformedDocumentError(f"trips CSV could not be parsed: {e}") from e

    return parse_trip_frame(df, show_progress=show_progress)


def load_trips(path: str | Path, *, show_progress: bool = True) -> TripBatch:
    return read_trip_csv(Path(path), show_progress=show_progress)
