# bikewatch/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

LAB_DATA_URL = "https://dsc-courses.github.io/dsc209r-2025-fa/labs/lab07/data"

DEFAULT_STATIONS_URL = f"{LAB_DATA_URL}/bluebikes-stations.json"
DEFAULT_TRIPS_URL = f"{LAB_DATA_URL}/bluebikes-traffic-2024-03.csv"

# Boston, MA
CENTER_LON = -71.09415
CENTER_LAT = 42.36027
ZOOM_START = 12
MIN_ZOOM = 5
MAX_ZOOM = 18

# radius ranges for the marker scale
RADIUS_RANGE_ALL_DAY = (0.0, 25.0)
RADIUS_RANGE_WINDOW = (3.0, 50.0)

BIKE_LANE_SOURCES = {
    "boston_route": (
        "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
        "boston::existing-bike-network-2022.geojson"
    ),
    "cambridge_route": (
        "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
        "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
    ),
}

BIKE_LANE_STYLE = {
    "color": "#5bb450",
    "weight": 3,
    "opacity": 0.4,
}

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    stations_url: str = DEFAULT_STATIONS_URL
    trips_url: str = DEFAULT_TRIPS_URL
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    bike_lanes: bool = True
    show_progress: bool = True
    title: str = "Bikewatching"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read overrides from the environment:
          BIKEWATCH_STATIONS_URL, BIKEWATCH_TRIPS_URL, HOST, PORT,
          BIKEWATCH_DEBUG, BIKEWATCH_BIKE_LANES
        """
        return cls(
            stations_url=os.environ.get("BIKEWATCH_STATIONS_URL", DEFAULT_STATIONS_URL),
            trips_url=os.environ.get("BIKEWATCH_TRIPS_URL", DEFAULT_TRIPS_URL),
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "8080")),
            debug=_env_flag("BIKEWATCH_DEBUG", False),
            bike_lanes=_env_flag("BIKEWATCH_BIKE_LANES", True),
        )
