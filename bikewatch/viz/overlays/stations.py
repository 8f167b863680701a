# bikewatch/viz/overlays/stations.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import folium

from bikewatch.util.stations import StationRecord
from bikewatch.viz.scales import RadiusScale, flow_color
from bikewatch.viz.viewport import MapRenderer


def station_tooltip(s: StationRecord) -> str:
    return f"{s.total_traffic} trips ({s.departures} departures, {s.arrivals} arrivals)"


@dataclass
class StationMarker:
    station_id: str
    lon: float
    lat: float
    name: str = ""
    radius: float = 0.0
    color: str = "#666666"
    tooltip: str = ""
    x: float | None = None
    y: float | None = None
    station: StationRecord | None = field(default=None, repr=False)

    def bind(self, s: StationRecord, radius_scale: RadiusScale) -> None:
        self.station = s
        self.lon = s.lon
        self.lat = s.lat
        self.name = s.name
        self.radius = radius_scale(s.total_traffic)
        self.color = flow_color(s)
        self.tooltip = station_tooltip(s)


@dataclass
class JoinResult:
    entered: list[str]
    updated: list[str]
    exited: list[str]


class MarkerView:
    """
    Circle per station, keyed by station id (not list position), so a re-render
    with new traffic numbers updates the existing markers instead of rebuilding
    them. Stations that disappear from the input are dropped.
    """

    def __init__(self, renderer: MapRenderer | None = None):
        self.renderer = renderer
        self._markers: dict[str, StationMarker] = {}
        self.radius_scale: RadiusScale | None = None

    @property
    def markers(self) -> dict[str, StationMarker]:
        return self._markers

    def render(self, stations: Iterable[StationRecord], radius_scale: RadiusScale) -> JoinResult:
        self.radius_scale = radius_scale

        entered: list[str] = []
        updated: list[str] = []
        seen: dict[str, StationMarker] = {}

        for s in stations:
            # repeated id in one input: last record wins, one marker
            marker = seen.get(s.id)
            if marker is None:
                marker = self._markers.get(s.id)
                if marker is None:
                    marker = StationMarker(station_id=s.id, lon=s.lon, lat=s.lat)
                    entered.append(s.id)
                else:
                    updated.append(s.id)
            marker.bind(s, radius_scale)
            seen[s.id] = marker

        exited = [sid for sid in self._markers if sid not in seen]
        self._markers = seen

        if self.renderer is not None:
            self.reposition()

        return JoinResult(entered=entered, updated=updated, exited=exited)

    def reposition(self, _viewport=None) -> None:
        """Recompute pixel positions; subscribe this to viewport changes."""
        if self.renderer is None:
            return
        for m in self._markers.values():
            m.x, m.y = self.renderer.project(m.lon, m.lat)

    def add_to(self, m: folium.Map) -> folium.FeatureGroup:
        group = folium.FeatureGroup(name="Stations")
        # biggest first so small circles stay clickable on top
        for mk in sorted(self._markers.values(), key=lambda x: -x.radius):
            popup = [f"<b>{mk.name}</b>", f"Station ID: {mk.station_id}"]
            if mk.station is not None and mk.station.capacity is not None:
                popup.append(f"Capacity: {mk.station.capacity}")
            popup.append(mk.tooltip)

            folium.CircleMarker(
                location=[float(mk.lat), float(mk.lon)],
                radius=mk.radius,
                color="white",
                weight=1,
                fill=True,
                fill_color=mk.color,
                fill_opacity=0.6,
                tooltip=mk.tooltip,
                popup="<br>".join(popup),
            ).add_to(group)

        group.add_to(m)
        return group
