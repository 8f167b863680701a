# bikewatch/viz/viewport.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import folium

from bikewatch.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, ZOOM_START
from bikewatch.viz.events import (
    VIEWPORT_EVENTS,
    VIEWPORT_MOVE,
    VIEWPORT_RESIZE,
    VIEWPORT_ZOOM,
    EventDispatcher,
)

TILE_SIZE = 256
MAX_LAT = 85.0511287798


@dataclass(frozen=True)
class Viewport:
    center_lon: float
    center_lat: float
    zoom: float
    width: int
    height: int


def _world_px(lon: float, lat: float, zoom: float) -> tuple[float, float]:
    """Web Mercator world pixel coordinates at `zoom`."""
    lat = max(-MAX_LAT, min(MAX_LAT, lat))
    scale = TILE_SIZE * (2.0 ** zoom)
    x = (lon + 180.0) / 360.0 * scale
    s = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * scale
    return x, y


def _lon_lat(x: float, y: float, zoom: float) -> tuple[float, float]:
    scale = TILE_SIZE * (2.0 ** zoom)
    lon = x / scale * 360.0 - 180.0
    n = math.pi - 2.0 * math.pi * y / scale
    lat = math.degrees(math.atan(math.sinh(n)))
    return lon, lat


class MapRenderer:
    """
    Python side of the map: knows the current viewport, projects lon/lat to
    container pixels, and tells subscribers when the viewport moves.

    pan / zoom_to / resize each fire one event (move / zoom / resize) through
    the dispatcher. Handlers get the new Viewport.
    """

    def __init__(
        self,
        *,
        center_lon: float = CENTER_LON,
        center_lat: float = CENTER_LAT,
        zoom: float = ZOOM_START,
        width: int = 1024,
        height: int = 768,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
        dispatcher: EventDispatcher | None = None,
    ):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.dispatcher = dispatcher or EventDispatcher()
        self._viewport = Viewport(
            center_lon=center_lon,
            center_lat=center_lat,
            zoom=self._clamp_zoom(zoom),
            width=int(width),
            height=int(height),
        )

    def _clamp_zoom(self, z: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, z))

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def project(self, lon: float, lat: float) -> tuple[float, float]:
        """lon/lat -> (x, y) pixels inside the map container."""
        vp = self._viewport
        cx, cy = _world_px(vp.center_lon, vp.center_lat, vp.zoom)
        x, y = _world_px(lon, lat, vp.zoom)
        return x - cx + vp.width / 2, y - cy + vp.height / 2

    def on_viewport_change(self, handler: Callable[[Viewport], None]) -> Callable[[], None]:
        unsubs = [self.dispatcher.subscribe(k, handler) for k in VIEWPORT_EVENTS]

        def _unsubscribe():
            for u in unsubs:
                u()

        return _unsubscribe

    def _set(self, kind: str, **changes) -> Viewport:
        vp = self._viewport
        self._viewport = Viewport(**{**vp.__dict__, **changes})
        self.dispatcher.notify(kind, self._viewport)
        return self._viewport

    def pan(self, dx: float, dy: float) -> Viewport:
        """Move the view by (dx, dy) container pixels."""
        vp = self._viewport
        cx, cy = _world_px(vp.center_lon, vp.center_lat, vp.zoom)
        lon, lat = _lon_lat(cx + dx, cy + dy, vp.zoom)
        return self._set(VIEWPORT_MOVE, center_lon=lon, center_lat=lat)

    def zoom_to(self, zoom: float) -> Viewport:
        return self._set(VIEWPORT_ZOOM, zoom=self._clamp_zoom(zoom))

    def resize(self, width: int, height: int) -> Viewport:
        return self._set(VIEWPORT_RESIZE, width=int(width), height=int(height))

    def to_folium(self) -> folium.Map:
        vp = self._viewport
        return folium.Map(
            location=[vp.center_lat, vp.center_lon],
            zoom_start=vp.zoom,
            min_zoom=self.min_zoom,
            max_zoom=self.max_zoom,
            tiles="cartodbpositron",
            prefer_canvas=False,
        )
