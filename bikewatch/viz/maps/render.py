# bikewatch/viz/maps/render.py
from __future__ import annotations

import json

import folium

from bikewatch.viz.controller import TrafficMapController
from bikewatch.viz.overlays.bike_lanes import build_bike_lanes
from bikewatch.viz.widgets.legend import build_legend_widget
from bikewatch.viz.widgets.time_slider import build_time_slider


def build_map(controller: TrafficMapController, *, bike_lanes: bool = True) -> folium.Map:
    m = controller.renderer.to_folium()

    # bike lanes under the stations
    if bike_lanes:
        m.get_root().html.add_child(build_bike_lanes(m))

    controller.marker_view.add_to(m)

    m.get_root().html.add_child(
        build_time_slider(
            controller.window,
            departures_by_minute=controller.aggregator.index.departures.counts(),
        )
    )
    m.get_root().html.add_child(build_legend_widget())
    return m


def js_string(text: str) -> str:
    """
    JSON string literal that is safe inside an inline <script> and inside a
    Jinja-rendered folium.Element.
    """
    return (
        json.dumps(text)
        .replace("<", "\\u003c")
        .replace("{", "\\u007b")
        .replace("}", "\\u007d")
    )


def build_page_frame(title: str | None = None) -> folium.Element:
    """Full-height map plus the title pill."""
    title_js = js_string(title) if title else "null"

    return folium.Element(
        f"""
<style>
.leaflet-container {{
  height: 85vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const title = {title_js};
  const wrap = document.getElementById("map-wrap");
  if (!title || !wrap) return;

  const t = document.createElement("div");
  t.id = "map-title";
  t.textContent = title;
  wrap.appendChild(t);
}});
</script>
"""
    )


def render_map_document(
    controller: TrafficMapController,
    *,
    title: str | None = None,
    bike_lanes: bool = True,
) -> str:
    """
    Single place that assembles the full Folium map HTML document for the
    controller's current window.
    """
    m = build_map(controller, bike_lanes=bike_lanes)
    m.get_root().html.add_child(build_page_frame(title))
    return m.get_root().render()
