# bikewatch/viz/overlays/bike_lanes.py
import json

import folium

from bikewatch.config import BIKE_LANE_SOURCES, BIKE_LANE_STYLE


def build_bike_lanes(m: folium.Map, sources=None, style=None) -> folium.Element:
    """
    Boston + Cambridge bike network layers.

    The GeoJSON is fetched by the browser after the page loads (these files are
    several MB), so rendering the document never touches the network.
    """
    sources = BIKE_LANE_SOURCES if sources is None else sources
    style = BIKE_LANE_STYLE if style is None else style

    map_var = m.get_name()
    layers = json.dumps([{"id": k, "url": v} for k, v in sources.items()])

    return folium.Element(
        f"""
<script>
document.addEventListener("DOMContentLoaded", () => {{
  const map = window[{json.dumps(map_var)}];
  if (!map) return;

  const style = {json.dumps(style)};
  const layers = {layers};

  layers.forEach((layer) => {{
    fetch(layer.url)
      .then((resp) => {{
        if (!resp.ok) throw new Error(resp.status + " " + resp.statusText);
        return resp.json();
      }})
      .then((data) => {{
        L.geoJSON(data, {{ style: () => style }}).addTo(map);
        console.log("Bike lanes layer added:", layer.id);
      }})
      .catch((err) => console.error("Error loading bike lanes", layer.id, err));
  }});
}});
</script>
"""
    )
