# bikewatch/viz/widgets/legend.py
import folium

from bikewatch.viz.scales import ARRIVALS_COLOR, DEPARTURES_COLOR, mix_colors


def build_legend_widget():
    """
    Floating legend for the three flow classes.
    """
    balanced = mix_colors(DEPARTURES_COLOR, ARRIVALS_COLOR, 0.5)

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 110px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1200;
}}
#map-legend .legend-title {{
  font-weight: 600;
  margin-bottom: 4px;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    wrap.style.position = "relative";
    wrap.style.width = "100%";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existing = document.getElementById("map-legend");
  if (existing) existing.remove();

  const legend = document.createElement("div");
  legend.id = "map-legend";
  legend.innerHTML = `
    <div class="legend-title">Legend</div>
    <div><span style="color:{DEPARTURES_COLOR}">●</span> more departures</div>
    <div><span style="color:{balanced}">●</span> balanced</div>
    <div><span style="color:{ARRIVALS_COLOR}">●</span> more arrivals</div>
  `;
  wrap.appendChild(legend);
}});
</script>
"""
    )
