# bikewatch/viz/widgets/time_slider.py
from __future__ import annotations

import folium

from bikewatch.traffic.window import ANY_TIME, TimeWindow
from bikewatch.util.trips import MINUTES_PER_DAY

ANY_TIME_LABEL = "(any time)"


def format_minutes(minute: int) -> str:
    """690 -> '11:30 AM', 0 -> '12:00 AM'."""
    h, mm = divmod(int(minute) % MINUTES_PER_DAY, 60)
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:{mm:02d} {suffix}"


def window_label(window: TimeWindow) -> str:
    return ANY_TIME_LABEL if window.unbounded else format_minutes(window.minute)


def hourly_totals(minute_counts: list[int]) -> list[int]:
    """Collapse 1440 per-minute counts into 24 per-hour counts."""
    return [sum(minute_counts[h * 60:(h + 1) * 60]) for h in range(24)]


def build_time_slider(window: TimeWindow, *, departures_by_minute: list[int] | None = None):
    """
    Time filter:
      - range input over [-1, 1439], -1 = any time
      - label shows h:mm AM/PM or "(any time)"
      - optional backdrop of departures per hour, current window highlighted

    Changing the slider reloads the page with ?t=<value>.
    """
    value = window.slider_value
    covered_hours = {m // 60 for m in window.minutes()} if not window.unbounded else set()

    bars = []
    if departures_by_minute is not None:
        per_hour = hourly_totals(departures_by_minute)
        peak = max(per_hour, default=0)
        for h, c in enumerate(per_hour):
            height = int((c / peak) * 36) if peak > 0 else 0
            active = window.unbounded or h in covered_hours
            bars.append(
                f"""<div class="slider-bar" title="{format_minutes(h * 60)}: {c} departures"
                     style="height:{height}px; opacity:{'0.9' if active else '0.3'};"></div>"""
            )

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  top: 12px;
  right: 16px;
  width: 320px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 13px;
  z-index: 1300;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}
#time-filter label {{
  display: flex;
  gap: 8px;
  align-items: baseline;
}}
#time-slider {{
  flex: 1;
}}
#selected-time {{
  display: block;
  text-align: right;
  font-weight: 600;
}}
#any-time {{
  display: block;
  text-align: right;
  color: #888;
  font-style: italic;
}}
#slider-bars {{
  display: flex;
  align-items: flex-end;
  gap: 2px;
  height: 36px;
  margin-top: 4px;
}}
.slider-bar {{
  flex: 1;
  background: #4682b4;
  border-radius: 1px;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{ANY_TIME}" max="{MINUTES_PER_DAY - 1}" value="{value}">
  </label>
  <time id="selected-time">{'' if window.unbounded else format_minutes(window.minute)}</time>
  <em id="any-time" style="display:{'block' if window.unbounded else 'none'}">{ANY_TIME_LABEL}</em>
  <div id="slider-bars">{''.join(bars)}</div>
</div>

<script>
function formatMinutes(minutes) {{
  const date = new Date(0, 0, 0, 0, minutes);
  return date.toLocaleString("en-US", {{ timeStyle: "short" }});
}}

function updateTimeDisplay() {{
  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  const t = Number(slider.value);

  if (t === {ANY_TIME}) {{
    selected.textContent = "";
    anyTime.style.display = "block";
  }} else {{
    selected.textContent = formatMinutes(t);
    anyTime.style.display = "none";
  }}
}}

function applyTime() {{
  const url = new URL(window.location.href);
  url.searchParams.set("t", document.getElementById("time-slider").value);
  window.location.href = url.toString();
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  if (!slider) return;
  slider.addEventListener("input", updateTimeDisplay);
  slider.addEventListener("change", applyTime);

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
  wrap.appendChild(document.getElementById("time-filter"));
}});
</script>
"""
    )
