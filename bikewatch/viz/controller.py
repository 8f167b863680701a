# bikewatch/viz/controller.py
from __future__ import annotations

from bikewatch.traffic.aggregator import TrafficAggregator
from bikewatch.traffic.window import ANY_TIME, TimeWindow, clamp_slider
from bikewatch.util.stations import StationRecord
from bikewatch.viz.events import TIME_CHANGE, EventDispatcher
from bikewatch.viz.overlays.stations import JoinResult, MarkerView
from bikewatch.viz.scales import RadiusScale, radius_scale_for
from bikewatch.viz.viewport import MapRenderer


class TrafficMapController:
    """
    Wires the pieces together:

      time slider --(time)--> recompute traffic --> MarkerView.render
      map pan/zoom/resize ------------------------> MarkerView.reposition

    Everything runs synchronously on notify(); the aggregator is only read.
    """

    def __init__(
        self,
        aggregator: TrafficAggregator,
        *,
        renderer: MapRenderer | None = None,
        dispatcher: EventDispatcher | None = None,
        initial_time: int = ANY_TIME,
    ):
        self.aggregator = aggregator
        self.dispatcher = dispatcher or EventDispatcher()
        self.renderer = renderer or MapRenderer(dispatcher=self.dispatcher)
        self.marker_view = MarkerView(self.renderer)

        self.window: TimeWindow = TimeWindow.UNBOUNDED
        self.stations: list[StationRecord] = []
        self.radius_scale: RadiusScale | None = None
        self.last_join: JoinResult | None = None

        self.dispatcher.subscribe(TIME_CHANGE, self._on_time_change)
        self.renderer.on_viewport_change(self.marker_view.reposition)

        self._on_time_change(initial_time)

    def set_time(self, value: int) -> None:
        """Slider input: -1 for any time, else minute of day."""
        self.dispatcher.notify(TIME_CHANGE, value)

    def _on_time_change(self, value) -> None:
        window = TimeWindow.from_slider(clamp_slider(value))
        stations = self.aggregator.station_traffic(window)
        scale = radius_scale_for(stations, window)

        self.last_join = self.marker_view.render(stations, scale)
        self.window = window
        self.stations = stations
        self.radius_scale = scale
