# bikewatch/viz/app/traffic.py
from __future__ import annotations

from flask import Flask, jsonify, request

from bikewatch.config import Settings
from bikewatch.data.source import DataSource
from bikewatch.errors import BikewatchError
from bikewatch.traffic.aggregator import TrafficAggregator
from bikewatch.traffic.window import ANY_TIME, clamp_slider
from bikewatch.util import console
from bikewatch.viz.controller import TrafficMapController
from bikewatch.viz.maps.render import render_map_document
from bikewatch.viz.widgets.time_slider import window_label


def load_aggregator(source: DataSource) -> TrafficAggregator:
    """
    Fetch stations + trips and build the index once. A failed or malformed
    download is reported and treated as "no data" so the map still serves.
    """
    try:
        stations = source.fetch_stations()
    except BikewatchError as e:
        console.error(f"Error loading stations: {e}")
        stations = []

    try:
        trips = source.fetch_trips().trips
    except BikewatchError as e:
        console.error(f"Error loading trips: {e}")
        trips = []

    console.info("Bucketing trips by minute of day…")
    agg = TrafficAggregator.build(stations, trips)
    console.done(f"Traffic index ready ({agg.trip_count} trips, {len(agg.stations)} stations)")
    return agg


def _requested_time() -> int:
    # type=int falls back to the default on garbage
    return clamp_slider(request.args.get("t", ANY_TIME, type=int))


def create_app(
    settings: Settings | None = None,
    *,
    source: DataSource | None = None,
    aggregator: TrafficAggregator | None = None,
) -> Flask:
    """
    Build the Flask app. Data is loaded here, once; every request runs its own
    controller over the shared read-only aggregator.
    """
    settings = settings or Settings.from_env()

    if aggregator is None:
        source = source or DataSource(
            settings.stations_url,
            settings.trips_url,
            show_progress=settings.show_progress,
        )
        aggregator = load_aggregator(source)

    app = Flask(__name__)
    app.config["BIKEWATCH_SETTINGS"] = settings
    app.config["BIKEWATCH_AGGREGATOR"] = aggregator

    @app.route("/")
    def index():
        controller = TrafficMapController(aggregator, initial_time=_requested_time())
        return render_map_document(
            controller,
            title=settings.title,
            bike_lanes=settings.bike_lanes,
        )

    @app.route("/api/stations")
    def stations_api():
        controller = TrafficMapController(aggregator, initial_time=_requested_time())
        window = controller.window
        markers = controller.marker_view.markers

        rows = []
        for s in controller.stations:
            row = s.to_dict()
            row["radius"] = markers[s.id].radius
            row["color"] = markers[s.id].color
            rows.append(row)

        return jsonify(
            {
                "t": window.slider_value,
                "label": window_label(window),
                "minutes": None if window.unbounded else list(window.bounds()),
                "radius_range": list(controller.radius_scale.range),
                "trip_count": aggregator.trip_count,
                "stations": rows,
            }
        )

    return app


def serve_traffic_map(settings: Settings | None = None, *, source: DataSource | None = None):
    settings = settings or Settings.from_env()
    app = create_app(settings, source=source)
    app.run(host=settings.host, port=int(settings.port), debug=bool(settings.debug))
