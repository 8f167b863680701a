# bikewatch/main.py

from colorama import Fore, Style

from bikewatch.config import Settings
from bikewatch.data.source import DataSource
from bikewatch.traffic.report import busiest, write_traffic_csv
from bikewatch.traffic.window import TimeWindow
from bikewatch.viz.app.traffic import create_app, load_aggregator

MORNING_PEAK = 8 * 60  # 8:00 AM


def main():
    settings = Settings.from_env()

    source = DataSource(settings.stations_url, settings.trips_url, show_progress=True)
    agg = load_aggregator(source)

    # ---- all-day traffic ----
    all_day = agg.station_traffic(TimeWindow.UNBOUNDED)
    write_traffic_csv(all_day, "station_traffic.csv")

    print(f"\n{Fore.MAGENTA}Busiest stations (all day):{Style.RESET_ALL}\n")
    print(busiest(all_day)[["name", "departures", "arrivals", "total_traffic"]].to_string())

    # ---- morning peak (7:00-9:00) ----
    peak = agg.station_traffic(TimeWindow(MORNING_PEAK))
    print(f"\n{Fore.MAGENTA}Busiest stations around 8:00 AM:{Style.RESET_ALL}\n")
    print(busiest(peak)[["name", "departures", "arrivals", "total_traffic"]].to_string())

    # ---- UI ----
    app = create_app(settings, aggregator=agg)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
