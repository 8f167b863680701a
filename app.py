import os
from dataclasses import replace

from bikewatch.config import Settings
from bikewatch.viz.app.traffic import serve_traffic_map


def main():
  settings = Settings.from_env()

  # bind all interfaces unless HOST says otherwise (IMPORTANT for Render)
  if "HOST" not in os.environ:
    settings = replace(settings, host="0.0.0.0")

  # no tqdm bar in service logs
  settings = replace(settings, show_progress=False)

  serve_traffic_map(settings)


if __name__ == "__main__":
  main()
