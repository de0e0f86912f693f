"""Open-Meteo forecast source aggregated into daily summaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import Any

from kindle_dash.data.client import SourceClient, SourceError

logger = logging.getLogger(__name__)

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
HOURLY_FIELDS = "temperature_2m,precipitation,cloud_cover"


@dataclass(frozen=True)
class DayForecast:
    """Hourly samples for one local day, summed and bounded."""

    date: date
    data_points: int
    rain_sum: float
    cloud_sum: float
    max_c: float
    min_c: float

    @property
    def day_label(self) -> str:
        return self.date.strftime("%a").upper()

    @property
    def avg_rain(self) -> float:
        return self.rain_sum / self.data_points if self.data_points else 0.0

    @property
    def avg_cloud(self) -> float:
        return self.cloud_sum / self.data_points if self.data_points else 0.0


def summarize_hourly(payload: dict[str, Any], days: int) -> list[DayForecast]:
    """Group an Open-Meteo hourly payload by local date."""
    hourly = payload.get("hourly") if isinstance(payload, dict) else None
    if not hourly or "time" not in hourly:
        raise SourceError("Forecast response has no hourly data")

    times = hourly.get("time") or []
    temps = hourly.get("temperature_2m") or []
    rain = hourly.get("precipitation") or []
    cloud = hourly.get("cloud_cover") or []

    buckets: dict[date, dict[str, Any]] = {}
    for idx, stamp in enumerate(times):
        temp = temps[idx] if idx < len(temps) else None
        if temp is None:
            continue
        day = datetime.fromisoformat(stamp).date()
        bucket = buckets.setdefault(
            day, {"points": 0, "rain": 0.0, "cloud": 0.0, "max": temp, "min": temp}
        )
        bucket["points"] += 1
        bucket["rain"] += (rain[idx] if idx < len(rain) else None) or 0.0
        bucket["cloud"] += (cloud[idx] if idx < len(cloud) else None) or 0.0
        bucket["max"] = max(bucket["max"], temp)
        bucket["min"] = min(bucket["min"], temp)

    forecasts = [
        DayForecast(
            date=day,
            data_points=bucket["points"],
            rain_sum=float(bucket["rain"]),
            cloud_sum=float(bucket["cloud"]),
            max_c=float(bucket["max"]),
            min_c=float(bucket["min"]),
        )
        for day, bucket in sorted(buckets.items())
    ]
    return forecasts[:days]


def fetch_weather(
    client: SourceClient,
    latitude: float,
    longitude: float,
    days: int,
    timezone: str,
) -> list[DayForecast]:
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": HOURLY_FIELDS,
        "timezone": timezone,
        "forecast_days": days,
    }
    logger.info("Fetching forecast for %s,%s", latitude, longitude)
    return summarize_hourly(client.get_json(OPEN_METEO_URL, params=params), days)


__all__ = ["DayForecast", "fetch_weather", "summarize_hourly"]
