from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest

from kindle_dash.data.client import SourceError
from kindle_dash.data.weather import OPEN_METEO_URL, DayForecast, fetch_weather, summarize_hourly


def _payload() -> dict:
    return {
        "hourly": {
            "time": [
                "2026-10-19T22:00",
                "2026-10-19T23:00",
                "2026-10-20T00:00",
                "2026-10-20T01:00",
                "2026-10-21T00:00",
            ],
            "temperature_2m": [20.5, 19.0, 18.2, None, 17.0],
            "precipitation": [0.0, 1.5, 0.2, 0.4, None],
            "cloud_cover": [10, 30, 90, 100, 50],
        }
    }


def test_summarize_hourly_groups_by_day() -> None:
    days = summarize_hourly(_payload(), 3)

    assert [day.date for day in days] == [date(2026, 10, 19), date(2026, 10, 20), date(2026, 10, 21)]
    first = days[0]
    assert first.data_points == 2
    assert first.rain_sum == pytest.approx(1.5)
    assert first.cloud_sum == pytest.approx(40)
    assert first.max_c == pytest.approx(20.5)
    assert first.min_c == pytest.approx(19.0)


def test_summarize_hourly_skips_missing_temperatures() -> None:
    days = summarize_hourly(_payload(), 3)

    assert days[1].data_points == 1
    assert days[2].rain_sum == 0.0


def test_summarize_hourly_limits_days() -> None:
    assert len(summarize_hourly(_payload(), 2)) == 2


def test_summarize_hourly_without_hourly_data() -> None:
    with pytest.raises(SourceError):
        summarize_hourly({"error": True}, 3)


def test_day_forecast_helpers() -> None:
    day = DayForecast(date(2026, 10, 23), 4, 2.0, 200.0, 21.0, 16.0)

    assert day.day_label == "FRI"
    assert day.avg_rain == pytest.approx(0.5)
    assert day.avg_cloud == pytest.approx(50.0)
    assert DayForecast(date(2026, 10, 23), 0, 0.0, 0.0, 0.0, 0.0).avg_rain == 0.0


def test_fetch_weather_requests_hourly_fields() -> None:
    client = MagicMock()
    client.get_json.return_value = _payload()

    days = fetch_weather(client, 28.46, -16.25, 3, "Atlantic/Canary")

    assert len(days) == 3
    url = client.get_json.call_args.args[0]
    params = client.get_json.call_args.kwargs["params"]
    assert url == OPEN_METEO_URL
    assert params["timezone"] == "Atlantic/Canary"
    assert "cloud_cover" in params["hourly"]
