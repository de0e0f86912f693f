"""Data structures for rendering the dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from kindle_dash.data.calendar_feed import CalendarLookup
from kindle_dash.data.weather import DayForecast
from kindle_dash.logic.tides import TideWindow


@dataclass(frozen=True)
class DashboardSnapshot:
    """Fused result of one data-gathering cycle.

    Each optional field is None when its source failed or timed out.
    """

    moon_phase: float
    tides: TideWindow | None = None
    weather: list[DayForecast] | None = None
    news: list[str] | None = None
    calendar_event: CalendarLookup | None = None
    radar_image: Image.Image | None = None
    tide_chart_image: Image.Image | None = None


SOURCE_FIELDS = (
    "tides",
    "weather",
    "news",
    "calendar_event",
    "radar_image",
    "tide_chart_image",
)


__all__ = ["DashboardSnapshot", "SOURCE_FIELDS"]
