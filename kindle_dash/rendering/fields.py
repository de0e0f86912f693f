"""Named text slots of the dashboard, filled from a snapshot."""

from __future__ import annotations

from datetime import datetime

from kindle_dash.data.weather import DayForecast
from kindle_dash.logic.tides import TideEvent
from kindle_dash.rendering.frame_data import DashboardSnapshot

NOT_AVAILABLE = "NA"
ERROR = "ERR"
WEATHER_DAYS = 3

CLEAR = "clear"
PARTLY = "partly"
CLOUDY = "cloudy"
OVERCAST = "overcast"
DRIZZLE = "drizzle"
RAIN = "rain"
HEAVY_RAIN = "heavy_rain"
STORM = "storm"

CLOUD_THRESHOLDS = ((20.0, PARTLY), (50.0, CLOUDY), (80.0, OVERCAST))
RAIN_THRESHOLDS = ((0.1, DRIZZLE), (0.5, RAIN), (1.0, HEAVY_RAIN), (5.0, STORM))


def _clean(text: str) -> str:
    return " ".join(str(text).split())


def time_remaining(target: datetime, now: datetime) -> str:
    """Coarse human countdown, e.g. "3 weeks" or "40 mins"."""
    seconds = int((target - now).total_seconds())
    days = int(seconds / 86400)
    hours = int(seconds / 3600)
    minutes = int(seconds / 60)

    if days >= 365:
        return f"{days // 365} years"
    if days >= 30:
        return f"{days // 30} months"
    if days >= 7:
        return f"{days // 7} weeks"
    if hours >= 24:
        return f"{days} days"
    if minutes >= 60:
        return f"{hours} hours"
    if seconds >= 60:
        return f"{minutes} mins"
    return f"{seconds} secs"


def weather_icon(day: DayForecast) -> str:
    """Icon name for a day; rain outranks cloud cover."""
    result = CLEAR
    for threshold, name in CLOUD_THRESHOLDS:
        if day.avg_cloud > threshold:
            result = name
    for threshold, name in RAIN_THRESHOLDS:
        if day.avg_rain > threshold:
            result = name
    return result


def _tide_slots(prefix: str, event: TideEvent | None) -> dict[str, str]:
    if event is None:
        return {f"{prefix}_kind": NOT_AVAILABLE, f"{prefix}_time": NOT_AVAILABLE}
    return {f"{prefix}_kind": event.kind, f"{prefix}_time": event.label}


def _day_slots(index: int, weather: list[DayForecast] | None) -> dict[str, str]:
    prefix = f"day_{index + 1}"
    if weather is None:
        return {f"{prefix}_label": ERROR, f"{prefix}_max": ERROR, f"{prefix}_min": ERROR}
    if index >= len(weather):
        return {
            f"{prefix}_label": NOT_AVAILABLE,
            f"{prefix}_max": NOT_AVAILABLE,
            f"{prefix}_min": NOT_AVAILABLE,
        }
    day = weather[index]
    return {
        f"{prefix}_label": f"{day.date.day:02d} {day.day_label}",
        f"{prefix}_max": f"{day.max_c:.1f}",
        f"{prefix}_min": f"{day.min_c:.1f}",
    }


def build_fields(snapshot: DashboardSnapshot, now: datetime) -> dict[str, str]:
    """Fill every named slot of the dashboard exactly once."""
    fields = {
        "clock_hour": f"{now.hour:02d}",
        "clock_minute": f"{now.minute:02d}",
    }

    tides = snapshot.tides
    fields.update(_tide_slots("tide_1", tides.previous if tides else None))
    fields.update(_tide_slots("tide_2", tides.next if tides else None))

    for index in range(WEATHER_DAYS):
        fields.update(_day_slots(index, snapshot.weather))

    lookup = snapshot.calendar_event
    if lookup is None:
        fields["calendar_when"] = "ERR!"
        fields["calendar_title"] = "Could not fetch any events"
    elif lookup.event is None:
        fields["calendar_when"] = ""
        fields["calendar_title"] = "No upcoming events"
    else:
        fields["calendar_when"] = f"in {time_remaining(lookup.event.start_time, now)}"
        fields["calendar_title"] = lookup.event.name

    return {name: _clean(value) for name, value in fields.items()}


__all__ = [
    "CLEAR",
    "CLOUDY",
    "DRIZZLE",
    "ERROR",
    "HEAVY_RAIN",
    "NOT_AVAILABLE",
    "OVERCAST",
    "PARTLY",
    "RAIN",
    "STORM",
    "build_fields",
    "time_remaining",
    "weather_icon",
]
