"""Configuration loader for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from kindle_dash.data.tides import DEFAULT_TIDE_URL


@dataclass(frozen=True)
class SourcesConfig:
    """Data source configuration."""

    timeout_seconds: float
    tide_station_id: int
    tide_url: str
    tide_chart_url: str
    latitude: float
    longitude: float
    forecast_days: int
    news_feed_url: str
    news_max_items: int
    calendar_ics_url: str


@dataclass(frozen=True)
class DisplayConfig:
    """Device output configuration."""

    width: int
    height: int
    rotate: bool
    timezone: str
    refresh_minutes: int
    output_path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    sources: SourcesConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    calendar_ics_url = os.environ.get("CALENDAR_ICS_URL", "")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    sources_section = _require_section(data, "sources")
    display_section = _require_section(data, "display")
    logging_section = _require_section(data, "logging")

    sources = SourcesConfig(
        timeout_seconds=float(_require_key(sources_section, "timeout_seconds", "sources")),
        tide_station_id=int(_require_key(sources_section, "tide_station_id", "sources")),
        tide_url=sources_section.get("tide_url", DEFAULT_TIDE_URL),
        tide_chart_url=_require_key(sources_section, "tide_chart_url", "sources"),
        latitude=float(_require_key(sources_section, "latitude", "sources")),
        longitude=float(_require_key(sources_section, "longitude", "sources")),
        forecast_days=int(sources_section.get("forecast_days", 3)),
        news_feed_url=_require_key(sources_section, "news_feed_url", "sources"),
        news_max_items=int(sources_section.get("news_max_items", 8)),
        calendar_ics_url=calendar_ics_url,
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        rotate=bool(display_section.get("rotate", True)),
        timezone=_require_key(display_section, "timezone", "display"),
        refresh_minutes=_require_key(display_section, "refresh_minutes", "display"),
        output_path=display_section.get("output_path", "output.png"),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(sources=sources, display=display, log=logging)
