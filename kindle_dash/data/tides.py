"""Tide table source."""

from __future__ import annotations

from datetime import datetime
import logging

from kindle_dash.data.client import SourceClient
from kindle_dash.logic.tides import TideWindow, parse_tide_table, select_tide_window

logger = logging.getLogger(__name__)

DEFAULT_TIDE_URL = "https://ideihm.covam.es/api-ihm/getmarea?request=gettide&id={station_id}&date={date}"


def tide_table_url(template: str, station_id: int, now: datetime) -> str:
    return template.format(station_id=station_id, date=now.strftime("%Y%m%d"))


def fetch_tide_window(client: SourceClient, template: str, station_id: int, now: datetime) -> TideWindow:
    """Fetch today's tide table and select the window around ``now``.

    Raises NotEnoughData when the table has fewer than two tides.
    """
    url = tide_table_url(template, station_id, now)
    logger.info("Fetching tide table: %s", url)
    events = parse_tide_table(client.get_text(url))
    return select_tide_window(events, now.time())


__all__ = ["DEFAULT_TIDE_URL", "fetch_tide_window", "tide_table_url"]
