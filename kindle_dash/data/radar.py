"""Radar and tide chart image sources."""

from __future__ import annotations

from datetime import datetime
import logging

from PIL import Image

from kindle_dash.data.client import SourceClient
from kindle_dash.logic.radar import classify

logger = logging.getLogger(__name__)

RADAR_URL_BASE = "https://www.aemet.es//imagenes_d/eltiempo/prediccion/mod_maritima"


def radar_image_url(now: datetime) -> str:
    """URL of the latest maritime chart; charts are published every 3 hours."""
    rounded_hour = (now.hour // 3) * 3
    return f"{RADAR_URL_BASE}/{now:%Y%m%d}00+0{rounded_hour:02d}_aewam_can_martot.png"


def fetch_radar(client: SourceClient, now: datetime) -> Image.Image:
    """Fetch the radar chart and reclassify it into e-ink intensities."""
    url = radar_image_url(now)
    logger.info("Fetching radar image: %s", url)
    return classify(client.get_image(url))


def fetch_tide_chart(client: SourceClient, url_template: str, now: datetime) -> Image.Image:
    """Fetch the tide chart image as-is."""
    url = url_template.format(date=now.strftime("%Y%m%d"))
    logger.info("Fetching tide chart: %s", url)
    return client.get_image(url)


__all__ = ["fetch_radar", "fetch_tide_chart", "radar_image_url"]
