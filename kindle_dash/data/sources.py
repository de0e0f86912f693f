"""Named async factories for every dashboard source."""

from __future__ import annotations

import asyncio
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime
from functools import partial
from typing import Any, Callable, Iterator

from kindle_dash.config import SourcesConfig
from kindle_dash.data.calendar_feed import fetch_event
from kindle_dash.data.client import SourceClient
from kindle_dash.data.news import fetch_news
from kindle_dash.data.orchestrator import SourceFactory
from kindle_dash.data.radar import fetch_radar, fetch_tide_chart
from kindle_dash.data.tides import fetch_tide_window
from kindle_dash.data.weather import fetch_weather
from kindle_dash.rendering.frame_data import SOURCE_FIELDS


@contextmanager
def fetch_executor(max_workers: int = len(SOURCE_FIELDS)) -> Iterator[ThreadPoolExecutor]:
    """Thread pool for one fetch cycle.

    On exit the pool is shut down without waiting, so a worker abandoned after
    a timeout never holds up the caller. It keeps running in the background
    until its blocking call returns.
    """
    executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="source")
    try:
        yield executor
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _in_executor(executor: Executor, func: Callable[..., Any], *args: Any) -> SourceFactory:
    async def factory() -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, partial(func, *args))

    return factory


def build_sources(
    config: SourcesConfig,
    now: datetime,
    executor: Executor,
    client: SourceClient | None = None,
) -> dict[str, SourceFactory]:
    """Map snapshot field names to zero-argument awaitable factories.

    The blocking fetches run on ``executor`` so they can be awaited together.
    Use a pool from :func:`fetch_executor` rather than the event loop's
    default one, which ``asyncio.run`` waits for on exit.
    """
    if client is None:
        client = SourceClient(timeout_seconds=config.timeout_seconds)
    timezone = str(now.tzinfo) if now.tzinfo is not None else "auto"

    return {
        "tides": _in_executor(
            executor, fetch_tide_window, client, config.tide_url, config.tide_station_id, now
        ),
        "radar_image": _in_executor(executor, fetch_radar, client, now),
        "tide_chart_image": _in_executor(
            executor, fetch_tide_chart, client, config.tide_chart_url, now
        ),
        "weather": _in_executor(
            executor,
            fetch_weather,
            client,
            config.latitude,
            config.longitude,
            config.forecast_days,
            timezone,
        ),
        "news": _in_executor(
            executor, fetch_news, client, config.news_feed_url, config.news_max_items
        ),
        "calendar_event": _in_executor(
            executor, fetch_event, client, config.calendar_ics_url, now
        ),
    }


__all__ = ["build_sources", "fetch_executor"]
