"""RSS headline source."""

from __future__ import annotations

import logging

import feedparser

from kindle_dash.data.client import SourceClient, SourceError

logger = logging.getLogger(__name__)


def parse_headlines(feed_text: str, max_items: int) -> list[str]:
    """Return up to ``max_items`` non-empty entry titles from an RSS/Atom document."""
    feed = feedparser.parse(feed_text)
    titles = []
    for entry in feed.entries:
        title = " ".join(str(entry.get("title", "")).split())
        if title:
            titles.append(title)
        if len(titles) >= max_items:
            break
    if not titles:
        raise SourceError("News feed has no entries")
    return titles


def fetch_news(client: SourceClient, feed_url: str, max_items: int) -> list[str]:
    logger.info("Fetching news feed: %s", feed_url)
    return parse_headlines(client.get_text(feed_url), max_items)


__all__ = ["fetch_news", "parse_headlines"]
