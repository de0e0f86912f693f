"""Concurrent, failure-isolated fetching of every dashboard source."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
import logging
import time
from typing import Any, Awaitable, Callable, Mapping

from kindle_dash.data.client import SourceError
from kindle_dash.logic.moon import moon_phase_fraction
from kindle_dash.rendering.frame_data import SOURCE_FIELDS, DashboardSnapshot

logger = logging.getLogger(__name__)

SourceFactory = Callable[[], Awaitable[Any]]


class SourceTimeout(SourceError):
    """Raised when a source does not finish within its timeout."""


@dataclass(frozen=True)
class SourceOutcome:
    """Settled result of a single source."""

    name: str
    value: Any
    error: BaseException | None
    elapsed: float

    @property
    def ok(self) -> bool:
        return self.error is None


async def _run_source(name: str, factory: SourceFactory, timeout: float) -> SourceOutcome:
    started = time.perf_counter()
    try:
        value = await asyncio.wait_for(factory(), timeout=timeout)
    except asyncio.TimeoutError:
        error: BaseException = SourceTimeout(f"Timeout after {timeout:.1f}s")
    except Exception as exc:
        error = exc
    else:
        return SourceOutcome(name, value, None, time.perf_counter() - started)

    logger.warning("%s failed: %s", name, error)
    return SourceOutcome(name, None, error, time.perf_counter() - started)


async def gather_sources(sources: Mapping[str, SourceFactory], timeout: float) -> dict[str, SourceOutcome]:
    """Run every source concurrently, each under its own timeout.

    Failures and timeouts are logged and recorded per source; this never
    raises because of a source.
    """
    names = list(sources)
    outcomes = await asyncio.gather(
        *(_run_source(name, sources[name], timeout) for name in names)
    )
    return dict(zip(names, outcomes))


async def build_snapshot(
    sources: Mapping[str, SourceFactory],
    timeout: float,
    now: datetime,
) -> DashboardSnapshot:
    """Fetch all sources and fuse them into a DashboardSnapshot."""
    logger.info("Fetching all dashboard data...")
    started = time.perf_counter()

    outcomes = await gather_sources(sources, timeout)

    logger.info("Fetched all dashboard data in %.2fs", time.perf_counter() - started)

    unknown = set(outcomes) - set(SOURCE_FIELDS)
    if unknown:
        logger.warning("Ignoring unknown sources: %s", ", ".join(sorted(unknown)))

    fields = {
        name: outcomes[name].value if name in outcomes else None
        for name in SOURCE_FIELDS
    }
    return DashboardSnapshot(moon_phase=moon_phase_fraction(now.date()), **fields)


__all__ = [
    "SourceFactory",
    "SourceOutcome",
    "SourceTimeout",
    "build_snapshot",
    "gather_sources",
]
