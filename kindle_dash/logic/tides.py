"""Tide table parsing and selection of the tide window around now."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable

HIGH = "High"
LOW = "Low"

KIND_TOKENS = {
    "bajamar": LOW,
    "pleamar": HIGH,
}

_TIME_FORMATS = ("%H:%M:%S", "%H:%M")


class NotEnoughData(ValueError):
    """Raised when fewer than two tide events are available."""


@dataclass(frozen=True)
class TideEvent:
    """Single predicted high or low water."""

    time: time
    kind: str

    @property
    def label(self) -> str:
        return self.time.strftime("%H:%M")


@dataclass(frozen=True)
class TideWindow:
    """The two tide events around a reference time."""

    previous: TideEvent
    next: TideEvent


def _parse_time(value: str) -> time | None:
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return None


def parse_tide_line(line: str) -> TideEvent | None:
    """Parse one tab-separated tide table line; returns None if it is not a tide."""
    parts = line.split("\t")
    if len(parts) < 3:
        return None

    parsed_time = _parse_time(parts[0].strip())
    if parsed_time is None:
        return None

    kind = KIND_TOKENS.get(parts[2].strip())
    if kind is None:
        return None
    return TideEvent(time=parsed_time, kind=kind)


def parse_tide_table(text: str) -> list[TideEvent]:
    """Parse a tide table response, skipping every line that is not a tide."""
    events = []
    for line in text.splitlines():
        event = parse_tide_line(line)
        if event is not None:
            events.append(event)
    return events


def select_tide_window(events: Iterable[TideEvent], now: time) -> TideWindow:
    """Pick the tide events bracketing ``now`` from a list sorted by time.

    Before the first tide the first two are returned. After the last tide the
    final two are returned, so the window is already in the past.
    """
    events = list(events)
    if len(events) < 2:
        raise NotEnoughData(f"Need at least 2 tide events, got {len(events)}")

    if now < events[0].time:
        return TideWindow(events[0], events[1])

    last_before = None
    for idx in range(len(events) - 1, -1, -1):
        if events[idx].time <= now:
            last_before = idx
            break

    if last_before is None:
        return TideWindow(events[0], events[1])
    if last_before + 1 < len(events):
        return TideWindow(events[last_before], events[last_before + 1])
    return TideWindow(events[-2], events[-1])


__all__ = [
    "HIGH",
    "LOW",
    "KIND_TOKENS",
    "NotEnoughData",
    "TideEvent",
    "TideWindow",
    "parse_tide_line",
    "parse_tide_table",
    "select_tide_window",
]
