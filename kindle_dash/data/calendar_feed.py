"""ICS calendar source returning the next upcoming event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging

from icalendar import Calendar
import recurring_ical_events

from kindle_dash.data.client import SourceClient, SourceError

logger = logging.getLogger(__name__)

LOOKAHEAD = timedelta(days=366)


@dataclass(frozen=True)
class CalendarEvent:
    """A single calendar entry."""

    name: str
    start_time: datetime


@dataclass(frozen=True)
class CalendarLookup:
    """Result of a successful calendar fetch; ``event`` is None when nothing is upcoming."""

    event: CalendarEvent | None


def _as_datetime(value: date | datetime, now: datetime) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=now.tzinfo)
        return value.astimezone(now.tzinfo)
    return datetime.combine(value, datetime.min.time(), tzinfo=now.tzinfo)


def next_event(ics_text: str, now: datetime) -> CalendarLookup:
    """Find the soonest event occurrence starting at or after ``now``.

    Recurring events are expanded over the next year, so a weekly meeting
    whose first occurrence is long past still counts.
    """
    try:
        cal = Calendar.from_ical(ics_text)
    except ValueError as exc:
        raise SourceError(f"Calendar is not valid ICS: {exc}") from exc

    upcoming = None
    for component in recurring_ical_events.of(cal).between(now, now + LOOKAHEAD):
        dtstart = component.get("dtstart")
        if dtstart is None:
            continue
        start = _as_datetime(dtstart.dt, now)
        if start < now:
            continue
        if upcoming is None or start < upcoming.start_time:
            name = " ".join(str(component.get("summary", "Untitled")).split())
            upcoming = CalendarEvent(name=name, start_time=start)

    return CalendarLookup(event=upcoming)


def fetch_event(client: SourceClient, ics_url: str, now: datetime) -> CalendarLookup:
    if not ics_url:
        raise SourceError("No calendar URL configured (CALENDAR_ICS_URL)")
    logger.info("Fetching calendar")
    return next_event(client.get_text(ics_url), now)


__all__ = ["CalendarEvent", "CalendarLookup", "fetch_event", "next_event"]
