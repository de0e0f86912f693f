"""Render a preview frame from canned data, without touching the network."""

from __future__ import annotations

import argparse
from datetime import date, datetime, time, timedelta, timezone

from PIL import Image

from kindle_dash.data.calendar_feed import CalendarEvent, CalendarLookup
from kindle_dash.data.weather import DayForecast
from kindle_dash.logic.moon import moon_phase_fraction
from kindle_dash.logic.radar import RADAR_PALETTE, classify
from kindle_dash.logic.tides import HIGH, LOW, TideEvent, TideWindow
from kindle_dash.rendering import DashboardSnapshot, compose_dashboard, prepare_for_device, save_frame

SAMPLE_NEWS = [
    "Harbour authority extends ferry timetable through the winter season",
    "Island council approves new coastal path between the two fishing villages",
    "Swell warning issued for northern beaches over the weekend",
    "Local sailing club hosts regional regatta with record number of entries",
    "Water company announces overnight maintenance in the old town",
    "Observatory opens night visits after two years of renovation works",
]


def _sample_radar(width: int = 320, height: int = 240) -> Image.Image:
    """Bands of every anchor color, one per palette entry."""
    image = Image.new("RGB", (width, height))
    band = max(width // len(RADAR_PALETTE), 1)
    for idx, (color, _) in enumerate(RADAR_PALETTE):
        image.paste(color, (idx * band, 0, (idx + 1) * band, height))
    return classify(image)


def build_sample_snapshot(now: datetime) -> DashboardSnapshot:
    today = now.date()
    weather = [
        DayForecast(today + timedelta(days=offset), 24, rain, cloud, max_c, min_c)
        for offset, (rain, cloud, max_c, min_c) in enumerate(
            [(0.0, 240.0, 23.4, 18.1), (14.0, 1500.0, 21.0, 17.2), (150.0, 2200.0, 19.5, 16.0)]
        )
    ]
    tides = TideWindow(
        TideEvent(time(8, 10), LOW),
        TideEvent(time(14, 30), HIGH),
    )
    event = CalendarEvent(
        name="Harbour maintenance meeting at the yacht club, bring the mooring survey",
        start_time=now + timedelta(days=1),
    )
    return DashboardSnapshot(
        moon_phase=moon_phase_fraction(today),
        tides=tides,
        weather=weather,
        news=SAMPLE_NEWS,
        calendar_event=CalendarLookup(event),
        radar_image=_sample_radar(),
        tide_chart_image=None,
    )


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--output", default="emulator_output/frame.png")
    parser.add_argument("--width", type=int, default=600)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--no-rotate", action="store_true")
    parser.add_argument("--date", type=date.fromisoformat, default=None)
    args = parser.parse_args()

    now = datetime.now(timezone.utc)
    if args.date is not None:
        now = datetime.combine(args.date, time(10, 0), tzinfo=timezone.utc)

    image = compose_dashboard(build_sample_snapshot(now), now)
    frame = prepare_for_device(image, args.width, args.height, rotate=not args.no_rotate)
    save_frame(frame, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
