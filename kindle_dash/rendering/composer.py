"""Dashboard composer for the e-ink display."""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
import math

from PIL import Image, ImageDraw, ImageFont, ImageOps

from kindle_dash.data.weather import DayForecast
from kindle_dash.logic.moon import MOON_ICON_PHASES, moon_icon_index
from kindle_dash.logic.text_layout import layout_text
from kindle_dash.rendering.fields import (
    CLEAR,
    DRIZZLE,
    HEAVY_RAIN,
    OVERCAST,
    PARTLY,
    RAIN,
    STORM,
    WEATHER_DAYS,
    build_fields,
    weather_icon,
)
from kindle_dash.rendering.frame_data import DashboardSnapshot

CANVAS_WIDTH = 1600
CANVAS_HEIGHT = 1200

COLOR_BACKGROUND = 255
COLOR_TEXT = 0
COLOR_DIM_TEXT = 96
COLOR_RULE = 160
COLOR_CLOUD = 200
COLOR_CLOUD_DARK = 120

MARGIN = 40
COLUMN_SPLIT = 800

CLOCK_FONT_SIZE = 180
WEATHER_TOP = 250
WEATHER_COLUMN_WIDTH = 240
WEATHER_ICON_SIZE = 110
WEATHER_FONT_SIZE = 34

RADAR_BOX = (MARGIN, 600, COLUMN_SPLIT - MARGIN, CANVAS_HEIGHT - MARGIN)

CALENDAR_TOP = MARGIN
CALENDAR_FONT_SIZE = 38
CALENDAR_MAX_LINES = 5
CALENDAR_MAX_WIDTH = 33

TIDES_TOP = 330
TIDES_FONT_SIZE = 40
MOON_BOX = (1420, 330, 1540, 450)
TIDE_CHART_BOX = (COLUMN_SPLIT + MARGIN, 470, CANVAS_WIDTH - MARGIN, 640)

NEWS_TOP = 670
NEWS_FONT_SIZE = 30
NEWS_MAX_LINES = 12
NEWS_MAX_WIDTH = 40
LINE_HEIGHT = 1.2

FONT_REGULAR = "DejaVuSans.ttf"
FONT_BOLD = "DejaVuSans-Bold.ttf"


@lru_cache(maxsize=None)
def _font(size: int, bold: bool = True) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(FONT_BOLD if bold else FONT_REGULAR, size)
    except OSError:
        return ImageFont.load_default(size=size)


def _draw_cloud(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int], fill: int) -> None:
    left, top, right, bottom = box
    w = right - left
    h = bottom - top
    draw.ellipse((left, top + h * 0.35, left + w * 0.45, bottom), fill=fill, outline=COLOR_TEXT)
    draw.ellipse((left + w * 0.2, top, left + w * 0.75, top + h * 0.75), fill=fill, outline=COLOR_TEXT)
    draw.ellipse((left + w * 0.5, top + h * 0.3, right, bottom), fill=fill, outline=COLOR_TEXT)
    draw.rectangle((left + w * 0.22, top + h * 0.6, left + w * 0.78, bottom), fill=fill)
    draw.line((left + w * 0.22, bottom, left + w * 0.78, bottom), fill=COLOR_TEXT, width=1)


def _draw_sun(draw: ImageDraw.ImageDraw, center: tuple[float, float], radius: float) -> None:
    cx, cy = center
    for step in range(8):
        angle = step * math.pi / 4
        draw.line(
            (
                cx + math.cos(angle) * radius * 1.3,
                cy + math.sin(angle) * radius * 1.3,
                cx + math.cos(angle) * radius * 1.7,
                cy + math.sin(angle) * radius * 1.7,
            ),
            fill=COLOR_TEXT,
            width=3,
        )
    draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=COLOR_BACKGROUND, outline=COLOR_TEXT, width=3)


def _draw_weather_icon(draw: ImageDraw.ImageDraw, kind: str, box: tuple[int, int, int, int]) -> None:
    left, top, right, bottom = box
    size = right - left
    if kind == CLEAR:
        _draw_sun(draw, (left + size / 2, top + size / 2), size * 0.25)
        return
    if kind == PARTLY:
        _draw_sun(draw, (left + size * 0.65, top + size * 0.35), size * 0.18)

    cloud_box = (left, top + int(size * 0.25), right, top + int(size * 0.7))
    cloud_fill = COLOR_CLOUD_DARK if kind in (OVERCAST, HEAVY_RAIN, STORM) else COLOR_CLOUD
    _draw_cloud(draw, cloud_box, cloud_fill)

    drops = {DRIZZLE: 1, RAIN: 2, HEAVY_RAIN: 3, STORM: 2}.get(kind, 0)
    for idx in range(drops):
        x = left + size * (0.3 + 0.2 * idx)
        draw.line((x, top + size * 0.75, x - size * 0.06, top + size * 0.95), fill=COLOR_TEXT, width=3)
    if kind == STORM:
        bolt = [
            (left + size * 0.72, top + size * 0.68),
            (left + size * 0.62, top + size * 0.84),
            (left + size * 0.72, top + size * 0.84),
            (left + size * 0.64, top + size * 1.0),
        ]
        draw.line(bolt, fill=COLOR_TEXT, width=4)


def _draw_moon(draw: ImageDraw.ImageDraw, phase: float, box: tuple[int, int, int, int]) -> None:
    left, top, right, bottom = box
    radius = (right - left) / 2
    cx = left + radius
    icon_phase = MOON_ICON_PHASES[moon_icon_index(phase)]

    draw.ellipse(box, fill=COLOR_TEXT)
    if icon_phase > 0:
        # Waxing is lit on the right, waning on the left.
        start, end = (270, 90) if icon_phase <= 0.5 else (90, 270)
        draw.pieslice(box, start, end, fill=COLOR_BACKGROUND)
        half_width = radius * abs(math.cos(2 * math.pi * icon_phase))
        crescent = icon_phase < 0.25 or icon_phase > 0.75
        terminator = (cx - half_width, top, cx + half_width, bottom)
        draw.ellipse(terminator, fill=COLOR_TEXT if crescent else COLOR_BACKGROUND)
    draw.ellipse(box, outline=COLOR_TEXT, width=3)


def _paste_image(
    canvas: Image.Image,
    draw: ImageDraw.ImageDraw,
    image: Image.Image | None,
    box: tuple[int, int, int, int],
    missing_label: str,
) -> None:
    left, top, right, bottom = box
    if image is None:
        draw.rectangle(box, outline=COLOR_RULE, width=2)
        draw.text((left + 20, top + 20), missing_label, font=_font(36), fill=COLOR_DIM_TEXT)
        return
    fitted = ImageOps.contain(image.convert("L"), (right - left, bottom - top), Image.LANCZOS)
    offset_x = left + (right - left - fitted.width) // 2
    offset_y = top + (bottom - top - fitted.height) // 2
    canvas.paste(fitted, (offset_x, offset_y))


def _draw_weather(
    draw: ImageDraw.ImageDraw,
    fields: dict[str, str],
    weather: list[DayForecast] | None,
) -> None:
    font = _font(WEATHER_FONT_SIZE)
    for index in range(WEATHER_DAYS):
        slot = f"day_{index + 1}"
        left = MARGIN + index * WEATHER_COLUMN_WIDTH
        draw.text((left, WEATHER_TOP), fields[f"{slot}_label"], font=font, fill=COLOR_TEXT)
        if weather is not None and index < len(weather):
            icon_box = (left, WEATHER_TOP + 50, left + WEATHER_ICON_SIZE, WEATHER_TOP + 50 + WEATHER_ICON_SIZE)
            _draw_weather_icon(draw, weather_icon(weather[index]), icon_box)
        temps_y = WEATHER_TOP + 60 + WEATHER_ICON_SIZE
        draw.text((left, temps_y), fields[f"{slot}_max"], font=font, fill=COLOR_TEXT)
        draw.text((left, temps_y + 44), fields[f"{slot}_min"], font=_font(WEATHER_FONT_SIZE, bold=False), fill=COLOR_DIM_TEXT)


def compose_dashboard(snapshot: DashboardSnapshot, now: datetime) -> Image.Image:
    """Compose a grayscale dashboard frame from a snapshot."""
    fields = build_fields(snapshot, now)
    image = Image.new("L", (CANVAS_WIDTH, CANVAS_HEIGHT), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)

    draw.text(
        (MARGIN, MARGIN),
        f"{fields['clock_hour']}:{fields['clock_minute']}",
        font=_font(CLOCK_FONT_SIZE),
        fill=COLOR_TEXT,
    )
    _draw_weather(draw, fields, snapshot.weather)
    _paste_image(image, draw, snapshot.radar_image, RADAR_BOX, "Radar NA")

    draw.line((COLUMN_SPLIT, MARGIN, COLUMN_SPLIT, CANVAS_HEIGHT - MARGIN), fill=COLOR_RULE, width=2)
    right_x = COLUMN_SPLIT + MARGIN

    draw.text((right_x, CALENDAR_TOP), fields["calendar_when"], font=_font(CALENDAR_FONT_SIZE, bold=False), fill=COLOR_DIM_TEXT)
    calendar_lines = layout_text(
        [fields["calendar_title"]],
        CALENDAR_MAX_LINES,
        CALENDAR_MAX_WIDTH,
        (right_x, CALENDAR_TOP + 56),
        CALENDAR_FONT_SIZE,
        LINE_HEIGHT,
    )
    for fragment in calendar_lines:
        draw.text((fragment.x, fragment.y), fragment.text, font=_font(fragment.font_size), fill=COLOR_TEXT)

    tide_font = _font(TIDES_FONT_SIZE)
    draw.text(
        (right_x, TIDES_TOP),
        f"{fields['tide_1_kind']}  {fields['tide_1_time']}",
        font=tide_font,
        fill=COLOR_TEXT,
    )
    draw.text(
        (right_x, TIDES_TOP + 60),
        f"{fields['tide_2_kind']}  {fields['tide_2_time']}",
        font=tide_font,
        fill=COLOR_TEXT,
    )
    _draw_moon(draw, snapshot.moon_phase, MOON_BOX)
    _paste_image(image, draw, snapshot.tide_chart_image, TIDE_CHART_BOX, "Tides NA")

    if snapshot.news is None:
        draw.text((right_x, NEWS_TOP), "ERR", font=_font(NEWS_FONT_SIZE), fill=COLOR_TEXT)
    else:
        news_lines = layout_text(
            snapshot.news,
            NEWS_MAX_LINES,
            NEWS_MAX_WIDTH,
            (right_x, NEWS_TOP),
            NEWS_FONT_SIZE,
            LINE_HEIGHT,
        )
        for fragment in news_lines:
            draw.text((fragment.x, fragment.y), fragment.text, font=_font(fragment.font_size), fill=COLOR_TEXT)

    return image


__all__ = ["CANVAS_HEIGHT", "CANVAS_WIDTH", "compose_dashboard"]
