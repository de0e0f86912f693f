"""Line-budgeted text layout for the dashboard text blocks."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap
from typing import Iterable

PLACEHOLDER = "* * *"


@dataclass(frozen=True)
class TextFragment:
    """One physical line of text positioned on the canvas."""

    text: str
    x: int
    y: float
    font_size: int


def layout_text(
    items: Iterable[str],
    max_lines: int,
    max_width: float,
    origin: tuple[int, int],
    font_size: int,
    line_height: float = 1.2,
) -> list[TextFragment]:
    """Wrap ``items`` into positioned lines without exceeding ``max_lines``.

    Items are separated by one blank line, which counts against the budget.
    The first item is always shown. If an item runs past the budget, the
    remaining lines are replaced by a ``* * *`` marker. With a budget of one
    line the marker follows the first line, so the block can take two.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be at least 1, got {max_lines}")

    x, y = origin
    step = font_size * line_height
    cursor = float(y)
    used = 0
    fragments: list[TextFragment] = []

    for item in items:
        lines = textwrap.wrap(item, int(max_width)) or [""]

        if used + len(lines) >= max_lines and used != 0:
            return fragments

        for idx, line in enumerate(lines):
            fragments.append(TextFragment(line, x, cursor, font_size))
            used += 1
            cursor += step

            if used >= max_lines - 1 and idx < len(lines) - 1:
                fragments.append(TextFragment(PLACEHOLDER, x, cursor, font_size))
                return fragments

        cursor += step
        used += 1

    return fragments


__all__ = ["PLACEHOLDER", "TextFragment", "layout_text"]
