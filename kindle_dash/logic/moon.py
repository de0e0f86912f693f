"""Moon phase approximation."""

from __future__ import annotations

from datetime import date

SYNODIC_MONTH_DAYS = 29.53

# 0 = new moon, 0.5 = full moon
MOON_ICON_PHASES = (0.0, 0.125, 0.25, 0.375, 0.5, 0.625, 0.75, 0.875)


def moon_phase_fraction(day: date) -> float:
    """Approximate moon phase for ``day`` using Conway's algorithm."""
    r = (day.year % 100) % 19
    if r > 9:
        r -= 19
    t = (r * 11 + day.month + day.day) % 30
    return t / SYNODIC_MONTH_DAYS


def moon_icon_index(phase: float) -> int:
    """Index into MOON_ICON_PHASES of the phase closest to ``phase``.

    Ties resolve to the later phase.
    """
    closest = len(MOON_ICON_PHASES) - 1
    smallest_diff = 1.0
    for idx in range(len(MOON_ICON_PHASES) - 1, -1, -1):
        diff = abs(phase - MOON_ICON_PHASES[idx])
        if diff < smallest_diff:
            smallest_diff = diff
            closest = idx
    return closest


__all__ = ["MOON_ICON_PHASES", "moon_icon_index", "moon_phase_fraction"]
