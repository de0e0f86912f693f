from __future__ import annotations

from datetime import date

import pytest

from kindle_dash.logic.moon import MOON_ICON_PHASES, moon_icon_index, moon_phase_fraction


def test_moon_phase_known_values() -> None:
    # 2024: r = 24 % 19 = 5; (55 + 5 + 30) % 30 = 0
    assert moon_phase_fraction(date(2024, 5, 30)) == pytest.approx(0.0)
    # 2026: r = 26 % 19 = 7; (77 + 10 + 19) % 30 = 16
    assert moon_phase_fraction(date(2026, 10, 19)) == pytest.approx(16 / 29.53)


def test_moon_phase_negative_correction() -> None:
    # 2011: r = 11 - 19 = -8; (-88 + 1 + 1) % 30 = 4
    assert moon_phase_fraction(date(2011, 1, 1)) == pytest.approx(4 / 29.53)


def test_moon_phase_in_unit_range() -> None:
    for year in (2000, 2009, 2010, 2018, 2025):
        for month in range(1, 13):
            for day in (1, 10, 20, 28):
                assert 0.0 <= moon_phase_fraction(date(year, month, day)) < 1.0


def test_moon_icon_index_exact_phases() -> None:
    for idx, phase in enumerate(MOON_ICON_PHASES):
        assert moon_icon_index(phase) == idx


def test_moon_icon_index_ties_go_to_later_phase() -> None:
    assert moon_icon_index(0.0625) == 1


def test_moon_icon_index_has_no_wraparound() -> None:
    assert moon_icon_index(0.98) == 7
