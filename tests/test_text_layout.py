from __future__ import annotations

import pytest

from kindle_dash.logic.text_layout import PLACEHOLDER, TextFragment, layout_text

WORDS = "alpha beta gamma delta"  # wraps to one word per line at width 5


def _texts(fragments: list[TextFragment]) -> list[str]:
    return [fragment.text for fragment in fragments]


def test_layout_positions_and_item_gaps() -> None:
    fragments = layout_text(["one", "two", "three"], 10, 40, (5, 100), 10, 1.2)

    assert _texts(fragments) == ["one", "two", "three"]
    assert [fragment.x for fragment in fragments] == [5, 5, 5]
    assert [fragment.y for fragment in fragments] == pytest.approx([100, 124, 148])
    assert all(fragment.font_size == 10 for fragment in fragments)


def test_layout_wraps_items() -> None:
    fragments = layout_text([WORDS], 10, 5, (0, 0), 10, 1.0)

    assert _texts(fragments) == ["alpha", "beta", "gamma", "delta"]
    assert [fragment.y for fragment in fragments] == pytest.approx([0, 10, 20, 30])


def test_layout_stops_before_item_that_does_not_fit() -> None:
    fragments = layout_text(["alpha beta", "gamma delta"], 5, 5, (0, 0), 10)

    assert _texts(fragments) == ["alpha", "beta"]
    assert PLACEHOLDER not in _texts(fragments)


def test_layout_first_item_always_shown() -> None:
    fragments = layout_text(["first", "second"], 2, 40, (0, 0), 10)

    assert _texts(fragments) == ["first"]


def test_layout_truncates_first_item_with_placeholder() -> None:
    fragments = layout_text([WORDS, "never shown"], 3, 5, (0, 0), 10, 1.0)

    assert _texts(fragments) == ["alpha", "beta", PLACEHOLDER]
    assert fragments[-1].y == pytest.approx(20)


def test_layout_exact_fit_has_no_placeholder() -> None:
    fragments = layout_text(["alpha beta"], 3, 5, (0, 0), 10)

    assert _texts(fragments) == ["alpha", "beta"]


def test_layout_empty_item_takes_one_line() -> None:
    fragments = layout_text(["", "next"], 10, 40, (0, 0), 10, 1.0)

    assert _texts(fragments) == ["", "next"]
    assert fragments[1].y == pytest.approx(20)


def test_layout_no_items() -> None:
    assert layout_text([], 5, 40, (0, 0), 10) == []


def test_layout_single_line_budget_keeps_first_item() -> None:
    fragments = layout_text(["first item", "second"], 1, 40, (0, 0), 10)

    assert _texts(fragments) == ["first item"]


def test_layout_single_line_budget_marks_truncated_first_item() -> None:
    fragments = layout_text([WORDS], 1, 5, (0, 0), 10, 1.0)

    assert _texts(fragments) == ["alpha", PLACEHOLDER]
    assert fragments[1].y == pytest.approx(10)


def test_layout_rejects_empty_budget() -> None:
    with pytest.raises(ValueError):
        layout_text(["x"], 0, 40, (0, 0), 10)


def test_layout_line_budget_properties() -> None:
    items = [
        WORDS,
        "short",
        "a considerably longer headline that has to wrap across several lines",
        "tail",
    ]
    for max_lines in range(2, 16):
        for width in (5, 12, 30):
            fragments = layout_text(items, max_lines, width, (0, 0), 10)
            texts = _texts(fragments)

            assert len(fragments) <= max_lines
            assert texts[0].startswith("alpha")
            if PLACEHOLDER in texts:
                assert texts[-1] == PLACEHOLDER
                assert texts.count(PLACEHOLDER) == 1
