from __future__ import annotations

import pytest

from solution_wheel.wheel.options import SOLUTION_OPTIONS, option_at, rgb, section_angle


def test_catalog_order_and_colors() -> None:
    assert len(SOLUTION_OPTIONS) == 8
    assert SOLUTION_OPTIONS[0].description == "לינשום עמוק"
    assert SOLUTION_OPTIONS[0].color == (0xFF, 0xC1, 0x07)
    assert SOLUTION_OPTIONS[7].emoji == "📚"
    assert SOLUTION_OPTIONS[7].color == (0xFF, 0x57, 0x22)


def test_caption_joins_emoji_and_description() -> None:
    assert SOLUTION_OPTIONS[5].caption == "👐🏼 לספור עד 10"


def test_rgb_ignores_alpha() -> None:
    assert rgb(0xFF4CAF50) == (0x4C, 0xAF, 0x50)


def test_section_angle() -> None:
    assert section_angle(8) == 45.0
    assert section_angle(3) == pytest.approx(120.0)
    with pytest.raises(ValueError):
        section_angle(0)


def test_option_at_does_not_wrap() -> None:
    assert option_at(SOLUTION_OPTIONS, 2) is SOLUTION_OPTIONS[2]
    with pytest.raises(IndexError):
        option_at(SOLUTION_OPTIONS, 8)
    with pytest.raises(IndexError):
        option_at(SOLUTION_OPTIONS, -1)
