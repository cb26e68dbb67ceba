from __future__ import annotations

from solution_wheel.ui.text import is_rtl, truncate, visual_order


def test_latin_text_unchanged() -> None:
    assert not is_rtl("Network error")
    assert visual_order("Network error") == "Network error"


def test_hebrew_reversed_for_left_to_right_drawing() -> None:
    assert visual_order("לספור עד 10") == "10 דע רופסל"


def test_emoji_keeps_its_place_at_the_right() -> None:
    assert visual_order("📚 לקרוא ספר") == "רפס אורקל 📚"


def test_truncate_keeps_end() -> None:
    assert truncate("abcdef", 10) == "abcdef"
    assert truncate("abcdefghij", 5) == "…ghij"


def test_truncate_to_no_room_for_text() -> None:
    assert truncate("abcdef", 1) == "…"
    assert truncate("abcdef", 0) == ""
    assert truncate("abcdef", 2, ellipsis="...") == ".."
