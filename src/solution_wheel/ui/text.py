"""Text helpers for pygame rendering.

pygame lays glyphs out left to right, so Hebrew strings are converted to
visual order before rendering: word order is reversed and letters inside
Hebrew words are reversed. Numbers and emoji keep their own order.
"""

import re

_HEBREW = re.compile(r"[\u0590-\u05FF]")


def is_rtl(text: str) -> bool:
    return bool(_HEBREW.search(text))


def visual_order(text: str) -> str:
    """Logical (typed) order to left-to-right display order."""
    if not is_rtl(text):
        return text
    words = text.split(" ")
    return " ".join(w[::-1] if is_rtl(w) else w for w in reversed(words))


def truncate(text: str, max_chars: int, ellipsis: str = "…") -> str:
    """Keep the end of long input visible, as a text field does while typing."""
    if len(text) <= max_chars:
        return text
    keep = max(max_chars - len(ellipsis), 0)
    if keep == 0:
        return ellipsis[:max(max_chars, 0)]
    return ellipsis + text[-keep:]
