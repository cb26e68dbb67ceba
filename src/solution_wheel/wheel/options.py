"""The catalog of coping suggestions shown on the wheel.

Order matters: an option's index decides its angular position, and every
option gets the same slice of the wheel.
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class SolutionOption:
    """One sector of the wheel: emoji label, suggestion text and fill color."""

    emoji: str
    description: str
    color: tuple[int, int, int]

    @property
    def caption(self) -> str:
        """Text shown once the wheel lands on this option."""
        return f"{self.emoji} {self.description}"


def rgb(hex_color: int) -> tuple[int, int, int]:
    """Convert 0xRRGGBB (alpha ignored) into an RGB tuple."""
    return ((hex_color >> 16) & 0xFF, (hex_color >> 8) & 0xFF, hex_color & 0xFF)


SOLUTION_OPTIONS: tuple[SolutionOption, ...] = (
    SolutionOption("👃🏼", "לינשום עמוק", rgb(0xFFC107)),
    SolutionOption("🗣️", "לדבר עם מישהו", rgb(0x4CAF50)),
    SolutionOption("🎨", "לצייר את הרגשות", rgb(0x2196F3)),
    SolutionOption("🎵", "לשמוע מוזיקה", rgb(0x9C27B0)),
    SolutionOption("🧸", "לחבק בובה", rgb(0xE91E63)),
    SolutionOption("👐🏼", "לספור עד 10", rgb(0x795548)),
    SolutionOption("🚶", "לעשות הליכה", rgb(0x607D8B)),
    SolutionOption("📚", "לקרוא ספר", rgb(0xFF5722)),
)


def section_angle(section_count: int) -> float:
    """Angular width of one sector in degrees."""
    if section_count <= 0:
        raise ValueError(f"section_count must be positive, got {section_count}")
    return 360.0 / section_count


def option_at(options: Sequence[SolutionOption], index: int) -> SolutionOption:
    """Catalog lookup that rejects out-of-range indices instead of wrapping."""
    if not 0 <= index < len(options):
        raise IndexError(f"option index {index} out of range for {len(options)} options")
    return options[index]
