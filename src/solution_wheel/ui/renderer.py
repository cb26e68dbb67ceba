"""
Wheel screen renderer using pygame.

Draws the title, text field, microphone button, pointer, wheel, spin button
and the landed caption from a ``ScreenController`` snapshot.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence

import pygame

from solution_wheel.config.settings import WindowSettings
from solution_wheel.ui.controller import TEXT_PLACEHOLDER, TITLE, ScreenController
from solution_wheel.ui.text import truncate, visual_order
from solution_wheel.wheel.geometry import label_position, pointer_triangle, sector_polygon
from solution_wheel.wheel.options import SOLUTION_OPTIONS, SolutionOption, section_angle

logger = logging.getLogger(__name__)


@dataclass
class Palette:
    """Screen colors."""
    bg: tuple[int, int, int] = (250, 250, 250)
    text: tuple[int, int, int] = (20, 20, 20)
    placeholder: tuple[int, int, int] = (150, 150, 150)
    field_bg: tuple[int, int, int] = (255, 255, 255)
    field_border: tuple[int, int, int] = (210, 210, 210)
    field_focus: tuple[int, int, int] = (98, 0, 238)
    button: tuple[int, int, int] = (98, 0, 238)
    button_disabled: tuple[int, int, int] = (200, 200, 200)
    button_text: tuple[int, int, int] = (255, 255, 255)
    pointer: tuple[int, int, int] = (0, 0, 0)
    mic_idle: tuple[int, int, int] = (0, 0, 0)
    mic_active: tuple[int, int, int] = (229, 57, 53)
    error: tuple[int, int, int] = (198, 40, 40)
    hub: tuple[int, int, int] = (255, 255, 255)


# Fonts with Hebrew glyphs, tried in order
TEXT_FONT_PATHS = [
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansHebrew-Regular.ttf",
]
TEXT_FONT_NAMES = ["Arial Unicode MS", "Arial", "DejaVu Sans", "Noto Sans Hebrew"]

EMOJI_FONT_PATHS = [
    "/System/Library/Fonts/Apple Color Emoji.ttc",
    "/usr/share/fonts/truetype/noto/NotoColorEmoji.ttf",
    "/usr/share/fonts/noto/NotoColorEmoji.ttf",
]
# Bitmap emoji fonts only open at their strike size
EMOJI_STRIKE_SIZE = 109


def compute_layout(settings: WindowSettings) -> dict[str, pygame.Rect]:
    """Screen regions, top to bottom in a single centered column."""
    w = settings.width
    margin = 16
    wheel = settings.wheel_size

    title = pygame.Rect(margin, margin, w - 2 * margin, 36)
    mic = pygame.Rect(w - margin - 48, title.bottom + 16, 48, 48)
    field = pygame.Rect(margin, mic.top, mic.left - 8 - margin, 56)
    error = pygame.Rect(margin, field.bottom + 4, w - 2 * margin, 20)
    pointer = pygame.Rect((w - 30) // 2, error.bottom + 8, 30, 40)
    wheel_rect = pygame.Rect((w - wheel) // 2, pointer.bottom, wheel, wheel)
    spin = pygame.Rect((w - 220) // 2, wheel_rect.bottom + 32, 220, 48)
    caption = pygame.Rect(margin, spin.bottom + 16, w - 2 * margin, 40)

    return {
        "title": title,
        "field": field,
        "mic": mic,
        "error": error,
        "pointer": pointer,
        "wheel": wheel_rect,
        "spin": spin,
        "caption": caption,
    }


def _load_font(size: int) -> pygame.font.Font:
    for font_path in TEXT_FONT_PATHS:
        if not os.path.exists(font_path):
            continue
        try:
            font = pygame.font.Font(font_path, size)
            font.render("בדיקה", True, (0, 0, 0))
            logger.debug(f"Using font: {font_path} ({size}px)")
            return font
        except (pygame.error, OSError) as e:
            logger.debug(f"Font {font_path} failed: {e}")

    for font_name in TEXT_FONT_NAMES:
        path = pygame.font.match_font(font_name)
        if path:
            logger.debug(f"Using system font: {font_name} ({size}px)")
            return pygame.font.Font(path, size)

    logger.warning("No Hebrew font found, using default")
    return pygame.font.SysFont(None, size)


def _load_emoji_font() -> Optional[pygame.font.Font]:
    for font_path in EMOJI_FONT_PATHS:
        if not os.path.exists(font_path):
            continue
        try:
            font = pygame.font.Font(font_path, EMOJI_STRIKE_SIZE)
            logger.debug(f"Using emoji font: {font_path}")
            return font
        except (pygame.error, OSError) as e:
            logger.debug(f"Emoji font {font_path} failed: {e}")
    logger.info("No emoji font found, wheel labels will be blank")
    return None


class WheelRenderer:
    """Draws the whole screen for one frame."""

    def __init__(
        self,
        settings: Optional[WindowSettings] = None,
        options: Sequence[SolutionOption] = SOLUTION_OPTIONS,
        palette: Optional[Palette] = None,
    ) -> None:
        self.settings = settings or WindowSettings()
        self.options = tuple(options)
        self.palette = palette or Palette()
        self.layout = compute_layout(self.settings)

        self._title_font: Optional[pygame.font.Font] = None
        self._font: Optional[pygame.font.Font] = None
        self._caption_font: Optional[pygame.font.Font] = None
        self._emoji_font: Optional[pygame.font.Font] = None
        self._emoji_cache: dict[str, pygame.Surface] = {}

    def init_fonts(self) -> None:
        """Load fonts; requires ``pygame.font.init()``."""
        self._title_font = _load_font(28)
        self._font = _load_font(18)
        self._caption_font = _load_font(24)
        self._emoji_font = _load_emoji_font()

    def draw(self, surface: pygame.Surface, screen: ScreenController, text_focused: bool = False) -> None:
        surface.fill(self.palette.bg)
        self._draw_title(surface)
        self._draw_text_field(surface, screen.text, text_focused)
        if screen.speech_available:
            self._draw_mic_button(surface, screen.is_listening)
        if screen.last_error:
            self._draw_error(surface, screen.last_error)
        self._draw_pointer(surface)
        self._draw_wheel(surface, screen.wheel_angle)
        self._draw_spin_button(surface, screen.spin_label, screen.spin_enabled)
        if screen.caption:
            self._draw_caption(surface, screen.caption)

    # --- Pieces ----------------------------------------------------------

    def _blit_centered(self, surface, font, text, color, rect) -> None:
        text_surf = font.render(visual_order(text), True, color)
        surface.blit(text_surf, text_surf.get_rect(center=rect.center))

    def _draw_title(self, surface: pygame.Surface) -> None:
        self._blit_centered(surface, self._title_font, TITLE, self.palette.text, self.layout["title"])

    def _draw_text_field(self, surface: pygame.Surface, text: str, focused: bool) -> None:
        rect = self.layout["field"]
        pygame.draw.rect(surface, self.palette.field_bg, rect, border_radius=6)
        border = self.palette.field_focus if focused else self.palette.field_border
        pygame.draw.rect(surface, border, rect, width=2, border_radius=6)

        inner = rect.inflate(-16, 0)
        if text:
            shown, color = text, self.palette.text
        else:
            shown, color = TEXT_PLACEHOLDER, self.palette.placeholder

        # Right-aligned, shortened until it fits
        max_chars = len(shown)
        text_surf = self._font.render(visual_order(shown), True, color)
        while text_surf.get_width() > inner.width and max_chars > 4:
            max_chars -= 2
            text_surf = self._font.render(visual_order(truncate(shown, max_chars)), True, color)
        surface.blit(text_surf, text_surf.get_rect(midright=inner.midright))

    def _draw_mic_button(self, surface: pygame.Surface, listening: bool) -> None:
        rect = self.layout["mic"]
        color = self.palette.mic_active if listening else self.palette.mic_idle
        cx, cy = rect.center

        capsule = pygame.Rect(0, 0, 12, 20)
        capsule.center = (cx, cy - 6)
        pygame.draw.rect(surface, color, capsule, border_radius=6)
        pygame.draw.arc(surface, color, pygame.Rect(cx - 11, cy - 14, 22, 22), 3.4, 6.0, 2)
        pygame.draw.line(surface, color, (cx, cy + 8), (cx, cy + 14), 2)
        pygame.draw.line(surface, color, (cx - 6, cy + 14), (cx + 6, cy + 14), 2)

    def _draw_error(self, surface: pygame.Surface, message: str) -> None:
        text_surf = self._font.render(visual_order(message), True, self.palette.error)
        rect = self.layout["error"]
        surface.blit(text_surf, text_surf.get_rect(midright=rect.midright))

    def _draw_pointer(self, surface: pygame.Surface) -> None:
        rect = self.layout["pointer"]
        points = pointer_triangle(rect.centerx, rect.top, rect.width, rect.height)
        pygame.draw.polygon(surface, self.palette.pointer, points)
        pygame.draw.rect(
            surface,
            self.palette.pointer,
            pygame.Rect(rect.centerx - 2, rect.top, 4, int(rect.height * 0.4)),
        )

    def _draw_wheel(self, surface: pygame.Surface, angle: float) -> None:
        rect = self.layout["wheel"]
        cx, cy = rect.center
        radius = rect.width / 2 - 16
        size = section_angle(len(self.options))

        for index, option in enumerate(self.options):
            points = sector_polygon(cx, cy, radius, angle + index * size, size, steps=24)
            pygame.draw.polygon(surface, option.color, points)

        for index, option in enumerate(self.options):
            label_angle = angle + index * size + size / 2
            glyph = self._emoji_surface(option.emoji)
            if glyph is None:
                continue
            rotated = pygame.transform.rotate(glyph, -label_angle)
            pos = label_position(cx, cy, radius, label_angle)
            surface.blit(rotated, rotated.get_rect(center=(int(pos[0]), int(pos[1]))))

        pygame.draw.circle(surface, self.palette.hub, (cx, cy), 10)

    def _emoji_surface(self, emoji: str) -> Optional[pygame.Surface]:
        if self._emoji_font is None:
            return None
        if emoji not in self._emoji_cache:
            try:
                glyph = self._emoji_font.render(emoji, True, self.palette.text)
                self._emoji_cache[emoji] = pygame.transform.smoothscale(glyph, (32, 32))
            except pygame.error as e:
                logger.debug(f"Could not render {emoji!r}: {e}")
                return None
        return self._emoji_cache[emoji]

    def _draw_spin_button(self, surface: pygame.Surface, label: str, enabled: bool) -> None:
        rect = self.layout["spin"]
        color = self.palette.button if enabled else self.palette.button_disabled
        pygame.draw.rect(surface, color, rect, border_radius=8)
        self._blit_centered(surface, self._font, label, self.palette.button_text, rect)

    def _draw_caption(self, surface: pygame.Surface, caption: str) -> None:
        self._blit_centered(surface, self._caption_font, caption, self.palette.text, self.layout["caption"])
