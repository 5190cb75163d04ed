"""Color palette for the QuizGuard windows in light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """One color role, resolved per theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Color roles used by the teacher console and the student kiosk."""

    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F5F7FF")
    TEXT_MUTED = ThemeColors(light="#6B7280", dark="#94A3B8")

    BACKGROUND = ThemeColors(light="#FFFFFF", dark="#0B1120")
    SURFACE = ThemeColors(light="#F3F4F6", dark="#111A30")

    ACCENT = ThemeColors(light="#1F9AA5", dark="#1F9AA5")
    ACCENT_HOVER = ThemeColors(light="#16808A", dark="#16808A")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#FFFFFF")

    BORDER = ThemeColors(light="#D1D5DB", dark="#334155")

    # Timer and result states
    SUCCESS = ThemeColors(light="#15803D", dark="#4ADE80")
    WARNING = ThemeColors(light="#B45309", dark="#FACC15")
    DANGER = ThemeColors(light="#B91C1C", dark="#F87171")
