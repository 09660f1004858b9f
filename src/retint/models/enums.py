"""Enumerations for the retint engine."""

from enum import Enum


class ColorRole(str, Enum):
    """Semantic usage of a color, selecting which remap rule applies."""

    BACKGROUND = "background"
    TEXT = "text"
    BORDER = "border"


class ThemeMode(str, Enum):
    """Transformation strategy derived from a theme id."""

    LIGHT = "light"
    DARK = "dark"
    HIGH_CONTRAST = "high-contrast"
    NIGHT_WARM = "night-warm"
    PROTANOPIA = "colorblind-protanopia"
    DEUTERANOPIA = "colorblind-deuteranopia"
    TRITANOPIA = "colorblind-tritanopia"

    @property
    def is_dark(self) -> bool:
        """Whether this mode produces dark output (dark, night-warm)."""
        return self in (ThemeMode.DARK, ThemeMode.NIGHT_WARM)


class SiteTendency(str, Enum):
    """Page-level light/dark classification reported by detection."""

    LIGHT = "light"
    DARK = "dark"
    MIXED = "mixed"


class ColorBlindnessMode(str, Enum):
    """Color-vision deficiency overlays applied when resolving a profile."""

    NONE = "none"
    PROTANOPIA = "protanopia"
    DEUTERANOPIA = "deuteranopia"
    TRITANOPIA = "tritanopia"
