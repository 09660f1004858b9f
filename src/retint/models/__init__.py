"""Data models for the retint engine."""

from .color import HSLA, RGBA
from .config import EngineConfig
from .enums import ColorBlindnessMode, ColorRole, SiteTendency, ThemeMode
from .site import (
    SYSTEM_AUTO,
    DetectionResult,
    FrameworkDetection,
    LuminanceSample,
    SitePreference,
    UserSettings,
)
from .theme import ColorPoles, ThemeFilters, ThemePalette, ThemeProfile

__all__ = [
    "HSLA",
    "RGBA",
    "SYSTEM_AUTO",
    # Enums
    "ColorBlindnessMode",
    "ColorPoles",
    "ColorRole",
    "DetectionResult",
    # Config
    "EngineConfig",
    "FrameworkDetection",
    "LuminanceSample",
    "SitePreference",
    "SiteTendency",
    "ThemeFilters",
    "ThemeMode",
    "ThemePalette",
    # Models
    "ThemeProfile",
    "UserSettings",
]
