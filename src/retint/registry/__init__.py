"""Color consistency: the theme-scoped registry and the per-role palette."""

from .color_registry import ColorRegistry, RegisteredColor
from .palette import ColorPalette

__all__ = [
    "ColorPalette",
    "ColorRegistry",
    "RegisteredColor",
]
