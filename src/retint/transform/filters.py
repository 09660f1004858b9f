"""Theme-level HSL filters applied after the role remap."""

from retint.colors import clamp
from retint.models import HSLA, ThemeFilters

SEPIA_HUE = 38.0
SEPIA_SATURATION = 0.5


def apply_theme_filters(hsl: HSLA, filters: ThemeFilters | None) -> HSLA:
    """
    Apply hue rotation, saturation, grayscale and sepia to a color.

    Lightness and alpha are left alone; brightness and contrast are
    handled by the filter matrix instead.
    """
    if filters is None:
        return hsl

    h, s = hsl.h, hsl.s

    if filters.hue_rotate:
        h = (h + filters.hue_rotate) % 360

    if filters.saturate is not None and filters.saturate != 1:
        s = clamp(s * filters.saturate, 0, 1)

    if filters.grayscale:
        s = s * (1 - filters.grayscale)

    if filters.sepia:
        h = h + (SEPIA_HUE - h) * filters.sepia
        s = s + (SEPIA_SATURATION - s) * filters.sepia

    return HSLA(h=h, s=s, l=hsl.l, a=hsl.a)
