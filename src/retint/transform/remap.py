"""Role- and mode-aware HSL remapping.

Each remap function takes a source color in HSL, the theme's color poles
and the theme, and returns the remapped HSL color. Lightness is rescaled
piecewise around 0.5 into a band chosen by role and mode. Neutral
(grayscale-like) sources take hue and saturation from a pole; chromatic
sources get yellow and blue hue corrections so they don't turn muddy or
oversaturated on the new background.
"""

from collections.abc import Callable

from retint.colors import scale
from retint.models import HSLA, ColorPoles, ThemeProfile

MAX_BG_LIGHTNESS = 0.4
MIN_FG_LIGHTNESS = 0.55

BLUE_BACKGROUND_RANGE = (200.0, 280.0)
BLUE_FOREGROUND_RANGE = (205.0, 245.0)
BLUE_TARGET_RANGE = (205.0, 220.0)
YELLOW_RANGE = (60.0, 180.0)

RemapFunction = Callable[[HSLA, ColorPoles, ThemeProfile], HSLA]


def is_neutral_color(h: float, s: float, lightness: float, is_dark_color: bool) -> bool:
    """
    Whether a source color counts as neutral.

    Dark colors are neutral when very dark or very desaturated. Light
    colors are neutral when desaturated, or very light and bluish.
    """
    if is_dark_color:
        return lightness < 0.2 or s < 0.12
    is_blue = BLUE_BACKGROUND_RANGE[0] < h < BLUE_BACKGROUND_RANGE[1]
    return s < 0.24 or (lightness > 0.8 and is_blue)


def is_yellow_hue(h: float) -> bool:
    return YELLOW_RANGE[0] < h < YELLOW_RANGE[1]


def adjust_yellow_hue(h: float, lightness: float) -> tuple[float, float]:
    """Compress yellow hues and darken the muddiest part of the band."""
    if h > 120:
        h = scale(h, 120, 180, 135, 180)
    elif h > 60:
        h = scale(h, 60, 120, 60, 105)

    if 40 < h < 80:
        lightness *= 0.75
    return h, lightness


def is_blue_hue(h: float, is_background: bool) -> bool:
    low, high = BLUE_BACKGROUND_RANGE if is_background else BLUE_FOREGROUND_RANGE
    return low < h < high


def adjust_blue_hue(h: float) -> float:
    """Shift pure blues toward cyan."""
    if BLUE_FOREGROUND_RANGE[0] < h < BLUE_FOREGROUND_RANGE[1]:
        return scale(h, *BLUE_FOREGROUND_RANGE, *BLUE_TARGET_RANGE)
    return h


def max_background_lightness(theme: ThemeProfile) -> float:
    """Ceiling for dark-mode background lightness, lowered by a brightness filter."""
    if theme.filters is not None and theme.filters.brightness:
        return min(MAX_BG_LIGHTNESS, theme.filters.brightness * MAX_BG_LIGHTNESS)
    return MAX_BG_LIGHTNESS


def min_foreground_lightness(theme: ThemeProfile) -> float:
    """Floor for dark-mode text lightness, raised by the theme's contrast target."""
    if theme.minimum_contrast:
        return min(1.0, max(MIN_FG_LIGHTNESS, theme.minimum_contrast / 10))
    return MIN_FG_LIGHTNESS


def background_dark(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Backgrounds in dark mode: everything ends up at or below the lightness ceiling."""
    h, s, lightness = hsl.h, hsl.s, hsl.l
    max_bg = max_background_lightness(theme)
    is_dark = lightness < 0.5
    neutral = is_neutral_color(h, s, lightness, is_dark)

    if is_dark:
        lightness = scale(lightness, 0, 0.5, 0, max_bg)
        if neutral:
            h, s = poles.background.h, poles.background.s
        elif is_blue_hue(h, True):
            h = adjust_blue_hue(h)
    else:
        # Light sources invert toward the background pole
        lightness = scale(lightness, 0.5, 1, max_bg, poles.background.l)
        if neutral:
            h, s = poles.background.h, poles.background.s
        elif is_yellow_hue(h):
            h, lightness = adjust_yellow_hue(h, lightness)
        elif is_blue_hue(h, True):
            h = adjust_blue_hue(h)

    return HSLA(h=h, s=s, l=lightness, a=hsl.a)


def background_light(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Backgrounds in light mode."""
    h, s, lightness = hsl.h, hsl.s, hsl.l
    is_dark = lightness < 0.5
    neutral = is_neutral_color(h, s, lightness, is_dark)

    if is_dark:
        lightness = scale(lightness, 0, 0.5, poles.text.l, 0.3)
        if neutral:
            h, s = poles.text.h, poles.text.s
    else:
        lightness = scale(lightness, 0.5, 1, 0.5, poles.background.l)
        if neutral:
            h, s = poles.background.h, poles.background.s

    return HSLA(h=h, s=s, l=lightness, a=hsl.a)


def text_dark(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Text in dark mode: everything ends up at or above the lightness floor."""
    h, s, lightness = hsl.h, hsl.s, hsl.l
    min_fg = min_foreground_lightness(theme)
    is_light = lightness > 0.5
    neutral = is_neutral_color(h, s, lightness, not is_light)

    if is_light:
        lightness = scale(lightness, 0.5, 1, min_fg, poles.text.l)
        if neutral:
            h, s = poles.text.h, poles.text.s
        elif is_blue_hue(h, False):
            h = adjust_blue_hue(h)
    else:
        lightness = scale(lightness, 0, 0.5, poles.text.l, min_fg)
        if neutral:
            h, s = poles.text.h, poles.text.s
        elif is_blue_hue(h, False):
            h = adjust_blue_hue(h)
            lightness = min(1.0, lightness + 0.05)

    return HSLA(h=h, s=s, l=lightness, a=hsl.a)


def text_light(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Text in light mode."""
    h, s, lightness = hsl.h, hsl.s, hsl.l
    is_light = lightness > 0.5
    neutral = is_neutral_color(h, s, lightness, not is_light)

    if is_light:
        lightness = scale(lightness, 0.5, 1, 0.4, poles.text.l)
    else:
        lightness = scale(lightness, 0, 0.5, 0.2, poles.text.l)

    if neutral:
        h, s = poles.text.h, poles.text.s

    return HSLA(h=h, s=s, l=lightness, a=hsl.a)


def _border(hsl: HSLA, poles: ColorPoles, is_dark_mode: bool) -> HSLA:
    h, s, lightness = hsl.h, hsl.s, hsl.l

    if is_neutral_color(h, s, lightness, lightness < 0.5):
        pole = poles.text if is_dark_mode else poles.background
        h, s = pole.h, pole.s

    if is_dark_mode:
        lightness = scale(lightness, 0, 1, 0.2, 0.5)
    else:
        lightness = scale(lightness, 0, 1, 0.4, 0.7)

    return HSLA(h=h, s=s, l=lightness, a=hsl.a)


def border_dark(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Borders in dark mode: mid-dark band with text-pole neutrals."""
    return _border(hsl, poles, True)


def border_light(hsl: HSLA, poles: ColorPoles, theme: ThemeProfile) -> HSLA:
    """Borders in light mode: mid-light band with background-pole neutrals."""
    return _border(hsl, poles, False)
