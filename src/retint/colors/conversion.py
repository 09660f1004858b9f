"""RGB/HSL conversion, serialization and numeric helpers.

Conversions follow the standard hexagonal HSL model
(https://en.wikipedia.org/wiki/HSL_and_HSV). RGB channels produced from
HSL are rounded half-up to integers, so a round trip is lossy by at most
one unit per channel.
"""

import math

from retint.models import HSLA, RGBA


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (CSS/JS rounding)."""
    return math.floor(value + 0.5)


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp value between min_value and max_value."""
    return min(max(value, min_value), max_value)


def scale(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """
    Linearly remap value from [in_min, in_max] to [out_min, out_max].

    The result is always clamped to the output range, including when the
    input lies outside the input range. A degenerate input range maps to
    out_min.
    """
    lo, hi = min(out_min, out_max), max(out_min, out_max)
    if in_max == in_min:
        return clamp(out_min, lo, hi)
    return clamp(out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min), lo, hi)


def rgb_to_hsl(rgba: RGBA) -> HSLA:
    """Convert RGB to HSL, with hue wrapped into [0, 360)."""
    r = rgba.r / 255
    g = rgba.g / 255
    b = rgba.b / 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    chroma = max_c - min_c
    lightness = (max_c + min_c) / 2

    if chroma == 0:
        return HSLA(h=0, s=0, l=lightness, a=rgba.a)

    if max_c == r:
        hue = ((g - b) / chroma) % 6
    elif max_c == g:
        hue = (b - r) / chroma + 2
    else:
        hue = (r - g) / chroma + 4
    hue = (hue * 60) % 360

    saturation = chroma / (1 - abs(2 * lightness - 1))

    return HSLA(h=hue, s=clamp(saturation, 0, 1), l=lightness, a=rgba.a)


def hsl_to_rgb(hsla: HSLA) -> RGBA:
    """Convert HSL to RGB with integer channels."""
    h, s, lightness = hsla.h % 360, hsla.s, hsla.l

    if s == 0:
        gray = round_half_up(lightness * 255)
        return RGBA(r=gray, g=gray, b=gray, a=hsla.a)

    chroma = (1 - abs(2 * lightness - 1)) * s
    x = chroma * (1 - abs((h / 60) % 2 - 1))
    m = lightness - chroma / 2

    if h < 60:
        rgb = (chroma, x, 0.0)
    elif h < 120:
        rgb = (x, chroma, 0.0)
    elif h < 180:
        rgb = (0.0, chroma, x)
    elif h < 240:
        rgb = (0.0, x, chroma)
    elif h < 300:
        rgb = (x, 0.0, chroma)
    else:
        rgb = (chroma, 0.0, x)

    r, g, b = (clamp(round_half_up((n + m) * 255), 0, 255) for n in rgb)
    return RGBA(r=r, g=g, b=b, a=hsla.a)


def _hex_byte(value: float) -> str:
    return f"{int(clamp(round_half_up(value), 0, 255)):02x}"


def rgb_to_hex(rgba: RGBA) -> str:
    """Serialize to #rrggbb, or #rrggbbaa when alpha < 1."""
    digits = _hex_byte(rgba.r) + _hex_byte(rgba.g) + _hex_byte(rgba.b)
    if rgba.a < 1:
        digits += _hex_byte(rgba.a * 255)
    return f"#{digits}"


def rgb_to_string(rgba: RGBA) -> str:
    """Serialize to rgb()/rgba() functional notation."""
    r, g, b = (round_half_up(c) for c in (rgba.r, rgba.g, rgba.b))
    if rgba.a < 1:
        return f"rgba({r}, {g}, {b}, {rgba.a:.2f})"
    return f"rgb({r}, {g}, {b})"


def hsl_to_string(hsla: HSLA) -> str:
    """Serialize to hsl()/hsla() functional notation."""
    h = round_half_up(hsla.h)
    s = round_half_up(hsla.s * 100)
    lightness = round_half_up(hsla.l * 100)
    if hsla.a < 1:
        return f"hsla({h}, {s}%, {lightness}%, {hsla.a:.2f})"
    return f"hsl({h}, {s}%, {lightness}%)"
