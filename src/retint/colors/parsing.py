"""CSS color string parsing.

All parsers return None for input they cannot read; nothing here raises
for bad color text. Successful parses are cached by their normalized
(trimmed, lowercased) string until clear_parse_cache() is called.
"""

import logging
import math
import re

from retint.models import HSLA, RGBA

from .conversion import clamp, hsl_to_rgb, rgb_to_hsl
from .named import NAMED_COLORS

logger = logging.getLogger(__name__)

# CSS-wide keywords and non-color values that never parse
SKIPPED_KEYWORDS = frozenset(
    {"inherit", "transparent", "initial", "currentcolor", "none", "unset", "auto"}
)

_FUNCTION_RE = re.compile(r"^(rgba?|hsla?)\s*\(\s*([^)]*)\)$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?")
_SEPARATOR_RE = re.compile(r"[\s,/]+")
_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")

_rgba_cache: dict[str, RGBA] = {}
_hsla_cache: dict[str, HSLA] = {}


def _leading_number(token: str) -> float | None:
    """Read the numeric prefix of a CSS token (like JS parseFloat)."""
    match = _NUMBER_RE.match(token)
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def _split_arguments(text: str) -> list[str]:
    return [part for part in _SEPARATOR_RE.split(text.strip()) if part]


def _parse_alpha(token: str) -> float | None:
    value = _leading_number(token)
    if value is None:
        return None
    if token.endswith("%"):
        value /= 100
    return clamp(value, 0, 1)


def parse_hex(text: str) -> RGBA | None:
    """Parse #rgb, #rgba, #rrggbb or #rrggbbaa (the leading # is optional)."""
    digits = text[1:] if text.startswith("#") else text
    if not _HEX_DIGITS_RE.fullmatch(digits):
        return None

    if len(digits) in (3, 4):
        r, g, b = (int(digits[i] * 2, 16) for i in range(3))
        a = int(digits[3] * 2, 16) / 255 if len(digits) == 4 else 1.0
    elif len(digits) in (6, 8):
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    else:
        return None

    return RGBA(r=r, g=g, b=b, a=a)


def parse_rgb(text: str) -> RGBA | None:
    """Parse rgb()/rgba() with comma or space separators and percentage channels."""
    match = _FUNCTION_RE.match(text)
    if not match or not match.group(1).startswith("rgb"):
        return None

    parts = _split_arguments(match.group(2))
    if len(parts) < 3:
        return None

    channels = []
    for part in parts[:3]:
        value = _leading_number(part)
        if value is None:
            return None
        if part.endswith("%"):
            value = value / 100 * 255
        channels.append(clamp(value, 0, 255))

    alpha = _parse_alpha(parts[3]) if len(parts) >= 4 else 1.0
    if alpha is None:
        return None

    return RGBA(r=channels[0], g=channels[1], b=channels[2], a=alpha)


def _parse_hue(token: str) -> float | None:
    value = _leading_number(token)
    if value is None:
        return None
    if token.endswith("grad"):
        value = value * 0.9
    elif token.endswith("rad"):
        value = value * 180 / math.pi
    elif token.endswith("turn"):
        value = value * 360
    if not math.isfinite(value):
        return None
    return value % 360


def parse_hsl(text: str) -> RGBA | None:
    """Parse hsl()/hsla() with deg/rad/grad/turn hue units."""
    match = _FUNCTION_RE.match(text)
    if not match or not match.group(1).startswith("hsl"):
        return None

    parts = _split_arguments(match.group(2))
    if len(parts) < 3:
        return None

    hue = _parse_hue(parts[0])
    saturation = _leading_number(parts[1])
    lightness = _leading_number(parts[2])
    alpha = _parse_alpha(parts[3]) if len(parts) >= 4 else 1.0
    if hue is None or saturation is None or lightness is None or alpha is None:
        return None

    if parts[1].endswith("%"):
        saturation /= 100
    if parts[2].endswith("%"):
        lightness /= 100

    return hsl_to_rgb(
        HSLA(h=hue, s=clamp(saturation, 0, 1), l=clamp(lightness, 0, 1), a=alpha)
    )


def parse_named(name: str) -> RGBA | None:
    """Look up a CSS named color."""
    value = NAMED_COLORS.get(name.lower())
    if value is None:
        return None
    return RGBA(r=(value >> 16) & 255, g=(value >> 8) & 255, b=value & 255)


def parse_color(value: str, allow_transparent: bool = False) -> RGBA | None:
    """
    Parse any supported CSS color to RGBA.

    Args:
        value: CSS color text (hex, rgb(), hsl() or a named color)
        allow_transparent: Map "transparent" to RGBA(0, 0, 0, 0) instead of None

    Returns:
        The parsed color, or None for keywords and unparseable input
    """
    normalized = value.strip().lower()

    cached = _rgba_cache.get(normalized)
    if cached is not None:
        return cached

    if normalized == "transparent" and allow_transparent:
        return RGBA.transparent()
    if not normalized or normalized in SKIPPED_KEYWORDS:
        return None

    if normalized.startswith("#"):
        result = parse_hex(normalized)
    elif normalized.startswith("rgb"):
        result = parse_rgb(normalized)
    elif normalized.startswith("hsl"):
        result = parse_hsl(normalized)
    else:
        result = parse_named(normalized)

    if result is not None:
        _rgba_cache[normalized] = result
    else:
        logger.debug(f"Unparseable color: {value!r}")

    return result


def parse_to_hsl(value: str) -> HSLA | None:
    """Parse a CSS color straight to HSL, cached by the raw string."""
    cached = _hsla_cache.get(value)
    if cached is not None:
        return cached

    rgba = parse_color(value)
    if rgba is None:
        return None

    hsla = rgb_to_hsl(rgba)
    _hsla_cache[value] = hsla
    return hsla


def clear_parse_cache() -> None:
    """Flush both parse caches."""
    _rgba_cache.clear()
    _hsla_cache.clear()


def parse_cache_size() -> int:
    """Number of cached RGBA parses."""
    return len(_rgba_cache)
