"""Color model: conversion, parsing and serialization of CSS colors."""

from .conversion import (
    clamp,
    hsl_to_rgb,
    hsl_to_string,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_string,
    round_half_up,
    scale,
)
from .named import NAMED_COLORS
from .parsing import (
    SKIPPED_KEYWORDS,
    clear_parse_cache,
    parse_cache_size,
    parse_color,
    parse_hex,
    parse_hsl,
    parse_named,
    parse_rgb,
    parse_to_hsl,
)

__all__ = [
    "NAMED_COLORS",
    "SKIPPED_KEYWORDS",
    "clamp",
    "clear_parse_cache",
    "hsl_to_rgb",
    "hsl_to_string",
    "parse_cache_size",
    "parse_color",
    "parse_hex",
    "parse_hsl",
    "parse_named",
    "parse_rgb",
    "parse_to_hsl",
    "rgb_to_hex",
    "rgb_to_hsl",
    "rgb_to_string",
    "round_half_up",
    "scale",
]
