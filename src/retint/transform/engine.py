"""Color transform engine.

Turns a source color, a role and a theme into a deterministic
replacement color:

    source RGBA -> HSL -> role/mode remap -> theme filters -> RGB
                -> filter matrix -> hex

All caching lives on a TransformContext passed explicitly to the
transform functions. A theme switch must call TransformContext.flush().
"""

import logging
from dataclasses import dataclass

from retint.colors import hsl_to_rgb, parse_color, rgb_to_hex, rgb_to_hsl
from retint.models import HSLA, RGBA, ColorPoles, ColorRole, EngineConfig, ThemeMode, ThemeProfile
from retint.registry import ColorPalette, ColorRegistry

from .filters import apply_theme_filters
from .matrix import MatrixCache, apply_color_matrix
from .remap import (
    RemapFunction,
    background_dark,
    background_light,
    border_dark,
    border_light,
    text_dark,
    text_light,
)

logger = logging.getLogger(__name__)

FALLBACK_POLES = ColorPoles(
    background=HSLA(h=0, s=0, l=0.1),
    text=HSLA(h=0, s=0, l=0.9),
    surface=HSLA(h=0, s=0, l=0.2),
)

# The remap already moves colors into the target mode, so the filter
# matrix is always taken with the light-mode disposition (gamma 2.2).
MATRIX_DARK_DISPOSITION = False

_REMAPS: dict[tuple[ColorRole, bool], RemapFunction] = {
    (ColorRole.BACKGROUND, True): background_dark,
    (ColorRole.BACKGROUND, False): background_light,
    (ColorRole.TEXT, True): text_dark,
    (ColorRole.TEXT, False): text_light,
    (ColorRole.BORDER, True): border_dark,
    (ColorRole.BORDER, False): border_light,
}


def detect_theme_mode(theme: ThemeProfile) -> ThemeMode:
    """Map a theme id to its transformation mode; unknown ids use dark."""
    try:
        return ThemeMode(theme.id)
    except ValueError:
        return ThemeMode.DARK


def get_color_poles(theme: ThemeProfile) -> ColorPoles:
    """HSL of the theme's palette entries, with neutral fallbacks for unparseable ones."""
    background = parse_color(theme.palette.background)
    text = parse_color(theme.palette.text)
    surface = parse_color(theme.palette.surface)

    return ColorPoles(
        background=rgb_to_hsl(background) if background else FALLBACK_POLES.background,
        text=rgb_to_hsl(text) if text else FALLBACK_POLES.text,
        surface=rgb_to_hsl(surface) if surface else FALLBACK_POLES.surface,
    )


@dataclass
class CacheStats:
    """Sizes of the transform caches."""

    modification_entries: int
    modification_functions: int
    pole_entries: int
    matrix_entries: int
    palette_entries: int
    registry_entries: int


class TransformContext:
    """
    Owns every cache used by color transformation.

    - registry: theme-scoped, LRU-bounded, consulted first
    - palette: per-role map for the currently bound theme
    - matrix cache: filter matrices per theme and mode
    - modification caches: one per remap function
    - pole cache: ColorPoles per theme
    """

    def __init__(
        self,
        registry: ColorRegistry | None = None,
        palette: ColorPalette | None = None,
        config: EngineConfig | None = None,
    ):
        self.config = config or EngineConfig()
        self.registry = registry or ColorRegistry(self.config.registry_capacity)
        self.palette = palette or ColorPalette()
        self.matrices = MatrixCache()
        self._modifications: dict[RemapFunction, dict[tuple, str]] = {}
        self._poles: dict[tuple, ColorPoles] = {}
        self._bound_theme: tuple | None = None

    @staticmethod
    def theme_key(theme: ThemeProfile) -> tuple:
        """Identity of a theme for caching: id plus every filter value."""
        return (theme.id, theme.filters.cache_key if theme.filters else None)

    def bind_theme(self, theme: ThemeProfile) -> None:
        """
        Make theme the palette's theme.

        The palette is not theme-scoped, so switching to a different
        theme clears it. A profile that reuses a registered theme id with
        different filters also clears that id from the registry.
        """
        key = self.theme_key(theme)
        if key == self._bound_theme:
            return

        if self._bound_theme is not None:
            self.palette.clear()
            if self._bound_theme[0] == theme.id:
                self.registry.clear_theme(theme.id)
        self._bound_theme = key

    def poles_for(self, theme: ThemeProfile) -> ColorPoles:
        key = self.theme_key(theme)
        poles = self._poles.get(key)
        if poles is None:
            poles = get_color_poles(theme)
            self._poles[key] = poles
        return poles

    def modification_cache(self, remap: RemapFunction) -> dict[tuple, str]:
        return self._modifications.setdefault(remap, {})

    def flush(self) -> None:
        """Drop every cache except the registry, which is cleared per theme by its owner."""
        self._modifications.clear()
        self._poles.clear()
        self.matrices.clear()
        self.palette.clear()
        self._bound_theme = None
        logger.debug("Transform caches flushed")

    def cache_stats(self) -> CacheStats:
        return CacheStats(
            modification_entries=sum(len(c) for c in self._modifications.values()),
            modification_functions=len(self._modifications),
            pole_entries=len(self._poles),
            matrix_entries=len(self.matrices),
            palette_entries=len(self.palette),
            registry_entries=len(self.registry),
        )


_default_context: TransformContext | None = None


def get_default_context() -> TransformContext:
    """Get the process-wide default transform context (created lazily)."""
    global _default_context
    if _default_context is None:
        _default_context = TransformContext()
    return _default_context


def reset_default_context() -> None:
    """Discard the process-wide default context."""
    global _default_context
    _default_context = None


def select_remap(role: ColorRole, mode: ThemeMode) -> RemapFunction:
    """Pick the remap function for a role and mode."""
    return _REMAPS[(role, mode.is_dark)]


def modify_color(
    rgba: RGBA, theme: ThemeProfile, remap: RemapFunction, context: TransformContext
) -> str:
    """Run one remap function through its cache and the perceptual correction."""
    cache = context.modification_cache(remap)
    cache_key = (rgba.key, *context.theme_key(theme))

    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    poles = context.poles_for(theme)
    modified = apply_theme_filters(remap(rgb_to_hsl(rgba), poles, theme), theme.filters)

    matrix = context.matrices.get(theme, MATRIX_DARK_DISPOSITION)
    result = rgb_to_hex(apply_color_matrix(hsl_to_rgb(modified), matrix))

    cache[cache_key] = result
    return result


def transform_color(
    rgba: RGBA,
    role: ColorRole,
    theme: ThemeProfile,
    mode: ThemeMode | None = None,
    register: bool = True,
    context: TransformContext | None = None,
) -> str:
    """
    Transform a color for a role under a theme.

    Args:
        rgba: Source color
        role: How the color is used
        theme: Target theme
        mode: Override the mode derived from the theme id. An override that
            differs from the theme's own mode bypasses the registry and palette.
        register: Consult and update the registry and palette
        context: Cache owner (defaults to the process-wide context)

    Returns:
        Replacement color as a hex string
    """
    context = context or get_default_context()
    role = ColorRole(role)
    context.bind_theme(theme)

    theme_mode = detect_theme_mode(theme)
    if mode is not None and mode != theme_mode:
        register = False
    mode = mode or theme_mode

    if register:
        registered = context.registry.get_transformed(rgba, role, theme.id)
        if registered is not None:
            return registered

        known = context.palette.get(role, rgba)
        if known is not None:
            return known

    result = modify_color(rgba, theme, select_remap(role, mode), context)

    if register:
        context.palette.register(role, rgba, result)
        context.registry.register(rgba, rgb_to_hex(rgba), result, role, theme.id)

    return result


def transform_css_color(
    value: str,
    role: ColorRole,
    theme: ThemeProfile,
    mode: ThemeMode | None = None,
    context: TransformContext | None = None,
) -> str | None:
    """Parse a CSS color and transform it; None when the value is not a color."""
    rgba = parse_color(value)
    if rgba is None:
        return None
    return transform_color(rgba, role, theme, mode=mode, context=context)
