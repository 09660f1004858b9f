"""Color transformation: matrices, role remaps, theme filters and the transform engine."""

from .engine import (
    FALLBACK_POLES,
    CacheStats,
    TransformContext,
    detect_theme_mode,
    get_color_poles,
    get_default_context,
    reset_default_context,
    transform_color,
    transform_css_color,
)
from .filters import apply_theme_filters
from .matrix import (
    IDENTITY_MATRIX,
    ColorMatrix,
    MatrixCache,
    MatrixKind,
    apply_color_matrix,
    compose_matrices,
    create_brightness_matrix,
    create_contrast_matrix,
    create_filter_matrix,
    create_gamma_matrix,
    create_saturation_matrix,
    format_matrix,
)

__all__ = [
    "FALLBACK_POLES",
    "IDENTITY_MATRIX",
    "CacheStats",
    "ColorMatrix",
    "MatrixCache",
    "MatrixKind",
    "TransformContext",
    "apply_color_matrix",
    "apply_theme_filters",
    "compose_matrices",
    "create_brightness_matrix",
    "create_contrast_matrix",
    "create_filter_matrix",
    "create_gamma_matrix",
    "create_saturation_matrix",
    "detect_theme_mode",
    "format_matrix",
    "get_color_poles",
    "get_default_context",
    "reset_default_context",
    "transform_color",
    "transform_css_color",
]
