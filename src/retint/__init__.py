"""retint: live re-theming of web page colors."""

__version__ = "0.1.0"

# Core engine
from .core import DynamicThemeEngine

# Theme catalog
from .catalog import ThemeCatalog, get_catalog

# Color transformation
from .transform import TransformContext, transform_color, transform_css_color

__all__ = [
    "DynamicThemeEngine",
    "ThemeCatalog",
    "TransformContext",
    "get_catalog",
    "transform_color",
    "transform_css_color",
]
