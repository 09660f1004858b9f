"""Theme presets and per-user profile resolution."""

from .catalog import COLOR_BLINDNESS_FILTERS, ThemeCatalog, get_catalog, resolve_profile
from .schema import ThemeCatalogSchema

__all__ = [
    "COLOR_BLINDNESS_FILTERS",
    "ThemeCatalog",
    "ThemeCatalogSchema",
    "get_catalog",
    "resolve_profile",
]
