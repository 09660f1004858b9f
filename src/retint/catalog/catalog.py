"""
Theme catalog and profile resolution.

The catalog is static data: eight preset ThemeProfiles shipped in
themes.json and validated with ThemeCatalogSchema at load time.

Resolving a profile for a user layers two settings on top of the preset:

::

    preset filters  ──merge──>  color-blindness overlay  ──>  resolved filters
    preset reduced_motion  OR  user prefer_reduced_motion  ──>  reduced_motion

The overlay values win over the preset's own filter values.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from retint.exceptions import CatalogInvalidError, ThemeNotFoundError
from retint.models import ColorBlindnessMode, ThemeFilters, ThemeProfile, UserSettings

from .schema import ThemeCatalogSchema

logger = logging.getLogger(__name__)

COLOR_BLINDNESS_FILTERS: dict[ColorBlindnessMode, ThemeFilters | None] = {
    ColorBlindnessMode.NONE: None,
    ColorBlindnessMode.PROTANOPIA: ThemeFilters(hue_rotate=10, saturate=0.9, contrast=1.05),
    ColorBlindnessMode.DEUTERANOPIA: ThemeFilters(hue_rotate=-10, saturate=0.9, contrast=1.05),
    ColorBlindnessMode.TRITANOPIA: ThemeFilters(hue_rotate=35, saturate=0.85, contrast=1.05),
}


class ThemeCatalog:
    """
    Preset theme profiles, by id.

    Loads the catalog from JSON using Pydantic validation. Profiles are
    immutable and kept in file order.
    """

    def __init__(self, catalog_path: Path | None = None):
        """
        Initialize the catalog.

        Args:
            catalog_path: Path to a themes.json file.
                          If None, uses the bundled catalog.

        Raises:
            CatalogInvalidError: If the file is missing, unreadable or invalid
        """
        if catalog_path is None:
            catalog_path = Path(__file__).parent / "themes.json"

        self.catalog_path = catalog_path
        self.schema = self._load_schema()
        self._profiles: dict[str, ThemeProfile] = {p.id: p for p in self.schema.themes}
        logger.info(f"Loaded {len(self._profiles)} theme profiles from {catalog_path}")

    def _load_schema(self) -> ThemeCatalogSchema:
        try:
            return ThemeCatalogSchema.from_json_file(self.catalog_path)
        except OSError as e:
            raise CatalogInvalidError(str(self.catalog_path), str(e)) from e
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            raise CatalogInvalidError(
                str(self.catalog_path), f"{location}: {first['msg']}"
            ) from e

    @property
    def ids(self) -> list[str]:
        return list(self._profiles)

    @property
    def profiles(self) -> list[ThemeProfile]:
        return list(self._profiles.values())

    def find(self, theme_id: str) -> ThemeProfile | None:
        """Look up a profile, None when unknown."""
        return self._profiles.get(theme_id)

    def get(self, theme_id: str) -> ThemeProfile:
        """
        Look up a profile.

        Raises:
            ThemeNotFoundError: If theme_id is not in the catalog
        """
        profile = self._profiles.get(theme_id)
        if profile is None:
            raise ThemeNotFoundError(theme_id, self.ids)
        return profile

    def resolve_profile(self, theme_id: str, settings: UserSettings) -> ThemeProfile:
        """
        Resolve a preset for a user.

        The user's color-blindness overlay is merged over the preset
        filters and reduced motion is on if either the user or the preset
        asks for it.

        Raises:
            ThemeNotFoundError: If theme_id is not in the catalog
        """
        return resolve_profile(self.get(theme_id), settings)

    def __contains__(self, theme_id: str) -> bool:
        return theme_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


def resolve_profile(base: ThemeProfile, settings: UserSettings) -> ThemeProfile:
    """Overlay a user's color-blindness filters and reduced-motion preference on a profile."""
    overlay = COLOR_BLINDNESS_FILTERS.get(settings.color_blindness)
    filters = (base.filters or ThemeFilters()).merged(overlay)

    return base.model_copy(
        update={
            "filters": filters,
            "reduced_motion": settings.prefer_reduced_motion or base.reduced_motion,
        }
    )


# Singleton instance
_catalog: ThemeCatalog | None = None


def get_catalog() -> ThemeCatalog:
    """Get singleton ThemeCatalog instance (bundled catalog)."""
    global _catalog
    if _catalog is None:
        _catalog = ThemeCatalog()
    return _catalog
