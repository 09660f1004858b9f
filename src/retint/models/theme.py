"""Theme profile models."""

from pydantic import BaseModel, ConfigDict, Field

from .color import HSLA


class ThemeFilters(BaseModel):
    """Optional perceptual filters applied on top of the role remap.

    Multipliers use 1 as neutral; blends (sepia, grayscale, invert) use 0.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    brightness: float | None = Field(default=None, gt=0, description="Brightness multiplier")
    contrast: float | None = Field(default=None, gt=0, description="Contrast multiplier")
    hue_rotate: float | None = Field(
        default=None, alias="hueRotate", description="Hue rotation in degrees"
    )
    saturate: float | None = Field(default=None, ge=0, description="Saturation multiplier")
    sepia: float | None = Field(default=None, ge=0, le=1, description="Sepia blend (0-1)")
    grayscale: float | None = Field(default=None, ge=0, le=1, description="Grayscale blend (0-1)")
    invert: float | None = Field(default=None, ge=0, le=1, description="Invert blend (0-1)")

    @property
    def cache_key(self) -> tuple[float | None, ...]:
        """All filter values, for use in cache keys."""
        return (
            self.brightness,
            self.contrast,
            self.hue_rotate,
            self.saturate,
            self.sepia,
            self.grayscale,
            self.invert,
        )

    def merged(self, overlay: "ThemeFilters | None") -> "ThemeFilters":
        """Return these filters with every value set in ``overlay`` taking precedence."""
        if overlay is None:
            return self
        return self.model_copy(update=overlay.model_dump(exclude_none=True))


class ThemePalette(BaseModel):
    """Reference colors of a theme, as CSS color strings."""

    model_config = ConfigDict(frozen=True)

    background: str
    text: str
    surface: str
    accent: str


class ThemeProfile(BaseModel):
    """An immutable theme definition.

    Profiles come from the theme catalog and may be overlaid with a
    color-blindness filter set and a reduced-motion flag when resolved
    for a user.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Stable theme id (e.g. 'dark')")
    label: str = Field(default="", description="Human-readable name")
    description: str = Field(default="", description="Short description")
    palette: ThemePalette
    filters: ThemeFilters | None = None
    reduced_motion: bool = Field(default=False, alias="reducedMotion")
    minimum_contrast: float | None = Field(
        default=None, gt=1, alias="minimumContrast", description="WCAG contrast ratio target"
    )


class ColorPoles(BaseModel):
    """HSL references derived from a theme palette.

    Neutral source colors take their hue and saturation from these poles.
    """

    model_config = ConfigDict(frozen=True)

    background: HSLA
    text: HSLA
    surface: HSLA
