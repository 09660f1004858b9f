"""Site preference, user settings and detection models.

These records are produced by external collaborators (settings storage,
page luminance sampling). The engine only reads them to decide whether and
which theme to apply.
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import ColorBlindnessMode, SiteTendency

SYSTEM_AUTO = "system-auto"


class LuminanceSample(BaseModel):
    """One sampled element from page detection."""

    selector: str
    background: str
    color: str
    luminance: float = Field(ge=0, le=1)


class FrameworkDetection(BaseModel):
    """CSS frameworks spotted on the page."""

    tailwind: bool = False
    bootstrap: bool = False
    css_variables: bool = Field(default=False, alias="cssVariables")

    model_config = ConfigDict(populate_by_name=True)


class DetectionResult(BaseModel):
    """Page luminance classification, consumed only as an apply/skip signal."""

    model_config = ConfigDict(populate_by_name=True)

    average_luminance: float = Field(alias="averageLuminance", ge=0, le=1)
    tendency: SiteTendency
    samples: list[LuminanceSample] = Field(default_factory=list)
    frameworks: FrameworkDetection = Field(default_factory=FrameworkDetection)


class SitePreference(BaseModel):
    """Per-site configuration."""

    model_config = ConfigDict(populate_by_name=True)

    enforced_theme: str | None = Field(default=None, alias="enforcedTheme")
    is_excluded: bool = Field(default=False, alias="isExcluded")
    advanced_dynamic: bool = Field(
        default=False,
        alias="advancedDynamic",
        description="Enable whole-document inline style observation (expensive)",
    )
    last_detection: DetectionResult | None = Field(default=None, alias="lastDetection")


class UserSettings(BaseModel):
    """User-level theme settings."""

    model_config = ConfigDict(populate_by_name=True)

    global_theme: str | None = Field(
        default=SYSTEM_AUTO,
        alias="globalTheme",
        description="Theme id, 'system-auto', or None to disable",
    )
    color_blindness: ColorBlindnessMode = Field(
        default=ColorBlindnessMode.NONE, alias="colorBlindness"
    )
    prefer_reduced_motion: bool = Field(default=False, alias="preferReducedMotion")
    enable_auto_detect: bool = Field(default=True, alias="enableAutoDetect")
    per_site: dict[str, SitePreference] = Field(default_factory=dict, alias="perSite")

    def site(self, domain: str) -> SitePreference | None:
        """Get the preference record for a domain, if any."""
        return self.per_site.get(domain)
