"""
Theme pipeline for deciding whether, and which, theme a site gets.

Runs on page load and whenever settings change. The pipeline only
decides; applying is the engine's job.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from retint.catalog import ThemeCatalog, get_catalog
from retint.core import DynamicThemeEngine
from retint.models import SYSTEM_AUTO, DetectionResult, SiteTendency, ThemeProfile, UserSettings

logger = logging.getLogger(__name__)


class PipelineDecision(Enum):
    """Outcome of one pipeline run."""

    APPLIED = "applied"
    NO_THEME = "no_theme"            # No theme configured for the site
    EXCLUDED = "excluded"            # Site is excluded
    ALREADY_MATCHES = "already_matches"  # Detection says the page already looks like the theme
    UNKNOWN_THEME = "unknown_theme"  # Configured theme id is not in the catalog


@dataclass
class PipelineResult:
    """What a pipeline run decided and applied."""

    domain: str
    decision: PipelineDecision
    theme_id: str | None = None
    profile: ThemeProfile | None = None
    inline_observation: bool = False

    @property
    def applied(self) -> bool:
        return self.decision is PipelineDecision.APPLIED


def resolve_desired_theme(settings: UserSettings, domain: str, prefers_dark: bool) -> str | None:
    """
    Pick the theme id for a domain.

    Priority:
    1. Per-site enforced theme (highest)
    2. Global theme setting
    3. "system-auto" resolves to dark or light from the host preference
    4. None (no theme)
    """
    site = settings.site(domain)
    theme = (site.enforced_theme if site else None) or settings.global_theme

    if theme == SYSTEM_AUTO:
        theme = "dark" if prefers_dark else "light"

    return theme or None


def should_apply(
    theme_id: str, detection: DetectionResult | None, settings: UserSettings, domain: str
) -> PipelineDecision:
    """
    Decide whether applying theme_id is needed.

    Enforced themes always apply; so does every theme when auto-detect is
    off or there is no detection. Otherwise a dark theme on a dark page,
    or a light theme on a light page, is skipped.
    """
    site = settings.site(domain)
    if site is not None and site.is_excluded:
        return PipelineDecision.EXCLUDED
    if site is not None and site.enforced_theme:
        return PipelineDecision.APPLIED
    if not settings.enable_auto_detect or detection is None:
        return PipelineDecision.APPLIED

    if theme_id == "dark" and detection.tendency is SiteTendency.DARK:
        return PipelineDecision.ALREADY_MATCHES
    if theme_id == "light" and detection.tendency is SiteTendency.LIGHT:
        return PipelineDecision.ALREADY_MATCHES

    return PipelineDecision.APPLIED


class ThemePipeline:
    """
    Drives a DynamicThemeEngine from user settings.

    Flow of run():
        1. Clear the engine, so detection and re-application start from
           the page's own colors
        2. Resolve the desired theme for the domain
        3. Check whether applying it is needed
        4. Resolve the profile (color-blindness overlay, reduced motion)
        5. update_theme(), with inline observation iff the site asks for
           advanced dynamic mode
    """

    def __init__(self, engine: DynamicThemeEngine, catalog: ThemeCatalog | None = None):
        self.engine = engine
        self.catalog = catalog or get_catalog()

    def run(
        self,
        domain: str,
        settings: UserSettings,
        detection: DetectionResult | None = None,
        prefers_dark: bool = False,
    ) -> PipelineResult:
        """
        Run the pipeline for one page.

        Args:
            domain: Host name of the page
            settings: Current user settings
            detection: Page tendency measured on the cleared page, if any
            prefers_dark: Host's dark color-scheme preference (for "system-auto")

        Returns:
            PipelineResult describing the decision
        """
        logger.info(f"Running theme pipeline for {domain}")
        self.engine.clear()

        if not settings.enable_auto_detect:
            detection = None

        theme_id = resolve_desired_theme(settings, domain, prefers_dark)
        if theme_id is None:
            logger.debug(f"No theme configured for {domain}")
            return PipelineResult(domain, PipelineDecision.NO_THEME)

        decision = should_apply(theme_id, detection, settings, domain)
        if decision is not PipelineDecision.APPLIED:
            logger.info(f"Not theming {domain}: {decision.value}")
            return PipelineResult(domain, decision, theme_id=theme_id)

        base = self.catalog.find(theme_id)
        if base is None:
            logger.warning(f"Theme {theme_id!r} configured for {domain} is not in the catalog")
            return PipelineResult(domain, PipelineDecision.UNKNOWN_THEME, theme_id=theme_id)

        profile = self.catalog.resolve_profile(theme_id, settings)
        site = settings.site(domain)
        inline_observation = bool(site and site.advanced_dynamic)

        self.engine.update_theme(profile, enable_inline_observation=inline_observation)
        return PipelineResult(
            domain,
            PipelineDecision.APPLIED,
            theme_id=theme_id,
            profile=profile,
            inline_observation=inline_observation,
        )
