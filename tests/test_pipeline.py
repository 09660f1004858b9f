"""Tests for the theme decision pipeline."""

from unittest.mock import Mock

import pytest

from retint.core import DynamicThemeEngine
from retint.models import DetectionResult, SitePreference, SiteTendency, UserSettings
from retint.orchestration import PipelineDecision, ThemePipeline, resolve_desired_theme, should_apply

DOMAIN = "example.com"


def detection(tendency: SiteTendency) -> DetectionResult:
    luminance = {SiteTendency.DARK: 0.1, SiteTendency.LIGHT: 0.9, SiteTendency.MIXED: 0.5}[tendency]
    return DetectionResult(average_luminance=luminance, tendency=tendency)


def settings_for(site: SitePreference | None = None, **kwargs) -> UserSettings:
    per_site = {DOMAIN: site} if site else {}
    return UserSettings(per_site=per_site, **kwargs)


@pytest.mark.unit
class TestResolveDesiredTheme:
    """Test theme priority for a domain."""

    def test_enforced_theme_beats_global(self):
        settings = settings_for(SitePreference(enforced_theme="night-warm"), global_theme="dark")
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=False) == "night-warm"

    def test_global_theme(self):
        settings = settings_for(global_theme="high-contrast")
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=False) == "high-contrast"

    def test_site_without_enforced_theme_uses_global(self):
        settings = settings_for(SitePreference(advanced_dynamic=True), global_theme="light")
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=True) == "light"

    def test_system_auto(self):
        settings = settings_for()
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=True) == "dark"
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=False) == "light"

    def test_enforced_system_auto(self):
        settings = settings_for(SitePreference(enforced_theme="system-auto"), global_theme=None)
        assert resolve_desired_theme(settings, DOMAIN, prefers_dark=True) == "dark"

    def test_no_theme(self):
        assert resolve_desired_theme(settings_for(global_theme=None), DOMAIN, True) is None
        assert resolve_desired_theme(settings_for(global_theme=""), DOMAIN, True) is None


@pytest.mark.unit
class TestShouldApply:
    """Test the apply/skip decision."""

    def test_excluded_site(self):
        settings = settings_for(SitePreference(is_excluded=True, enforced_theme="dark"))
        assert should_apply("dark", None, settings, DOMAIN) is PipelineDecision.EXCLUDED

    def test_dark_page_skips_dark_theme(self):
        decision = should_apply("dark", detection(SiteTendency.DARK), settings_for(), DOMAIN)
        assert decision is PipelineDecision.ALREADY_MATCHES

    def test_light_page_skips_light_theme(self):
        decision = should_apply("light", detection(SiteTendency.LIGHT), settings_for(), DOMAIN)
        assert decision is PipelineDecision.ALREADY_MATCHES

    @pytest.mark.parametrize(
        "theme_id,tendency",
        [
            ("dark", SiteTendency.LIGHT),
            ("dark", SiteTendency.MIXED),
            ("light", SiteTendency.DARK),
            ("night-warm", SiteTendency.DARK),
        ],
    )
    def test_other_combinations_apply(self, theme_id, tendency):
        decision = should_apply(theme_id, detection(tendency), settings_for(), DOMAIN)
        assert decision is PipelineDecision.APPLIED

    def test_enforced_theme_ignores_detection(self):
        settings = settings_for(SitePreference(enforced_theme="dark"))
        decision = should_apply("dark", detection(SiteTendency.DARK), settings, DOMAIN)
        assert decision is PipelineDecision.APPLIED

    def test_auto_detect_off_ignores_detection(self):
        settings = settings_for(enable_auto_detect=False)
        decision = should_apply("dark", detection(SiteTendency.DARK), settings, DOMAIN)
        assert decision is PipelineDecision.APPLIED

    def test_no_detection_applies(self):
        assert should_apply("dark", None, settings_for(), DOMAIN) is PipelineDecision.APPLIED


@pytest.mark.unit
class TestThemePipeline:
    """Test pipeline runs against a mocked engine."""

    @pytest.fixture
    def engine(self):
        return Mock(spec=DynamicThemeEngine)

    @pytest.fixture
    def pipeline(self, engine, catalog):
        return ThemePipeline(engine, catalog)

    def test_applies_resolved_profile(self, pipeline, engine):
        settings = settings_for(global_theme="dark", prefer_reduced_motion=True)

        result = pipeline.run(DOMAIN, settings)

        assert result.applied
        assert result.theme_id == "dark"
        assert result.profile.reduced_motion
        assert not result.inline_observation
        engine.clear.assert_called_once()
        engine.update_theme.assert_called_once_with(result.profile, enable_inline_observation=False)

    def test_clears_before_deciding(self, pipeline, engine):
        result = pipeline.run(DOMAIN, settings_for(global_theme=None))

        assert result.decision is PipelineDecision.NO_THEME
        engine.clear.assert_called_once()
        engine.update_theme.assert_not_called()

    def test_advanced_dynamic_enables_inline_observation(self, pipeline, engine):
        settings = settings_for(SitePreference(enforced_theme="dark", advanced_dynamic=True))

        result = pipeline.run(DOMAIN, settings)

        assert result.inline_observation
        engine.update_theme.assert_called_once_with(result.profile, enable_inline_observation=True)

    def test_skips_matching_page(self, pipeline, engine):
        result = pipeline.run(
            DOMAIN, settings_for(global_theme="dark"), detection=detection(SiteTendency.DARK)
        )

        assert result.decision is PipelineDecision.ALREADY_MATCHES
        assert result.theme_id == "dark"
        engine.update_theme.assert_not_called()

    def test_excluded_site(self, pipeline, engine):
        result = pipeline.run(DOMAIN, settings_for(SitePreference(is_excluded=True)))

        assert result.decision is PipelineDecision.EXCLUDED
        engine.update_theme.assert_not_called()

    def test_auto_detect_off(self, pipeline, engine):
        settings = settings_for(global_theme="dark", enable_auto_detect=False)

        result = pipeline.run(DOMAIN, settings, detection=detection(SiteTendency.DARK))

        assert result.applied

    def test_unknown_theme(self, pipeline, engine):
        result = pipeline.run(DOMAIN, settings_for(global_theme="sepia"))

        assert result.decision is PipelineDecision.UNKNOWN_THEME
        assert result.theme_id == "sepia"
        engine.update_theme.assert_not_called()

    def test_system_auto_follows_host_preference(self, pipeline):
        assert pipeline.run(DOMAIN, settings_for(), prefers_dark=True).theme_id == "dark"
        assert pipeline.run(DOMAIN, settings_for(), prefers_dark=False).theme_id == "light"

    def test_color_blindness_overlay(self, pipeline):
        settings = settings_for(global_theme="dark", color_blindness="deuteranopia")
        result = pipeline.run(DOMAIN, settings)
        assert result.profile.filters.hue_rotate == -10


@pytest.mark.integration
class TestPipelineWithEngine:
    """Run the pipeline against a real engine and document."""

    def test_switching_sites(self, document, context, catalog):
        engine = DynamicThemeEngine(document, context=context)
        pipeline = ThemePipeline(engine, catalog)

        pipeline.run(DOMAIN, settings_for(global_theme="dark"))
        assert engine.theme.id == "dark"
        assert engine.base_style is not None

        pipeline.run(DOMAIN, settings_for(SitePreference(is_excluded=True), global_theme="dark"))
        assert engine.theme is None
        assert engine.base_style is None
        assert engine.head_observer_attached

        engine.destroy()
