"""Tests for stylesheet rewriting and contrast repair."""

import logging
import re
from unittest.mock import patch

import pytest

from retint.colors import parse_color, rgb_to_hsl
from retint.css import (
    adjust_for_contrast,
    contrast_ratio,
    get_color_role,
    is_color_property,
    is_screen_media,
    iter_contrast_adjustments,
    parse_stylesheet,
    process_declaration,
    process_stylesheet,
    relative_luminance,
    split_value_tokens,
)
from retint.css.cssom import CSSStyleRule, StyleDeclaration
from retint.css.processor import process_rule
from retint.models import RGBA, ColorRole, ThemePalette, ThemeProfile
from retint.transform import transform_css_color

DECLARATION_RE = re.compile(r"([\w-]+): ([^;]+?)(?: !important)?(?:;|\s*})")


def rule(css: str, selector: str = "a") -> CSSStyleRule:
    return CSSStyleRule(selector, StyleDeclaration.parse(css))


def declarations(override: str) -> dict[str, str]:
    return dict(DECLARATION_RE.findall(override))


@pytest.mark.unit
class TestContrast:
    """Test WCAG contrast measurement and repair."""

    def test_luminance_extremes(self):
        assert relative_luminance(RGBA(r=0, g=0, b=0)) == 0
        assert relative_luminance(RGBA(r=255, g=255, b=255)) == pytest.approx(1)

    def test_ratio_is_symmetric(self):
        black, white = RGBA(r=0, g=0, b=0), RGBA(r=255, g=255, b=255)
        assert contrast_ratio(black, white) == pytest.approx(21)
        assert contrast_ratio(white, black) == pytest.approx(21)

    def test_dark_gray_on_black_is_repaired(self):
        text = parse_color("#222")
        background = parse_color("#000")
        assert contrast_ratio(text, background) < 4.5

        adjusted = adjust_for_contrast(text, background, 4.5)
        assert contrast_ratio(adjusted, background) >= 4.5
        assert adjusted.r > text.r

    def test_steps_never_lower_contrast_on_dark(self):
        background = parse_color("#000")
        ratios = [
            contrast_ratio(candidate, background)
            for candidate in iter_contrast_adjustments(parse_color("#222"), background)
        ]
        assert ratios == sorted(ratios)

    def test_light_background_darkens_text(self):
        adjusted = adjust_for_contrast(parse_color("#ddd"), parse_color("#fff"), 4.5)
        assert adjusted.r < 0xDD

    def test_already_sufficient_is_unchanged(self):
        text = parse_color("#fff")
        assert adjust_for_contrast(text, parse_color("#000")) is text

    def test_channels_saturate(self):
        candidates = list(
            iter_contrast_adjustments(parse_color("#f0f0f0"), parse_color("#000"), max_iterations=3)
        )
        assert candidates[-1].to_rgb_tuple() == (255, 255, 255)


@pytest.mark.unit
class TestClassification:
    """Test property and media classification."""

    def test_color_properties(self):
        assert is_color_property("color")
        assert is_color_property("border-top-color")
        assert is_color_property("fill")
        assert is_color_property("stop-color")
        assert not is_color_property("-webkit-print-color-adjust")
        assert not is_color_property("margin")

    def test_roles(self):
        assert get_color_role("background-color", rule("")) is ColorRole.BACKGROUND
        assert get_color_role("border-color", rule("")) is ColorRole.BORDER
        assert get_color_role("outline-color", rule("")) is ColorRole.BORDER
        assert get_color_role("fill", rule("")) is ColorRole.TEXT

    def test_masked_background_is_text(self):
        masked = rule("background-color: #000; -webkit-mask-image: url(icon.svg)")
        unmasked = rule("background-color: #000; mask-image: none")

        assert get_color_role("background-color", masked) is ColorRole.TEXT
        assert get_color_role("background-color", unmasked) is ColorRole.BACKGROUND

    def test_screen_media(self):
        assert is_screen_media([])
        assert is_screen_media(["screen"])
        assert is_screen_media(["all and (min-width: 10px)"])
        assert is_screen_media(["(prefers-color-scheme: light)"])
        assert not is_screen_media(["print"])
        assert not is_screen_media(["print", "screen"])
        assert not is_screen_media(["speech"])

    def test_split_value_tokens_respects_parentheses(self):
        assert split_value_tokens("0 1px  rgba(0, 0, 0, 0.5)") == ["0", "1px", "rgba(0, 0, 0, 0.5)"]


@pytest.mark.unit
class TestProcessDeclaration:
    """Test per-declaration rewriting."""

    def test_plain_color(self, dark_theme, context):
        result = process_declaration("color", "#000", rule(""), dark_theme, context)
        assert result == transform_css_color("#000", ColorRole.TEXT, dark_theme, context=context)

    @pytest.mark.parametrize("value", ["inherit", "transparent", "currentColor", "none"])
    def test_keywords_are_left_alone(self, dark_theme, context, value):
        assert process_declaration("color", value, rule(""), dark_theme, context) is None

    def test_non_color_property(self, dark_theme, context):
        assert process_declaration("margin", "0", rule(""), dark_theme, context) is None

    def test_color_scheme_is_forced_dark(self, dark_theme, context):
        assert process_declaration("color-scheme", "light", rule(""), dark_theme, context) == "dark"

    def test_scrollbar_color(self, dark_theme, context):
        result = process_declaration("scrollbar-color", "#888 #fff", rule(""), dark_theme, context)
        thumb = transform_css_color("#888", ColorRole.TEXT, dark_theme, context=context)
        track = transform_css_color("#fff", ColorRole.BACKGROUND, dark_theme, context=context)

        assert result == f"{thumb} {track}"
        assert process_declaration("scrollbar-color", "auto", rule(""), dark_theme, context) is None
        assert process_declaration("scrollbar-color", "#888", rule(""), dark_theme, context) is None

    def test_shadow_keeps_offsets(self, dark_theme, context):
        result = process_declaration(
            "box-shadow", "0 1px 2px rgba(0, 0, 0, 0.5)", rule(""), dark_theme, context
        )
        shadow = transform_css_color("rgba(0, 0, 0, 0.5)", ColorRole.BACKGROUND, dark_theme, context=context)

        assert result == f"0 1px 2px {shadow}"
        assert process_declaration("text-shadow", "none", rule(""), dark_theme, context) is None

    def test_images_are_never_rewritten(self, dark_theme, context):
        assert (
            process_declaration("background-image", "linear-gradient(#fff, #000)", rule(""), dark_theme, context)
            is None
        )

    def test_shorthands_replace_color_token(self, dark_theme, context):
        border = process_declaration("border", "1px solid #ccc", rule(""), dark_theme, context)
        expected = transform_css_color("#ccc", ColorRole.BORDER, dark_theme, context=context)
        assert border == f"1px solid {expected}"

        background = process_declaration("background", "white url(x.png) no-repeat", rule(""), dark_theme, context)
        assert background.startswith(transform_css_color("white", ColorRole.BACKGROUND, dark_theme, context=context))

        assert process_declaration("background", "url(x.png)", rule(""), dark_theme, context) is None
        assert process_declaration("border", "0", rule(""), dark_theme, context) is None

    def test_masked_background_shorthand_uses_text_role(self, dark_theme, context):
        masked = rule("background: #000; mask: url(icon.svg)")
        result = process_declaration("background", "#000", masked, dark_theme, context)
        assert result == transform_css_color("#000", ColorRole.TEXT, dark_theme, context=context)


@pytest.mark.unit
class TestProcessStylesheet:
    """Test whole-sheet rewriting."""

    def test_body_rule_under_dark(self, dark_theme, context):
        sheet = parse_stylesheet("body { background-color: #ffffff; color: #000000; }")
        override = process_stylesheet(sheet, dark_theme, context)

        assert override.startswith("body {")
        values = declarations(override)
        background = parse_color(values["background-color"])
        text = parse_color(values["color"])

        assert values["background-color"] != "#ffffff"
        assert values["color"] != "#000000"
        assert rgb_to_hsl(background).l <= 0.4
        assert rgb_to_hsl(text).l >= 0.55
        assert contrast_ratio(text, background) >= 4.5

    def test_unchanged_rules_are_not_emitted(self, dark_theme, context):
        sheet = parse_stylesheet("a { margin: 0 } b { color: inherit }")
        assert process_stylesheet(sheet, dark_theme, context) == ""

    def test_importance_is_kept(self, dark_theme, context):
        sheet = parse_stylesheet("a { color: red !important; background: blue }")
        override = process_stylesheet(sheet, dark_theme, context)

        assert re.search(r"color: #[0-9a-f]+ !important", override)
        assert re.search(r"background: #[0-9a-f]+(;| })", override)

    def test_rules_in_applicable_groups_are_flattened(self, dark_theme, context):
        sheet = parse_stylesheet(
            "@media screen { .m { color: #000 } }"
            "@media print { .p { color: #000 } }"
            "@media { .bare { color: #000 } }"
            "@supports (display: grid) { .s { color: #000 } }"
            "@supports (made-up: 1) { .u { color: #000 } }"
            "@layer base { .l { color: #000 } }"
            "@container (min-width: 1px) { .c { color: #000 } }"
            "@keyframes k { from { color: #000 } }"
        )
        override = process_stylesheet(sheet, dark_theme, context)
        selectors = [line.split(" {")[0] for line in override.splitlines()]

        assert selectors == [".m", ".bare", ".s", ".l", ".c"]
        assert "@" not in override

    def test_injected_supports_evaluator(self, dark_theme, context):
        sheet = parse_stylesheet("@supports (display: grid) { .s { color: #000 } }")
        assert process_stylesheet(sheet, dark_theme, context, supports=lambda condition: False) == ""

    def test_cross_origin_sheet_is_skipped(self, dark_theme, context):
        sheet = parse_stylesheet("a { color: #000 }", href="https://cdn.example/a.css", cross_origin=True)
        assert process_stylesheet(sheet, dark_theme, context) == ""

    def test_missing_sheet(self, dark_theme, context):
        assert process_stylesheet(None, dark_theme, context) == ""

    def test_malformed_colors_leave_other_rules_alone(self, dark_theme, context):
        sheet = parse_stylesheet(
            "a { color: #-1ffff } i { color: hsl(1e999 50% 50%) } body { background-color: #fff }"
        )
        override = process_stylesheet(sheet, dark_theme, context)

        assert override.startswith("body {")
        assert len(override.splitlines()) == 1

    def test_failing_rule_is_skipped(self, dark_theme, context, caplog):
        def fail_on_links(rule, *args):
            if rule.selector_text == "a":
                raise ValueError("broken rule")
            return process_rule(rule, *args)

        sheet = parse_stylesheet("a { color: #000 } p { color: #000 }")

        with (
            patch("retint.css.processor.process_rule", side_effect=fail_on_links),
            caplog.at_level(logging.DEBUG, logger="retint.exceptions.handlers"),
        ):
            override = process_stylesheet(sheet, dark_theme, context)

        assert override.startswith("p {")
        assert "a {" not in override
        assert "Skipped rule 'a': ValueError: broken rule" in caplog.text

    def test_contrast_is_repaired(self, context):
        theme = ThemeProfile(
            id="dark",
            palette=ThemePalette(background="#181a1b", text="#777777", surface="#1c1e1f", accent="#60a5fa"),
            minimum_contrast=4.5,
        )
        sheet = parse_stylesheet("p { background-color: #fff; color: #000 }")
        values = declarations(process_stylesheet(sheet, theme, context))

        unrepaired = transform_css_color("#000", ColorRole.TEXT, theme, context=context)
        background = parse_color(values["background-color"])
        text = parse_color(values["color"])

        assert contrast_ratio(parse_color(unrepaired), background) < 4.5
        assert values["color"] != unrepaired
        assert contrast_ratio(text, background) >= 4.5
