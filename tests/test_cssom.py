"""Tests for the CSS object model and @supports evaluation."""

import pytest

from retint.css import (
    CSSAtRule,
    CSSKeyframesRule,
    CSSMediaRule,
    CSSStyleRule,
    CSSSupportsRule,
    StyleDeclaration,
    evaluate_supports,
    parse_stylesheet,
)
from retint.exceptions import SecurityError


@pytest.mark.unit
class TestStyleDeclaration:
    """Test declaration blocks."""

    def test_parse_keeps_order_and_priority(self):
        style = StyleDeclaration.parse("color: red; Margin: 0 !important; background: #fff")

        assert list(style) == ["color", "margin", "background"]
        assert style.get_property_priority("margin") == "important"
        assert style.get_property_value("MARGIN") == "0"

    def test_set_replaces_in_place(self):
        style = StyleDeclaration.parse("color: red; margin: 0")
        style.set_property("color", "blue", "important")

        assert style.css_text == "color: blue !important; margin: 0;"

    def test_empty_value_removes(self):
        style = StyleDeclaration.parse("color: red")
        style.set_property("color", "")

        assert "color" not in style
        assert len(style) == 0

    def test_invalid_declarations_are_skipped(self):
        style = StyleDeclaration.parse("color red; background: blue")
        assert list(style) == ["background"]


@pytest.mark.unit
class TestParseStylesheet:
    """Test rule tree construction."""

    def test_style_rules(self):
        sheet = parse_stylesheet("body { color: #000 } .a, .b { background: white }")
        rules = sheet.css_rules

        assert [type(r) for r in rules] == [CSSStyleRule, CSSStyleRule]
        assert rules[1].selector_text == ".a, .b"
        assert rules[1].style.get_property_value("background") == "white"

    def test_grouping_rules_have_children(self):
        sheet = parse_stylesheet(
            "@media screen and (min-width: 10px) { a { color: red } }"
            "@supports (display: grid) { b { color: blue } }"
        )
        media, supports = sheet.css_rules

        assert isinstance(media, CSSMediaRule)
        assert media.media == ["screen and (min-width: 10px)"]
        assert media.css_rules[0].parent_rule is media

        assert isinstance(supports, CSSSupportsRule)
        assert supports.condition_text == "(display: grid)"

    def test_keyframes_and_descriptors_are_opaque(self):
        sheet = parse_stylesheet(
            "@keyframes spin { from { color: red } to { color: blue } }"
            "@font-face { font-family: x; src: url(x.woff) }"
            "@import url(other.css);"
        )
        keyframes, font_face, import_rule = sheet.css_rules

        assert isinstance(keyframes, CSSKeyframesRule)
        assert keyframes.name == "spin"
        assert isinstance(font_face, CSSAtRule)
        assert import_rule.at_keyword == "import"

    def test_comments_are_ignored(self):
        sheet = parse_stylesheet("/* top */ a { /* inner */ color: red }")
        assert sheet.css_rules[0].style.get_property_value("color") == "red"

    def test_cross_origin_rules_are_refused(self):
        sheet = parse_stylesheet("a { color: red }", href="https://cdn.example/x.css", cross_origin=True)

        with pytest.raises(SecurityError):
            sheet.css_rules


@pytest.mark.unit
class TestSupports:
    """Test @supports condition evaluation."""

    def test_known_property(self):
        assert evaluate_supports("(display: grid)")
        assert not evaluate_supports("(made-up-property: 1)")

    def test_custom_properties_are_supported(self):
        assert evaluate_supports("(--brand: red)")

    def test_not_and_or(self):
        assert evaluate_supports("not (made-up: 1)")
        assert evaluate_supports("(display: grid) and (color: red)")
        assert not evaluate_supports("(display: grid) and (made-up: 1)")
        assert evaluate_supports("(made-up: 1) or (color: red)")

    def test_nested_conditions(self):
        assert evaluate_supports("((display: grid) or (made-up: 1)) and (not (made-up: 2))")

    def test_selector_function(self):
        assert evaluate_supports("selector(:has(a))")
        assert not evaluate_supports("selector()")

    def test_mixed_operators_are_invalid(self):
        assert not evaluate_supports("(color: red) and (display: grid) or (gap: 1px)")

    def test_garbage_is_unsupported(self):
        assert not evaluate_supports("")
        assert not evaluate_supports("display: grid")
        assert not evaluate_supports("not")
