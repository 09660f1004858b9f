"""Tests for color parsing, conversion and serialization."""

import pytest

from retint.colors import (
    clear_parse_cache,
    hsl_to_rgb,
    hsl_to_string,
    parse_cache_size,
    parse_color,
    parse_hex,
    parse_hsl,
    parse_rgb,
    parse_to_hsl,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_string,
    round_half_up,
    scale,
)
from retint.models import HSLA, RGBA


@pytest.mark.unit
class TestParsing:
    """Test parsing of every supported color syntax."""

    def test_short_hex(self):
        assert parse_color("#fff") == RGBA(r=255, g=255, b=255)

    def test_hex_with_alpha(self):
        color = parse_hex("#ff000080")
        assert color.to_rgb_tuple() == (255, 0, 0)
        assert color.a == pytest.approx(128 / 255)

        assert parse_hex("#0000").a == 0

    def test_hex_rejects_bad_lengths_and_digits(self):
        assert parse_hex("#12345") is None
        assert parse_hex("#ggg") is None

    @pytest.mark.parametrize("value", ["#-1ffff", "#+fff", "#ff_f", "#-f", "# fff"])
    def test_hex_rejects_signs_and_separators(self, value):
        assert parse_color(value) is None

    def test_rgb_comma_and_space_syntax(self):
        assert parse_rgb("rgb(255, 0, 0)") == RGBA(r=255, g=0, b=0)
        assert parse_rgb("rgb(255 0 0 / 50%)") == RGBA(r=255, g=0, b=0, a=0.5)
        assert parse_rgb("rgba(0, 0, 255, 0.25)") == RGBA(r=0, g=0, b=255, a=0.25)

    def test_rgb_percentage_channels(self):
        assert parse_rgb("rgb(100%, 0%, 0%)") == RGBA(r=255, g=0, b=0)

    def test_rgb_clamps_out_of_range_channels(self):
        assert parse_rgb("rgb(300, -5, 0)") == RGBA(r=255, g=0, b=0)

    def test_rgb_needs_three_channels(self):
        assert parse_rgb("rgb(1, 2)") is None

    def test_hsl(self):
        assert parse_hsl("hsl(120, 100%, 50%)") == RGBA(r=0, g=255, b=0)
        assert parse_hsl("hsla(0, 100%, 50%, 0.5)") == RGBA(r=255, g=0, b=0, a=0.5)

    def test_hsl_hue_units(self):
        assert parse_hsl("hsl(0.5turn 100% 50%)") == RGBA(r=0, g=255, b=255)
        assert parse_hsl("hsl(200grad 100% 50%)") == RGBA(r=0, g=255, b=255)

    def test_named_colors_are_case_insensitive(self):
        assert parse_color("RED") == RGBA(r=255, g=0, b=0)
        assert parse_color("  rebeccapurple ") == RGBA(r=0x66, g=0x33, b=0x99)

    @pytest.mark.parametrize(
        "keyword", ["inherit", "transparent", "initial", "currentColor", "none", "unset", "auto"]
    )
    def test_keywords_never_parse(self, keyword):
        assert parse_color(keyword) is None

    def test_transparent_when_allowed(self):
        assert parse_color("transparent", allow_transparent=True) == RGBA.transparent()

    def test_garbage_returns_none(self):
        assert parse_color("") is None
        assert parse_color("not-a-color") is None
        assert parse_color("rgb(a, b, c)") is None

    @pytest.mark.parametrize(
        "value",
        [
            "hsl(1e999 50% 50%)",
            "hsl(-1e999deg, 50%, 50%)",
            "hsl(1e308turn 50% 50%)",
            "hsl(nan 50% 50%)",
            "rgb(1e999 0 0)",
            "rgb(0 0 inf)",
        ],
    )
    def test_non_finite_numbers_return_none(self, value):
        assert parse_color(value) is None

    def test_parse_to_hsl(self):
        hsl = parse_to_hsl("#ffffff")
        assert hsl.l == 1.0
        assert hsl.s == 0

        assert parse_to_hsl("inherit") is None

    def test_cache_is_filled_and_flushed(self):
        clear_parse_cache()
        parse_color("#123456")
        parse_color("#123456")
        assert parse_cache_size() == 1

        clear_parse_cache()
        assert parse_cache_size() == 0


@pytest.mark.unit
class TestConversion:
    """Test RGB/HSL conversion."""

    def test_primary_hues(self):
        assert rgb_to_hsl(RGBA(r=255, g=0, b=0)).h == 0
        assert rgb_to_hsl(RGBA(r=0, g=255, b=0)).h == pytest.approx(120)
        assert rgb_to_hsl(RGBA(r=0, g=0, b=255)).h == pytest.approx(240)

    def test_gray_has_no_saturation(self):
        hsl = rgb_to_hsl(RGBA(r=128, g=128, b=128))
        assert hsl.h == 0
        assert hsl.s == 0
        assert hsl.l == pytest.approx(128 / 255)

    def test_alpha_passes_through(self):
        assert rgb_to_hsl(RGBA(r=10, g=20, b=30, a=0.3)).a == 0.3
        assert hsl_to_rgb(HSLA(h=10, s=0.5, l=0.5, a=0.7)).a == 0.7

    @pytest.mark.parametrize(
        "rgb",
        [(0, 0, 0), (255, 255, 255), (18, 52, 86), (200, 30, 180), (250, 240, 10), (1, 2, 3)],
    )
    def test_round_trip_within_one_unit(self, rgb):
        source = RGBA(r=rgb[0], g=rgb[1], b=rgb[2])
        result = hsl_to_rgb(rgb_to_hsl(source))
        for before, after in zip(source.to_rgb_tuple(), result.to_rgb_tuple()):
            assert abs(before - after) <= 1


@pytest.mark.unit
class TestNumericHelpers:
    """Test rounding and scaling helpers."""

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

    def test_scale_maps_linearly(self):
        assert scale(5, 0, 10, 0, 100) == 50
        assert scale(0.25, 0, 0.5, 0.9, 0.55) == pytest.approx(0.725)

    def test_scale_clamps_to_output_range(self):
        assert scale(20, 0, 10, 0, 100) == 100
        assert scale(-1, 0, 10, 0, 100) == 0
        assert scale(2, 0, 1, 0.9, 0.55) == pytest.approx(0.55)

    def test_scale_degenerate_input_range(self):
        assert scale(3, 1, 1, 5, 9) == 5


@pytest.mark.unit
class TestSerialization:
    """Test hex and functional notation output."""

    def test_hex(self):
        assert rgb_to_hex(RGBA(r=255, g=0, b=16)) == "#ff0010"
        assert rgb_to_hex(RGBA(r=255, g=0, b=0, a=0.5)) == "#ff000080"

    def test_rgb_string(self):
        assert rgb_to_string(RGBA(r=1, g=2, b=3)) == "rgb(1, 2, 3)"
        assert rgb_to_string(RGBA(r=255, g=0, b=0, a=0.5)) == "rgba(255, 0, 0, 0.50)"

    def test_hsl_string(self):
        assert hsl_to_string(HSLA(h=210, s=0.5, l=0.25)) == "hsl(210, 50%, 25%)"
        assert hsl_to_string(HSLA(h=0, s=0, l=1, a=0.5)) == "hsla(0, 0%, 100%, 0.50)"
