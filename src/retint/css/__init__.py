"""CSS object model, @supports evaluation, contrast repair and stylesheet rewriting."""

from .contrast import adjust_for_contrast, contrast_ratio, iter_contrast_adjustments, relative_luminance
from .cssom import (
    CSSAtRule,
    CSSContainerRule,
    CSSGroupingRule,
    CSSKeyframesRule,
    CSSLayerBlockRule,
    CSSMediaRule,
    CSSRule,
    CSSStyleRule,
    CSSStyleSheet,
    CSSSupportsRule,
    StyleDeclaration,
    parse_declarations,
    parse_stylesheet,
)
from .processor import (
    get_color_role,
    is_color_property,
    is_screen_media,
    iter_style_rules,
    process_declaration,
    process_rule,
    process_stylesheet,
    split_value_tokens,
)
from .supports import KNOWN_PROPERTIES, evaluate_supports

__all__ = [
    "KNOWN_PROPERTIES",
    "CSSAtRule",
    "CSSContainerRule",
    "CSSGroupingRule",
    "CSSKeyframesRule",
    "CSSLayerBlockRule",
    "CSSMediaRule",
    "CSSRule",
    "CSSStyleRule",
    "CSSStyleSheet",
    "CSSSupportsRule",
    "StyleDeclaration",
    "adjust_for_contrast",
    "contrast_ratio",
    "evaluate_supports",
    "get_color_role",
    "is_color_property",
    "is_screen_media",
    "iter_contrast_adjustments",
    "iter_style_rules",
    "parse_declarations",
    "parse_stylesheet",
    "process_declaration",
    "process_rule",
    "process_stylesheet",
    "relative_luminance",
    "split_value_tokens",
]
