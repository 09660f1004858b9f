"""Stylesheet rewriting.

Walks a stylesheet's rule tree, transforms every color-bearing
declaration for the active theme and emits one override rule per input
rule that changed:

    selector { prop: value; prop: value !important }

Rules are emitted flat, in document order. Rules inside applicable
@media/@supports/@layer/@container groups are emitted without their
group wrapper.
"""

import logging
import re
from collections.abc import Callable, Iterator

from retint.colors import SKIPPED_KEYWORDS, parse_color, rgb_to_hex
from retint.exceptions import PageErrorGuard, RetintError
from retint.models import ColorRole, EngineConfig, ThemeProfile
from retint.transform import TransformContext, get_default_context, transform_css_color

from .contrast import adjust_for_contrast, contrast_ratio
from .cssom import (
    CSSGroupingRule,
    CSSKeyframesRule,
    CSSMediaRule,
    CSSRule,
    CSSStyleRule,
    CSSStyleSheet,
    CSSSupportsRule,
)
from .supports import evaluate_supports

logger = logging.getLogger(__name__)

COLOR_PROPERTIES = frozenset({"fill", "stroke", "stop-color"})
EXCLUDED_PROPERTIES = frozenset({"-webkit-print-color-adjust"})
IMAGE_PROPERTIES = frozenset({"background-image", "list-style-image"})
MASK_PROPERTIES = ("-webkit-mask-image", "mask", "mask-image", "-webkit-mask")
BACKGROUND_PROPERTIES = frozenset({"background-color", "background"})

# Shorthands whose color component is rewritten in place
SHORTHAND_ROLES: dict[str, ColorRole] = {
    "background": ColorRole.BACKGROUND,
    "border": ColorRole.BORDER,
    "border-top": ColorRole.BORDER,
    "border-right": ColorRole.BORDER,
    "border-bottom": ColorRole.BORDER,
    "border-left": ColorRole.BORDER,
    "border-block": ColorRole.BORDER,
    "border-inline": ColorRole.BORDER,
    "outline": ColorRole.BORDER,
}

_NAMED_TOKEN_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)

SupportsEvaluator = Callable[[str], bool]


def is_color_property(name: str) -> bool:
    """Whether a property carries a color value."""
    return ("color" in name and name not in EXCLUDED_PROPERTIES) or name in COLOR_PROPERTIES


def has_mask_image(rule: CSSStyleRule) -> bool:
    for name in MASK_PROPERTIES:
        value = rule.style.get_property_value(name)
        if value and value.strip().lower() != "none":
            return True
    return False


def get_color_role(name: str, rule: CSSStyleRule) -> ColorRole:
    """
    Classify a color property by role.

    Backgrounds of masked elements (icon fonts) are painted as glyphs, so
    they count as text. Zero-width or ``none`` border values still count as
    border; they never parse as colors, so nothing is emitted for them.
    """
    if "background" in name:
        return ColorRole.TEXT if has_mask_image(rule) else ColorRole.BACKGROUND
    if "border" in name or "outline" in name:
        return ColorRole.BORDER
    return ColorRole.TEXT


def split_value_tokens(value: str) -> list[str]:
    """Split a value on whitespace that is not inside parentheses."""
    tokens: list[str] = []
    current: list[str] = []
    depth = 0

    for char in value.strip():
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)

        if char.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def _looks_like_color(token: str) -> bool:
    lowered = token.lower()
    return lowered.startswith(("#", "rgb", "hsl")) or bool(_NAMED_TOKEN_RE.match(token))


def replace_last_color(
    value: str, role: ColorRole, theme: ThemeProfile, context: TransformContext
) -> str | None:
    """Transform the last color-like token of a multi-part value."""
    parts = split_value_tokens(value)

    for index in range(len(parts) - 1, -1, -1):
        if not _looks_like_color(parts[index]):
            continue
        transformed = transform_css_color(parts[index], role, theme, context=context)
        if transformed:
            parts[index] = transformed
            return " ".join(parts)

    return None


def process_declaration(
    name: str,
    value: str,
    rule: CSSStyleRule,
    theme: ThemeProfile,
    context: TransformContext | None = None,
) -> str | None:
    """
    Compute the themed value of one declaration.

    Returns:
        The replacement value, or None when the declaration is left alone
    """
    context = context or get_default_context()
    name = name.lower()

    if name in SHORTHAND_ROLES:
        role = SHORTHAND_ROLES[name]
        if role is ColorRole.BACKGROUND and has_mask_image(rule):
            role = ColorRole.TEXT
        if value.strip().lower() in SKIPPED_KEYWORDS:
            return None
        return replace_last_color(value, role, theme, context)

    is_shadow = name.endswith("shadow")
    if not is_shadow and not is_color_property(name):
        return None

    if value.strip().lower() in SKIPPED_KEYWORDS:
        return None

    if is_shadow:
        return replace_last_color(value, ColorRole.BACKGROUND, theme, context)

    if name == "color-scheme":
        return "dark"

    if name == "scrollbar-color":
        parts = split_value_tokens(value)
        if len(parts) != 2:
            return None
        thumb = transform_css_color(parts[0], ColorRole.TEXT, theme, context=context)
        track = transform_css_color(parts[1], ColorRole.BACKGROUND, theme, context=context)
        if thumb and track:
            return f"{thumb} {track}"
        return None

    if name in IMAGE_PROPERTIES:
        return None

    return transform_css_color(value, get_color_role(name, rule), theme, context=context)


def is_screen_media(media: list[str]) -> bool:
    """Whether a media list applies on screen (an empty list means all)."""
    if not media:
        return True
    is_screen = any(m.startswith(("screen", "all", "(")) for m in media)
    is_print = any(m.startswith("print") for m in media)
    return is_screen and not is_print


def iter_style_rules(
    rules: list[CSSRule], supports: SupportsEvaluator = evaluate_supports
) -> Iterator[CSSStyleRule]:
    """Yield every style rule that applies on screen, descending into groups."""
    for rule in rules:
        if isinstance(rule, CSSStyleRule):
            yield rule
        elif isinstance(rule, CSSMediaRule):
            if is_screen_media(rule.media):
                yield from iter_style_rules(rule.css_rules, supports)
        elif isinstance(rule, CSSSupportsRule):
            if supports(rule.condition_text):
                yield from iter_style_rules(rule.css_rules, supports)
        elif isinstance(rule, CSSKeyframesRule):
            continue
        elif isinstance(rule, CSSGroupingRule):
            yield from iter_style_rules(rule.css_rules, supports)


def _repair_contrast(
    declarations: list[str],
    background: str,
    color: str,
    target: float,
    config: EngineConfig,
) -> None:
    bg_rgb = parse_color(background)
    text_rgb = parse_color(color)
    if bg_rgb is None or text_rgb is None or bg_rgb.a < 1 or text_rgb.a < 1:
        return

    if contrast_ratio(bg_rgb, text_rgb) >= target:
        return

    adjusted = adjust_for_contrast(
        text_rgb,
        bg_rgb,
        target,
        step=config.contrast_step,
        max_iterations=config.contrast_max_iterations,
    )

    for index, declaration in enumerate(declarations):
        if declaration.startswith("color:"):
            important = " !important" if declaration.endswith("!important") else ""
            declarations[index] = f"color: {rgb_to_hex(adjusted)}{important}"
            break


def process_rule(
    rule: CSSStyleRule,
    theme: ThemeProfile,
    context: TransformContext,
    config: EngineConfig,
) -> str | None:
    """Build the override text for one style rule, or None if nothing changed."""
    declarations: list[str] = []
    transformed_bg: str | None = None
    transformed_color: str | None = None

    for name, value, priority in rule.style.items():
        modified = process_declaration(name, value, rule, theme, context)
        if not modified or modified == value:
            continue

        important = " !important" if priority == "important" else ""
        declarations.append(f"{name}: {modified}{important}")

        if name in BACKGROUND_PROPERTIES:
            transformed_bg = modified
        if name == "color":
            transformed_color = modified

    if transformed_bg and transformed_color:
        target = theme.minimum_contrast or config.default_min_contrast
        _repair_contrast(declarations, transformed_bg, transformed_color, target, config)

    if not declarations:
        return None
    return f"{rule.selector_text} {{ {'; '.join(declarations)} }}"


def process_stylesheet(
    sheet: CSSStyleSheet | None,
    theme: ThemeProfile,
    context: TransformContext | None = None,
    config: EngineConfig | None = None,
    supports: SupportsEvaluator = evaluate_supports,
) -> str:
    """
    Produce override CSS for a stylesheet.

    Returns:
        Override rules joined by newlines; an empty string when nothing
        changed or the sheet cannot be read. A rule that fails to process
        is left out.
    """
    if sheet is None:
        return ""

    context = context or get_default_context()
    config = config or context.config

    try:
        rules = sheet.css_rules
    except RetintError as e:
        logger.debug(f"Skipping unreadable stylesheet {sheet.href or '<inline>'}: {e}")
        return ""

    overrides = []
    for rule in iter_style_rules(rules, supports):
        override = None
        with PageErrorGuard(f"rule {rule.selector_text!r}"):
            override = process_rule(rule, theme, context, config)
        if override:
            overrides.append(override)

    return "\n".join(overrides)
