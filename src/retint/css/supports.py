"""Evaluation of ``@supports`` conditions.

Implements the condition grammar (``not``, ``and``, ``or``, nested
parentheses, ``(property: value)`` tests and ``selector(...)``) against
a fixed set of known properties. Any condition that does not parse is
treated as unsupported.
"""

import logging

import tinycss2
from tinycss2.ast import FunctionBlock, IdentToken, LiteralToken, ParenthesesBlock, WhitespaceToken

logger = logging.getLogger(__name__)

KNOWN_PROPERTIES = frozenset(
    {
        "accent-color", "align-content", "align-items", "align-self", "all", "animation",
        "appearance", "aspect-ratio", "backdrop-filter", "background", "background-attachment",
        "background-blend-mode", "background-clip", "background-color", "background-image",
        "background-origin", "background-position", "background-repeat", "background-size",
        "block-size", "border", "border-block", "border-bottom", "border-bottom-color",
        "border-collapse", "border-color", "border-image", "border-inline", "border-left",
        "border-left-color", "border-radius", "border-right", "border-right-color",
        "border-spacing", "border-style", "border-top", "border-top-color", "border-width",
        "bottom", "box-shadow", "box-sizing", "caret-color", "clip-path", "color",
        "color-scheme", "column-gap", "column-rule-color", "columns", "contain",
        "container-type", "content", "content-visibility", "cursor", "display", "fill",
        "filter", "flex", "flex-direction", "flex-wrap", "float", "font", "font-family",
        "font-size", "font-variant", "font-weight", "gap", "grid", "grid-area",
        "grid-template-columns", "grid-template-rows", "height", "hyphens", "inline-size",
        "inset", "isolation", "justify-content", "justify-items", "left", "letter-spacing",
        "line-height", "list-style", "margin", "margin-block", "margin-inline", "mask",
        "mask-image", "max-height", "max-width", "min-height", "min-width",
        "mix-blend-mode", "object-fit", "opacity", "order", "outline", "outline-color",
        "overflow", "overflow-wrap", "overscroll-behavior", "padding", "padding-block",
        "padding-inline", "place-items", "pointer-events", "position", "right", "rotate",
        "row-gap", "scale", "scroll-behavior", "scroll-snap-type", "scrollbar-color",
        "scrollbar-gutter", "scrollbar-width", "stop-color", "stroke", "tab-size",
        "table-layout", "text-align", "text-decoration", "text-decoration-color",
        "text-emphasis-color", "text-overflow", "text-shadow", "text-transform",
        "text-underline-offset", "top", "touch-action", "transform", "transition",
        "translate", "user-select", "vertical-align", "visibility", "white-space",
        "width", "will-change", "word-break", "writing-mode", "z-index",
        "-webkit-appearance", "-webkit-backdrop-filter", "-webkit-line-clamp",
        "-webkit-mask-image", "-webkit-text-fill-color", "-webkit-text-stroke-color",
    }
)


class InvalidCondition(ValueError):
    """A supports condition that does not parse."""


def _significant(tokens) -> list:
    return [t for t in tokens if not isinstance(t, WhitespaceToken) and t.type != "comment"]


def _is_declaration(tokens: list) -> bool:
    return (
        len(tokens) >= 2
        and isinstance(tokens[0], IdentToken)
        and isinstance(tokens[1], LiteralToken)
        and tokens[1].value == ":"
    )


def _evaluate_declaration(tokens: list, known_properties: frozenset[str]) -> bool:
    name = tokens[0].lower_value
    value = tinycss2.serialize(tokens[2:]).strip()
    if not value:
        return False
    return name.startswith("--") or name in known_properties


def _evaluate_in_parens(token, known_properties: frozenset[str]) -> bool:
    if isinstance(token, ParenthesesBlock):
        inner = _significant(token.content)
        if _is_declaration(inner):
            return _evaluate_declaration(inner, known_properties)
        return _evaluate_condition(inner, known_properties)

    if isinstance(token, FunctionBlock):
        # selector(...) is assumed supported; other functions are unknown syntax
        if token.lower_name == "selector":
            return bool(tinycss2.serialize(token.arguments).strip())
        return False

    raise InvalidCondition(f"Unexpected token in supports condition: {token!r}")


def _evaluate_condition(tokens: list, known_properties: frozenset[str]) -> bool:
    if not tokens:
        raise InvalidCondition("Empty supports condition")

    first = tokens[0]
    if isinstance(first, IdentToken) and first.lower_value == "not":
        if len(tokens) != 2:
            raise InvalidCondition("'not' takes exactly one operand")
        return not _evaluate_in_parens(tokens[1], known_properties)

    result = _evaluate_in_parens(first, known_properties)
    operator = None
    rest = tokens[1:]

    while rest:
        if len(rest) < 2 or not isinstance(rest[0], IdentToken):
            raise InvalidCondition("Expected 'and' or 'or' between conditions")

        keyword = rest[0].lower_value
        if keyword not in ("and", "or") or (operator and keyword != operator):
            raise InvalidCondition(f"Cannot mix or misuse operator {keyword!r}")
        operator = keyword

        operand = _evaluate_in_parens(rest[1], known_properties)
        result = (result and operand) if operator == "and" else (result or operand)
        rest = rest[2:]

    return result


def evaluate_supports(
    condition_text: str, known_properties: frozenset[str] = KNOWN_PROPERTIES
) -> bool:
    """
    Evaluate an @supports condition.

    Returns:
        True if the condition holds; False if it does not or cannot be parsed
    """
    tokens = _significant(tinycss2.parse_component_value_list(condition_text, skip_comments=True))
    try:
        return _evaluate_condition(tokens, known_properties)
    except InvalidCondition as e:
        logger.debug(f"Invalid supports condition {condition_text!r}: {e}")
        return False
