"""A small CSS object model built on tinycss2.

Only what the theme engine reads is modeled: style rules with their
declarations, and grouping at-rules (@media, @supports, @layer,
@container and unknown blocks of rules) with their children. Keyframes
and descriptor at-rules (@font-face, @page, ...) are kept as opaque
rules and never walked.
"""

import logging
from collections.abc import Iterator

import tinycss2
from tinycss2.ast import AtRule, Declaration, QualifiedRule

from retint.exceptions import SecurityError

logger = logging.getLogger(__name__)

# At-rules whose block holds descriptors rather than rules
DESCRIPTOR_AT_RULES = frozenset(
    {"font-face", "page", "counter-style", "property", "font-palette-values", "viewport"}
)


class StyleDeclaration:
    """
    Ordered CSS declaration block.

    Property names are stored lowercase; setting an existing property
    replaces its value in place, like CSSStyleDeclaration.setProperty.
    """

    def __init__(self, declarations: list[tuple[str, str, bool]] | None = None):
        self._properties: dict[str, tuple[str, str]] = {}
        for name, value, important in declarations or []:
            self._properties[name.lower()] = (value, "important" if important else "")

    @classmethod
    def parse(cls, text: str) -> "StyleDeclaration":
        """Parse a declaration list such as ``color: red; margin: 0 !important``."""
        return cls(parse_declarations(text))

    def get_property_value(self, name: str) -> str:
        return self._properties.get(name.lower(), ("", ""))[0]

    def get_property_priority(self, name: str) -> str:
        return self._properties.get(name.lower(), ("", ""))[1]

    def set_property(self, name: str, value: str, priority: str = "") -> None:
        """Set a property; an empty value removes it."""
        if not value:
            self.remove_property(name)
            return
        self._properties[name.lower()] = (value, "important" if priority == "important" else "")

    def remove_property(self, name: str) -> str:
        value, _ = self._properties.pop(name.lower(), ("", ""))
        return value

    def items(self) -> Iterator[tuple[str, str, str]]:
        """Yield (name, value, priority) in declaration order."""
        for name, (value, priority) in list(self._properties.items()):
            yield name, value, priority

    @property
    def css_text(self) -> str:
        parts = []
        for name, value, priority in self.items():
            suffix = " !important" if priority else ""
            parts.append(f"{name}: {value}{suffix};")
        return " ".join(parts)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._properties


class CSSRule:
    """Base class for rules in a stylesheet."""

    def __init__(self, parent: "CSSGroupingRule | None" = None):
        self.parent_rule = parent


class CSSStyleRule(CSSRule):
    """``selector { declarations }``."""

    def __init__(self, selector_text: str, style: StyleDeclaration, parent=None):
        super().__init__(parent)
        self.selector_text = selector_text
        self.style = style

    @property
    def css_text(self) -> str:
        return f"{self.selector_text} {{ {self.style.css_text} }}"


class CSSGroupingRule(CSSRule):
    """An at-rule whose block contains further rules."""

    def __init__(self, at_keyword: str, prelude: str, parent=None):
        super().__init__(parent)
        self.at_keyword = at_keyword
        self.prelude = prelude
        self.css_rules: list[CSSRule] = []


class CSSMediaRule(CSSGroupingRule):
    """``@media <media-query-list> { ... }``."""

    @property
    def media(self) -> list[str]:
        """Media queries, lowercased; empty for a bare ``@media``."""
        return [m.strip().lower() for m in self.prelude.split(",") if m.strip()]


class CSSSupportsRule(CSSGroupingRule):
    """``@supports <condition> { ... }``."""

    @property
    def condition_text(self) -> str:
        return self.prelude


class CSSLayerBlockRule(CSSGroupingRule):
    """``@layer name { ... }``."""


class CSSContainerRule(CSSGroupingRule):
    """``@container <condition> { ... }``."""


class CSSKeyframesRule(CSSRule):
    """``@keyframes name { ... }``; frames are not style rules."""

    def __init__(self, at_keyword: str, name: str, parent=None):
        super().__init__(parent)
        self.at_keyword = at_keyword
        self.name = name


class CSSAtRule(CSSRule):
    """Any other at-rule (@import, @font-face, @charset, @layer statements...)."""

    def __init__(self, at_keyword: str, prelude: str, parent=None):
        super().__init__(parent)
        self.at_keyword = at_keyword
        self.prelude = prelude


_GROUPING_CLASSES: dict[str, type[CSSGroupingRule]] = {
    "media": CSSMediaRule,
    "supports": CSSSupportsRule,
    "layer": CSSLayerBlockRule,
    "container": CSSContainerRule,
}


class CSSStyleSheet:
    """
    A parsed stylesheet.

    Reading ``css_rules`` of a cross-origin sheet raises SecurityError,
    as browsers do for sheets served without CORS.
    """

    def __init__(
        self,
        rules: list[CSSRule],
        href: str | None = None,
        cross_origin: bool = False,
        owner_node=None,
    ):
        self._rules = rules
        self.href = href
        self.cross_origin = cross_origin
        self.owner_node = owner_node

    @property
    def css_rules(self) -> list[CSSRule]:
        if self.cross_origin:
            raise SecurityError(f"rules of cross-origin stylesheet {self.href or '<inline>'}")
        return self._rules


def _serialize(tokens) -> str:
    return tinycss2.serialize(tokens).strip()


def parse_declarations(text_or_tokens) -> list[tuple[str, str, bool]]:
    """Parse a declaration list into (name, value, important) tuples, skipping errors."""
    declarations = []
    for item in tinycss2.parse_declaration_list(
        text_or_tokens, skip_comments=True, skip_whitespace=True
    ):
        if isinstance(item, Declaration):
            declarations.append((item.lower_name, _serialize(item.value), item.important))
        else:
            logger.debug(f"Skipping invalid declaration: {item!r}")
    return declarations


def _build_rules(nodes, parent: CSSGroupingRule | None) -> list[CSSRule]:
    rules: list[CSSRule] = []

    for node in nodes:
        if isinstance(node, QualifiedRule):
            style = StyleDeclaration(parse_declarations(node.content))
            rules.append(CSSStyleRule(_serialize(node.prelude), style, parent))

        elif isinstance(node, AtRule):
            keyword = node.lower_at_keyword
            prelude = _serialize(node.prelude)

            if node.content is None or keyword in DESCRIPTOR_AT_RULES:
                rules.append(CSSAtRule(keyword, prelude, parent))
            elif keyword.endswith("keyframes"):
                rules.append(CSSKeyframesRule(keyword, prelude, parent))
            else:
                group_class = _GROUPING_CLASSES.get(keyword, CSSGroupingRule)
                group = group_class(keyword, prelude, parent)
                children = tinycss2.parse_rule_list(
                    node.content, skip_comments=True, skip_whitespace=True
                )
                group.css_rules = _build_rules(children, group)
                rules.append(group)

        else:
            logger.debug(f"Skipping unparseable rule: {node!r}")

    return rules


def parse_stylesheet(
    css_text: str, href: str | None = None, cross_origin: bool = False, owner_node=None
) -> CSSStyleSheet:
    """Parse CSS text into a CSSStyleSheet."""
    nodes = tinycss2.parse_stylesheet(css_text, skip_comments=True, skip_whitespace=True)
    return CSSStyleSheet(
        _build_rules(nodes, None),
        href=href,
        cross_origin=cross_origin,
        owner_node=owner_node,
    )
