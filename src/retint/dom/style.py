"""Inline style declarations backed by an element's ``style`` attribute."""

import re
from typing import TYPE_CHECKING

from retint.css.cssom import StyleDeclaration, parse_declarations

if TYPE_CHECKING:
    from .nodes import Element

_UPPER_RE = re.compile(r"([A-Z])")
_VENDOR_PREFIXES = ("webkit", "moz", "ms")


def css_property_name(name: str) -> str:
    """
    Convert a camelCase property name to its CSS form.

    ``backgroundColor`` -> ``background-color``,
    ``webkitMaskImage`` -> ``-webkit-mask-image``. Names that are already
    kebab-case pass through lowercased.
    """
    if "-" in name or name == name.lower():
        return name.lower()
    kebab = _UPPER_RE.sub(r"-\1", name).lower()
    if kebab.startswith(_VENDOR_PREFIXES):
        kebab = f"-{kebab}"
    return kebab


class InlineStyle(StyleDeclaration):
    """
    An element's inline style.

    Every write is serialized back into the ``style`` attribute, so it
    shows up as an attribute mutation. Properties can be read as
    ``style["background-color"]`` or ``style.backgroundColor``.
    """

    def __init__(self, element: "Element"):
        super().__init__()
        object.__setattr__(self, "_element", element)

    def load(self, text: str | None) -> None:
        """Replace all properties from attribute text without writing back."""
        self._properties.clear()
        for name, value, important in parse_declarations(text or ""):
            self._properties[name] = (value, "important" if important else "")

    def get_property_value(self, name: str) -> str:
        return super().get_property_value(css_property_name(name))

    def get_property_priority(self, name: str) -> str:
        return super().get_property_priority(css_property_name(name))

    def set_property(self, name: str, value: str, priority: str = "") -> None:
        super().set_property(css_property_name(name), value, priority)
        self._element.write_style_attribute(self.css_text)

    def remove_property(self, name: str) -> str:
        value = super().remove_property(css_property_name(name))
        self._element.write_style_attribute(self.css_text)
        return value

    def __getitem__(self, name: str) -> str:
        return self.get_property_value(name)

    def __setitem__(self, name: str, value: str) -> None:
        self.set_property(name, value)

    def __getattr__(self, name: str) -> str:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get_property_value(name)

    def __setattr__(self, name: str, value) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set_property(name, value)
