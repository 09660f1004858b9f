"""In-memory page model the theme engine runs against.

Provides the pieces of a browser document the engine touches: an element
tree with inline styles, ``<style>``/``<link>`` stylesheet sources,
mutation observers and animation-frame scheduling.
"""

from .document import Document
from .mutations import MutationKind, MutationObserver, MutationRecord
from .nodes import Element, LinkElement, Node, StyleElement, SvgElement, TextNode
from .style import InlineStyle, css_property_name

__all__ = [
    "Document",
    "Element",
    "InlineStyle",
    "LinkElement",
    "MutationKind",
    "MutationObserver",
    "MutationRecord",
    "Node",
    "StyleElement",
    "SvgElement",
    "TextNode",
    "css_property_name",
]
