"""Nodes of the in-memory document.

Every node has a stable integer ``node_id``; engine side tables are keyed
by it. Tree and attribute changes on nodes connected to a document are
reported to that document as mutation records.
"""

import itertools
import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from retint.css.cssom import CSSStyleSheet, parse_stylesheet

from .mutations import MutationKind, MutationRecord
from .style import InlineStyle

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

_node_ids = itertools.count(1)


class Node:
    """A node in the document tree."""

    def __init__(self) -> None:
        self.node_id = next(_node_ids)
        self.parent: Node | None = None
        self.children: list[Node] = []
        self._document: "Document | None" = None

    @property
    def owner_document(self) -> "Document | None":
        return self._document

    @property
    def is_connected(self) -> bool:
        """Whether the node is attached to its document's tree."""
        node: Node | None = self
        while node is not None:
            if node is self._document:
                return True
            node = node.parent
        return False

    def _adopt(self, document: "Document | None") -> None:
        self._document = document
        for child in self.children:
            child._adopt(document)

    def contains(self, other: "Node") -> bool:
        """Whether other is this node or one of its descendants."""
        node: Node | None = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def iter_descendants(self) -> Iterator["Node"]:
        """Depth-first, document-order traversal (excluding self)."""
        for child in list(self.children):
            yield child
            yield from child.iter_descendants()

    @property
    def next_sibling(self) -> "Node | None":
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = siblings.index(self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    def _record(self, record: MutationRecord) -> None:
        if self._document is not None and self.is_connected:
            self._document.record_mutation(record)

    def insert_before(self, child: "Node", reference: "Node | None") -> "Node":
        """Insert child before reference (or append when reference is None)."""
        if child.parent is not None:
            child.parent.remove_child(child)

        if reference is None:
            self.children.append(child)
        else:
            self.children.insert(self.children.index(reference), child)

        child.parent = self
        child._adopt(self._document)
        self._record(MutationRecord(MutationKind.CHILD_LIST, self, added_nodes=(child,)))
        return child

    def append_child(self, child: "Node") -> "Node":
        return self.insert_before(child, None)

    def insert_after(self, child: "Node", reference: "Node") -> "Node":
        """Insert child immediately after reference."""
        return self.insert_before(child, reference.next_sibling)

    def remove_child(self, child: "Node") -> "Node":
        was_connected = child.is_connected
        self.children.remove(child)
        child.parent = None
        if was_connected and self._document is not None:
            self._document.record_mutation(
                MutationRecord(MutationKind.CHILD_LIST, self, removed_nodes=(child,))
            )
        return child

    def remove(self) -> None:
        """Detach this node from its parent."""
        if self.parent is not None:
            self.parent.remove_child(self)


class Element(Node):
    """An element with attributes and an inline style."""

    def __init__(self, tag_name: str, attributes: dict[str, str] | None = None):
        super().__init__()
        self.tag_name = tag_name.lower()
        self.attributes: dict[str, str] = {}
        self.style = InlineStyle(self)
        self.bounding_box: tuple[float, float] | None = None
        for name, value in (attributes or {}).items():
            self.attributes[name.lower()] = value
        if "style" in self.attributes:
            self.style.load(self.attributes["style"])

    def __repr__(self) -> str:
        classes = f".{'.'.join(sorted(self.class_list))}" if self.class_list else ""
        return f"<{self.tag_name}{classes} #{self.node_id}>"

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self.attributes

    def set_attribute(self, name: str, value: str) -> None:
        name = name.lower()
        old_value = self.attributes.get(name)
        self.attributes[name] = value
        if name == "style":
            self.style.load(value)
        self._record(
            MutationRecord(
                MutationKind.ATTRIBUTES, self, attribute_name=name, old_value=old_value
            )
        )

    def remove_attribute(self, name: str) -> None:
        name = name.lower()
        if name not in self.attributes:
            return
        old_value = self.attributes.pop(name)
        if name == "style":
            self.style.load(None)
        self._record(
            MutationRecord(
                MutationKind.ATTRIBUTES, self, attribute_name=name, old_value=old_value
            )
        )

    def write_style_attribute(self, css_text: str) -> None:
        """Serialize the inline style into the attribute (called by InlineStyle)."""
        old_value = self.attributes.get("style")
        self.attributes["style"] = css_text
        self._record(
            MutationRecord(
                MutationKind.ATTRIBUTES, self, attribute_name="style", old_value=old_value
            )
        )

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    @property
    def class_list(self) -> set[str]:
        return set(self.class_name.split())

    def iter_elements(self) -> Iterator["Element"]:
        """Descendant elements in document order."""
        for node in self.iter_descendants():
            if isinstance(node, Element):
                yield node


class TextNode(Node):
    """Character data."""

    def __init__(self, data: str = ""):
        super().__init__()
        self.data = data


class StyleElement(Element):
    """A ``<style>`` element; its sheet is parsed from its text."""

    def __init__(self, css_text: str = "", attributes: dict[str, str] | None = None):
        super().__init__("style", attributes)
        self._text = css_text
        self._sheet: CSSStyleSheet | None = None

    @property
    def text_content(self) -> str:
        return self._text

    @text_content.setter
    def text_content(self, value: str) -> None:
        self._text = value
        self._sheet = None
        self._record(MutationRecord(MutationKind.CHILD_LIST, self))

    @property
    def sheet(self) -> CSSStyleSheet | None:
        """The parsed sheet; None while detached, as in browsers."""
        if not self.is_connected:
            return None
        if self._sheet is None:
            self._sheet = parse_stylesheet(self._text, owner_node=self)
        return self._sheet


class LinkElement(Element):
    """
    A ``<link rel="stylesheet">``.

    It has no sheet until load() is called; load listeners fire exactly
    once.
    """

    def __init__(self, href: str, attributes: dict[str, str] | None = None):
        attrs = {"rel": "stylesheet", "href": href}
        attrs.update(attributes or {})
        super().__init__("link", attrs)
        self._sheet: CSSStyleSheet | None = None
        self._load_listeners: list[Callable[["LinkElement"], None]] = []
        self.loaded = False

    @property
    def href(self) -> str:
        return self.attributes.get("href", "")

    @property
    def is_stylesheet(self) -> bool:
        return "stylesheet" in self.attributes.get("rel", "").lower().split()

    @property
    def sheet(self) -> CSSStyleSheet | None:
        return self._sheet

    def add_load_listener(self, listener: Callable[["LinkElement"], None]) -> None:
        """Register a one-shot listener; ignored once the link has loaded."""
        if not self.loaded:
            self._load_listeners.append(listener)

    def load(self, css_text: str, cross_origin: bool = False) -> None:
        """Simulate the network load completing."""
        if self.loaded:
            logger.debug(f"Link {self.href} already loaded")
            return

        self._sheet = parse_stylesheet(
            css_text, href=self.href, cross_origin=cross_origin, owner_node=self
        )
        self.loaded = True

        listeners, self._load_listeners = self._load_listeners, []
        for listener in listeners:
            listener(self)


class SvgElement(Element):
    """An SVG element (root ``svg`` or a descendant such as ``path``)."""

    def __init__(self, tag_name: str = "svg", attributes: dict[str, str] | None = None):
        super().__init__(tag_name, attributes)
