"""Logo detection for inline SVG.

SVG logos are artwork rather than UI chrome: their colors are left alone,
and small ones are flagged for inversion on dark themes so dark logos stay
visible.
"""

import logging

from retint.dom import Element, Node, SvgElement

logger = logging.getLogger(__name__)

LOGO_MARKER = "logo"


def _has_logo_class(node: Node | None) -> bool:
    return isinstance(node, Element) and LOGO_MARKER in node.class_name


class SvgClassifier:
    """Memoized logo classification and size checks, keyed by SVG root handle."""

    def __init__(self, small_px: float = 32.0):
        self._small_area = small_px * small_px
        self._image_like: dict[int, bool] = {}
        self._small: dict[int, bool] = {}
        self._handled: set[int] = set()

    @staticmethod
    def root_of(element: Element) -> SvgElement | None:
        """The nearest enclosing ``<svg>`` element (element itself if it is one)."""
        node: Node | None = element
        while isinstance(node, SvgElement):
            if node.tag_name == "svg":
                return node
            node = node.parent
        return None

    def is_image_like(self, root: SvgElement) -> bool:
        """Whether the root, its parent or any descendant has a class containing "logo"."""
        cached = self._image_like.get(root.node_id)
        if cached is not None:
            return cached

        result = (
            _has_logo_class(root)
            or _has_logo_class(root.parent)
            or any(_has_logo_class(node) for node in root.iter_descendants())
        )
        self._image_like[root.node_id] = result
        return result

    def is_small(self, root: SvgElement) -> bool:
        """
        Whether the rendered area is at most small_px x small_px.

        An element without a bounding box has not been laid out and
        counts as zero-sized.
        """
        cached = self._small.get(root.node_id)
        if cached is not None:
            return cached

        width, height = root.bounding_box or (0.0, 0.0)
        result = width * height <= self._small_area
        self._small[root.node_id] = result
        return result

    def claim(self, root: SvgElement) -> bool:
        """Mark the root as handled; False if it already was."""
        if root.node_id in self._handled:
            return False
        self._handled.add(root.node_id)
        return True

    def forget(self, node_id: int) -> None:
        self._image_like.pop(node_id, None)
        self._small.pop(node_id, None)
        self._handled.discard(node_id)

    def clear(self) -> None:
        self._image_like.clear()
        self._small.clear()
        self._handled.clear()

    def __len__(self) -> int:
        return len(self._image_like)
