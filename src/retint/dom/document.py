"""The in-memory document: tree root, mutation delivery and frame scheduling."""

import logging
import time
from collections.abc import Callable, Iterator

from .mutations import MutationObserver, MutationRecord
from .nodes import Element, LinkElement, Node, StyleElement

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]

# Upper bound on rounds per deliver_mutations() call
MAX_DELIVERY_ROUNDS = 100


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class Document(Node):
    """
    A page: ``<html>`` with ``<head>`` and ``<body>``.

    Mutations are queued on registered observers as they happen and are
    delivered by deliver_mutations(). Animation-frame callbacks run when
    run_animation_frames() is called. Together these two calls stand in
    for the browser event loop.
    """

    def __init__(self, clock: Callable[[], float] | None = None):
        super().__init__()
        self._document = self
        self.clock = clock or _monotonic_ms
        self._observers: list[MutationObserver] = []
        self._frame_callbacks: dict[int, FrameCallback] = {}
        self._next_frame_handle = 1

        self.html = Element("html")
        self.head = Element("head")
        self.body = Element("body")
        self.append_child(self.html)
        self.html.append_child(self.head)
        self.html.append_child(self.body)

    @property
    def document_element(self) -> Element:
        return self.html

    # Observers

    def register_observer(self, observer: MutationObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: MutationObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def record_mutation(self, record: MutationRecord) -> None:
        """Queue a record on every observer that covers its target."""
        for observer in list(self._observers):
            observer.enqueue(record)

    def deliver_mutations(self) -> int:
        """
        Deliver pending records to observers until none remain.

        Callbacks may mutate the tree; the resulting records are delivered
        in a following round.

        Returns:
            Number of delivery rounds that delivered at least one batch
        """
        rounds = 0
        while rounds < MAX_DELIVERY_ROUNDS:
            delivered = False
            for observer in list(self._observers):
                delivered = observer.deliver() or delivered
            if not delivered:
                break
            rounds += 1
        else:
            logger.warning(f"Mutation delivery stopped after {MAX_DELIVERY_ROUNDS} rounds")
        return rounds

    # Animation frames

    def request_animation_frame(self, callback: FrameCallback) -> int:
        handle = self._next_frame_handle
        self._next_frame_handle += 1
        self._frame_callbacks[handle] = callback
        return handle

    def cancel_animation_frame(self, handle: int) -> None:
        self._frame_callbacks.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._frame_callbacks)

    def run_animation_frame(self) -> int:
        """
        Run one frame: every callback requested before this call.

        Callbacks requested while the frame runs wait for the next one.
        Mutations caused by the callbacks are delivered afterwards.
        """
        callbacks, self._frame_callbacks = self._frame_callbacks, {}
        timestamp = self.clock()
        for callback in callbacks.values():
            callback(timestamp)
        self.deliver_mutations()
        return len(callbacks)

    def run_animation_frames(self, max_frames: int = 1000) -> int:
        """Run frames until none are pending; returns the number of frames run."""
        frames = 0
        while self._frame_callbacks and frames < max_frames:
            self.run_animation_frame()
            frames += 1
        return frames

    # Queries

    def iter_elements(self) -> Iterator[Element]:
        for node in self.iter_descendants():
            if isinstance(node, Element):
                yield node

    def get_element_by_node_id(self, node_id: int) -> Node | None:
        for node in self.iter_descendants():
            if node.node_id == node_id:
                return node
        return None

    def query_class(self, class_name: str) -> list[Element]:
        return [el for el in self.iter_elements() if class_name in el.class_list]

    def query_styled(self) -> list[Element]:
        """Elements carrying a ``style`` attribute."""
        return [el for el in self.iter_elements() if el.has_attribute("style")]

    def style_sources(self) -> list[StyleElement | LinkElement]:
        """``<style>`` and ``<link rel=stylesheet>`` elements in document order."""
        return [
            el
            for el in self.iter_elements()
            if isinstance(el, StyleElement)
            or (isinstance(el, LinkElement) and el.is_stylesheet)
        ]
