"""Mutation queueing for the theme engine.

Mutation records are folded into an immutable QueueState by a pure
reducer. The reducer never touches the engine: whatever has to happen
outside the queue (scheduling a flush, waiting for a stylesheet to load,
pruning side tables for detached nodes) is returned as effects for the
engine to carry out.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace

from retint.dom import Element, LinkElement, MutationKind, MutationRecord, Node, StyleElement

SheetSource = StyleElement | LinkElement


@dataclass(frozen=True)
class QueueState:
    """Pending work: stylesheet sources, inline-style targets and the flush flag."""

    sheets: tuple[SheetSource, ...] = ()
    inline: tuple[Element, ...] = ()
    flush_scheduled: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.sheets and not self.inline


@dataclass(frozen=True)
class ScheduleFlush:
    """Request a flush on the next animation frame."""


@dataclass(frozen=True)
class AwaitLoad:
    """Process a link's stylesheet once it has loaded."""

    link: LinkElement


@dataclass(frozen=True)
class ForgetNode:
    """Drop every side-table entry for a detached (or rewritten) node."""

    node_id: int


Effect = ScheduleFlush | AwaitLoad | ForgetNode


def _append_unique[T: Node](queue: tuple[T, ...], node: T) -> tuple[T, ...]:
    if any(queued is node for queued in queue):
        return queue
    return (*queue, node)


def _queue_added(
    state: QueueState,
    node: Node,
    is_engine_node: Callable[[Node], bool],
    effects: list[Effect],
) -> QueueState:
    if is_engine_node(node):
        return state

    if isinstance(node, StyleElement):
        return replace(state, sheets=_append_unique(state.sheets, node))

    if isinstance(node, LinkElement):
        if not node.is_stylesheet:
            return state
        if node.sheet is not None:
            return replace(state, sheets=_append_unique(state.sheets, node))
        effects.append(AwaitLoad(node))
        return state

    if isinstance(node, Element):
        inline = state.inline
        if node.has_attribute("style"):
            inline = _append_unique(inline, node)
        for descendant in node.iter_elements():
            if descendant.has_attribute("style"):
                inline = _append_unique(inline, descendant)
        return replace(state, inline=inline)

    return state


def reduce_mutation(
    state: QueueState,
    record: MutationRecord,
    is_engine_node: Callable[[Node], bool],
) -> tuple[QueueState, list[Effect]]:
    """
    Fold one mutation record into the queue.

    - Added ``<style>`` and loaded ``<link>`` elements queue their sheet;
      unloaded links produce AwaitLoad.
    - Other added elements queue themselves and their descendants that
      carry a ``style`` attribute.
    - ``style`` attribute changes queue the target.
    - Removed nodes (and their descendants) produce ForgetNode.
    - A ``<style>`` whose text changed is forgotten and re-queued.
    - Engine-owned nodes are ignored.

    A ScheduleFlush effect is produced when work is queued and no flush
    is pending yet.

    Returns:
        The new state and the effects to carry out, in order
    """
    effects: list[Effect] = []
    before = state

    if record.kind is MutationKind.CHILD_LIST:
        for node in record.removed_nodes:
            effects.append(ForgetNode(node.node_id))
            effects.extend(ForgetNode(d.node_id) for d in node.iter_descendants())

        for node in record.added_nodes:
            state = _queue_added(state, node, is_engine_node, effects)

        target = record.target
        if (
            not record.added_nodes
            and not record.removed_nodes
            and isinstance(target, StyleElement)
            and not is_engine_node(target)
        ):
            effects.append(ForgetNode(target.node_id))
            state = replace(state, sheets=_append_unique(state.sheets, target))

    elif record.kind is MutationKind.ATTRIBUTES and record.attribute_name == "style":
        target = record.target
        if isinstance(target, Element) and not is_engine_node(target):
            state = replace(state, inline=_append_unique(state.inline, target))

    queued = state.sheets != before.sheets or state.inline != before.inline
    if queued and not state.flush_scheduled:
        state = replace(state, flush_scheduled=True)
        effects.append(ScheduleFlush())

    return state, effects


def begin_flush(state: QueueState) -> tuple[tuple[SheetSource, ...], QueueState]:
    """Take every queued sheet and clear the flush flag."""
    return state.sheets, replace(state, sheets=(), flush_scheduled=False)


def take_inline(state: QueueState, limit: int) -> tuple[tuple[Element, ...], QueueState]:
    """Take up to limit inline targets from the front of the queue."""
    return state.inline[:limit], replace(state, inline=state.inline[limit:])
