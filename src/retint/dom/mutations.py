"""Mutation records and observers for the in-memory document."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import Node

logger = logging.getLogger(__name__)


class MutationKind(Enum):
    """What changed."""

    CHILD_LIST = "childList"
    ATTRIBUTES = "attributes"


@dataclass(frozen=True)
class MutationRecord:
    """One change to the document tree."""

    kind: MutationKind
    target: "Node"
    added_nodes: tuple["Node", ...] = ()
    removed_nodes: tuple["Node", ...] = ()
    attribute_name: str | None = None
    old_value: str | None = None


@dataclass
class ObserveOptions:
    """Which changes an observer receives for one observed target."""

    child_list: bool = True
    attributes: bool = False
    attribute_filter: frozenset[str] | None = None
    subtree: bool = True

    def accepts(self, record: MutationRecord) -> bool:
        if record.kind is MutationKind.CHILD_LIST:
            return self.child_list
        if not self.attributes:
            return False
        return self.attribute_filter is None or record.attribute_name in self.attribute_filter


MutationCallback = Callable[[list[MutationRecord], "MutationObserver"], None]


@dataclass(eq=False)
class MutationObserver:
    """
    Receives batches of mutation records.

    Records queue up as the document changes and are handed to the
    callback when the document delivers mutations.
    """

    callback: MutationCallback
    _targets: dict[int, tuple["Node", ObserveOptions]] = field(default_factory=dict)
    _pending: list[MutationRecord] = field(default_factory=list)

    def observe(
        self,
        target: "Node",
        child_list: bool = True,
        attributes: bool = False,
        attribute_filter: list[str] | None = None,
        subtree: bool = True,
    ) -> None:
        """Start (or update) observation of a target."""
        options = ObserveOptions(
            child_list=child_list,
            attributes=attributes,
            attribute_filter=frozenset(attribute_filter) if attribute_filter else None,
            subtree=subtree,
        )
        self._targets[target.node_id] = (target, options)
        document = target.owner_document
        if document is not None:
            document.register_observer(self)

    def disconnect(self) -> None:
        """Stop observing everything and drop pending records."""
        for target, _ in self._targets.values():
            document = target.owner_document
            if document is not None:
                document.unregister_observer(self)
        self._targets.clear()
        self._pending.clear()

    def take_records(self) -> list[MutationRecord]:
        """Remove and return pending records without invoking the callback."""
        records, self._pending = self._pending, []
        return records

    @property
    def is_observing(self) -> bool:
        return bool(self._targets)

    def enqueue(self, record: MutationRecord) -> bool:
        """Queue a record if any observed target covers it."""
        for target, options in self._targets.values():
            if not options.accepts(record):
                continue
            if record.target is target or (options.subtree and target.contains(record.target)):
                self._pending.append(record)
                return True
        return False

    def deliver(self) -> bool:
        """Invoke the callback with pending records; returns whether any were delivered."""
        records = self.take_records()
        if not records:
            return False
        self.callback(records, self)
        return True
