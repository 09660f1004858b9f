"""Detection of nodes caught in a restyle feedback loop.

Reactive frameworks may rewrite an element's inline style every time the
engine rewrites it. The guard counts how quickly a node comes back and
stops processing it while it keeps cycling.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class _NodeHistory:
    last_mutation: float
    cycles: int = 0
    warned_at: float | None = None


class LoopGuard:
    """
    Per-node mutation rate tracking, keyed by node handle.

    Every check records the node's mutation time. A mutation that arrives
    within ``window_ms`` of the previous one increments the node's cycle
    counter; once the counter reaches ``max_cycles`` the node is skipped.
    A mutation arriving after a quiet period of at least ``window_ms``
    resets the counter and is processed normally.

    Example:
        With the defaults (500 ms, 4 cycles), five mutations 100 ms apart
        process the first four and skip the fifth.
    """

    def __init__(
        self,
        clock: Callable[[], float],
        window_ms: float = 500.0,
        max_cycles: int = 4,
        warning_interval_ms: float = 5000.0,
        on_loop: Callable[[int], None] | None = None,
    ):
        """
        Args:
            clock: Current time in milliseconds
            window_ms: Mutations closer together than this count as a cycle
            max_cycles: Cycle count at which the node is skipped
            warning_interval_ms: Minimum time between warnings for one node
            on_loop: Called with the node handle whenever a warning is logged
        """
        self._clock = clock
        self._window_ms = window_ms
        self._max_cycles = max_cycles
        self._warning_interval_ms = warning_interval_ms
        self._on_loop = on_loop
        self._history: dict[int, _NodeHistory] = {}

    def should_skip(self, node_id: int) -> bool:
        """Record a mutation of node_id and report whether to skip it."""
        now = self._clock()
        history = self._history.get(node_id)

        if history is None:
            self._history[node_id] = _NodeHistory(last_mutation=now)
            return False

        if now - history.last_mutation < self._window_ms:
            history.cycles += 1
        else:
            history.cycles = 0
        history.last_mutation = now

        if history.cycles < self._max_cycles:
            return False

        if history.warned_at is None or now - history.warned_at >= self._warning_interval_ms:
            history.warned_at = now
            logger.warning(
                f"Style loop detected on node {node_id} "
                f"({history.cycles} rewrites within {self._window_ms:.0f} ms), skipping"
            )
            if self._on_loop is not None:
                self._on_loop(node_id)
        return True

    def cycles(self, node_id: int) -> int:
        history = self._history.get(node_id)
        return history.cycles if history else 0

    def forget(self, node_id: int) -> None:
        """Drop a node's history (called when the node is detached)."""
        self._history.pop(node_id, None)

    def clear(self) -> None:
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._history
