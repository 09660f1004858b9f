"""Observer protocol for theme engine events."""

from typing import Any, Protocol, runtime_checkable

from .events import EngineEvent


@runtime_checkable
class EngineObserver(Protocol):
    """
    Observer that receives theme engine events.

    Lets hosts (a popup, a test harness, the pipeline) follow the engine
    without the engine knowing about them.
    """

    def on_engine_event(self, event: EngineEvent, **data: Any) -> None:
        """
        Handle an engine event.

        Args:
            event: The type of engine event
            **data: Event payload. THEME_APPLIED and CLEARED carry
                ``theme_id``; SHEET_PROCESSED carries ``node_id`` and
                ``rule_count``; LOOP_DETECTED carries ``node_id``.
        """
        ...
