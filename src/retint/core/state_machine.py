"""State machine for the theme engine lifecycle and event dispatch."""

import logging
from enum import Enum

from retint.protocols import EngineEvent, EngineObserver
from retint.utils import ObserverManager

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle states of a DynamicThemeEngine."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLEARED = "cleared"
    DESTROYED = "destroyed"


class EngineStateMachine:
    """
    Tracks the engine lifecycle and dispatches events to observers.

    The state machine is the single source of truth for whether the
    engine is active, and which theme it is showing. Transitions:

        uninitialized -> active(theme) <-> cleared
        any -> destroyed (terminal)

    Once destroyed, every transition is refused and no further events are
    dispatched.
    """

    def __init__(self) -> None:
        self._state = EngineState.UNINITIALIZED
        self._theme_id: str | None = None
        self._observers = ObserverManager[EngineObserver](observer_type_name="engine")

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def theme_id(self) -> str | None:
        """Id of the theme currently applied, None unless active."""
        return self._theme_id

    @property
    def is_active(self) -> bool:
        return self._state is EngineState.ACTIVE

    @property
    def is_destroyed(self) -> bool:
        return self._state is EngineState.DESTROYED

    def register_observer(self, observer: EngineObserver) -> None:
        """
        Register an observer to receive engine events.

        Args:
            observer: Object implementing EngineObserver protocol
        """
        self._observers.register(observer)

    def unregister_observer(self, observer: EngineObserver) -> None:
        self._observers.unregister(observer)

    def theme_applied(self, theme_id: str) -> bool:
        """
        Move to active with the given theme.

        Returns:
            False if the engine is destroyed and the transition was refused
        """
        if self.is_destroyed:
            return False

        previous = self._state
        self._state = EngineState.ACTIVE
        self._theme_id = theme_id
        logger.debug(f"Engine state {previous.value} -> active({theme_id})")
        self._notify(EngineEvent.THEME_APPLIED, theme_id=theme_id)
        return True

    def cleared(self) -> bool:
        """Move to cleared; the previous theme id is reported with the event."""
        if self.is_destroyed:
            return False

        theme_id = self._theme_id
        self._state = EngineState.CLEARED
        self._theme_id = None
        self._notify(EngineEvent.CLEARED, theme_id=theme_id)
        return True

    def destroyed(self) -> bool:
        """Move to the terminal state; False if already there."""
        if self.is_destroyed:
            return False

        self._state = EngineState.DESTROYED
        self._theme_id = None
        self._notify(EngineEvent.DESTROYED)
        self._observers.clear()
        return True

    def sheet_processed(self, node_id: int, rule_count: int) -> None:
        if not self.is_destroyed:
            self._notify(EngineEvent.SHEET_PROCESSED, node_id=node_id, rule_count=rule_count)

    def loop_detected(self, node_id: int) -> None:
        if not self.is_destroyed:
            self._notify(EngineEvent.LOOP_DETECTED, node_id=node_id)

    def _notify(self, event: EngineEvent, **data) -> None:
        # ObserverManager logs and contains observer exceptions
        self._observers.notify("on_engine_event", event, **data)
