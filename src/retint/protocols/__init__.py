"""Events and observer protocols for the theme engine."""

from .events import EngineEvent
from .observers import EngineObserver

__all__ = ["EngineEvent", "EngineObserver"]
