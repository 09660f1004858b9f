"""Shared utilities."""

from .observer import ObserverManager
from .persistence import PydanticPersistence

__all__ = [
    "ObserverManager",
    "PydanticPersistence",
]
