"""Events emitted by the theme engine.

- Lifecycle events: theme applied, styles cleared, engine destroyed
- Processing events: a stylesheet was rewritten, a mutation loop was detected
"""

from enum import Enum


class EngineEvent(Enum):
    """Events from the dynamic theme engine."""

    THEME_APPLIED = "theme_applied"      # update_theme() finished applying a profile
    CLEARED = "cleared"                  # Injected styles removed, engine idle
    DESTROYED = "destroyed"              # Engine torn down (terminal)
    SHEET_PROCESSED = "sheet_processed"  # Override generated for one stylesheet source
    LOOP_DETECTED = "loop_detected"      # A node kept re-mutating and is being skipped
