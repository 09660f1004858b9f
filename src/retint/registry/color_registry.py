"""Theme-scoped registry of transformed colors.

Once a color has been transformed for a role and theme, later uses of
the same source color are answered from the registry instead of being
recomputed. This keeps every element on the page consistent and avoids
rounding drift between repeated transformations.

Entries are keyed by the exact RGBA quadruple; a lookup only hits when
the stored role and theme id also match. The registry is bounded and
evicts the least-recently-used entry when full.
"""

import itertools
import logging
import time
from collections.abc import Callable, Iterable

from pydantic import BaseModel, Field

from retint.models import RGBA, ColorRole

logger = logging.getLogger(__name__)

RGBAKey = tuple[float, float, float, float]


class RegisteredColor(BaseModel):
    """A registered transformation with usage metadata."""

    original_rgb: RGBA
    original_hex: str
    transformed_hex: str
    role: ColorRole
    theme_id: str
    timestamp: float = Field(description="Last access time (monotonic seconds)")
    usage_count: int = Field(default=1, ge=1)
    sequence: int = Field(default=0, description="Access order, breaks timestamp ties")


class ColorRegistry:
    """
    LRU-bounded registry of color transformations.

    Usage:
        ```python
        registry = ColorRegistry()
        registry.register(rgba, "#ffffff", "#1c1e1f", ColorRole.BACKGROUND, "dark")
        registry.get_transformed(rgba, ColorRole.BACKGROUND, "dark")  # "#1c1e1f"
        ```
    """

    def __init__(self, max_size: int = 1000, clock: Callable[[], float] = time.monotonic):
        """
        Create a registry.

        Args:
            max_size: Maximum entries; the oldest is evicted beyond this
            clock: Source of access timestamps
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self.max_size = max_size
        self._clock = clock
        self._ticks = itertools.count()
        self._entries: dict[RGBAKey, RegisteredColor] = {}
        self._theme_index: dict[str, set[RGBAKey]] = {}
        self._reset_stats()

    def _reset_stats(self) -> None:
        self._hits = 0
        self._misses = 0
        self._registrations = 0
        self._evictions = 0

    def register(
        self,
        original_rgb: RGBA,
        original_hex: str,
        transformed_hex: str,
        role: ColorRole,
        theme_id: str,
    ) -> None:
        """Register a transformation, evicting the oldest entry if the registry is full."""
        key = original_rgb.key
        previous = self._entries.get(key)

        if previous is None and len(self._entries) >= self.max_size:
            self._evict_lru()

        if previous is not None and previous.theme_id != theme_id:
            self._theme_index.get(previous.theme_id, set()).discard(key)

        self._entries[key] = RegisteredColor(
            original_rgb=original_rgb,
            original_hex=original_hex,
            transformed_hex=transformed_hex,
            role=role,
            theme_id=theme_id,
            timestamp=self._clock(),
            usage_count=previous.usage_count + 1 if previous is not None else 1,
            sequence=next(self._ticks),
        )
        self._theme_index.setdefault(theme_id, set()).add(key)
        self._registrations += 1

    def register_batch(
        self, colors: Iterable[tuple[RGBA, str, str, ColorRole, str]]
    ) -> None:
        """Register several transformations at once."""
        for original_rgb, original_hex, transformed_hex, role, theme_id in colors:
            self.register(original_rgb, original_hex, transformed_hex, role, theme_id)

    def get_transformed(self, original_rgb: RGBA, role: ColorRole, theme_id: str) -> str | None:
        """
        Look up a registered transformation.

        Returns:
            The transformed hex, or None when the color is unknown or was
            registered for another role or theme
        """
        entry = self._entries.get(original_rgb.key)

        if entry is None or entry.role != role or entry.theme_id != theme_id:
            self._misses += 1
            return None

        entry.timestamp = self._clock()
        entry.sequence = next(self._ticks)
        entry.usage_count += 1
        self._hits += 1
        return entry.transformed_hex

    def get_entry(self, original_rgb: RGBA) -> RegisteredColor | None:
        """Get the full entry for a color regardless of role and theme."""
        return self._entries.get(original_rgb.key)

    def clear_theme(self, theme_id: str) -> None:
        """Remove every entry registered for one theme."""
        keys = self._theme_index.pop(theme_id, None)
        if not keys:
            return

        for key in keys:
            self._entries.pop(key, None)
        logger.debug(f"Cleared {len(keys)} registered colors for theme {theme_id}")

    def clear(self) -> None:
        """Remove all entries and reset statistics."""
        self._entries.clear()
        self._theme_index.clear()
        self._reset_stats()

    def _evict_lru(self) -> None:
        oldest_key = min(
            self._entries,
            key=lambda k: (self._entries[k].timestamp, self._entries[k].sequence),
            default=None,
        )
        if oldest_key is None:
            return

        entry = self._entries.pop(oldest_key)
        self._theme_index.get(entry.theme_id, set()).discard(oldest_key)
        self._evictions += 1
        logger.debug(f"Evicted {entry.original_hex} ({entry.role.value}/{entry.theme_id})")

    def stats(self) -> dict[str, float]:
        """Hit/miss counts, hit rate (percent), registrations, evictions and size."""
        lookups = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": (self._hits / lookups) * 100 if lookups else 0.0,
            "registrations": self._registrations,
            "evictions": self._evictions,
            "size": len(self._entries),
            "capacity": self.max_size,
        }

    def to_dict(self) -> dict[str, dict]:
        """Export entries keyed by "r,g,b,a"."""
        return {
            ",".join(str(c) for c in key): entry.model_dump(mode="json")
            for key, entry in self._entries.items()
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, original_rgb: RGBA) -> bool:
        return original_rgb.key in self._entries
