"""Per-role palette of transformed colors.

Same source color and role always map to the same output for as long as
the palette lives. Unlike the ColorRegistry it is unbounded and not
theme-scoped, so it must be cleared whenever the theme changes.
"""

import logging

from retint.models import RGBA, ColorRole

logger = logging.getLogger(__name__)

RGBAKey = tuple[float, float, float, float]


def _key_to_text(key: RGBAKey) -> str:
    return ",".join(str(c) for c in key)


def _text_to_key(text: str) -> RGBAKey:
    r, g, b, a = (float(part) for part in text.split(","))
    return (r, g, b, a)


class ColorPalette:
    """Map of (role, source color) to transformed value."""

    def __init__(self) -> None:
        self._palettes: dict[ColorRole, dict[RGBAKey, str]] = {}

    def get(self, role: ColorRole, rgba: RGBA) -> str | None:
        """Get the registered value for a color, if any."""
        palette = self._palettes.get(role)
        if palette is None:
            return None
        return palette.get(rgba.key)

    def register(self, role: ColorRole, rgba: RGBA, value: str) -> str:
        """Register a transformed value and return it."""
        self._palettes.setdefault(role, {})[rgba.key] = value
        return value

    def entries(self, role: ColorRole) -> dict[RGBAKey, str]:
        """Copy of all registered colors for a role."""
        return dict(self._palettes.get(role, {}))

    def stats(self) -> dict[str, int]:
        """Entry counts per role plus a total."""
        counts = {role.value: len(self._palettes.get(role, {})) for role in ColorRole}
        counts["total"] = sum(counts.values())
        return counts

    def clear_role(self, role: ColorRole) -> None:
        """Forget all colors registered for one role."""
        self._palettes.get(role, {}).clear()

    def clear(self) -> None:
        """Forget all registered colors."""
        for palette in self._palettes.values():
            palette.clear()

    def dispose(self) -> None:
        """Drop all per-role maps."""
        self._palettes.clear()
        logger.debug("Palette disposed")

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Export as {role: {"r,g,b,a": value}}."""
        return {
            role.value: {_key_to_text(key): value for key, value in palette.items()}
            for role, palette in self._palettes.items()
        }

    def load_dict(self, data: dict[str, dict[str, str]]) -> None:
        """Replace per-role maps from data produced by to_dict()."""
        for role_name, colors in data.items():
            role = ColorRole(role_name)
            self._palettes[role] = {_text_to_key(k): v for k, v in colors.items()}

    def __len__(self) -> int:
        return sum(len(p) for p in self._palettes.values())
