"""Engine configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from retint.utils.persistence import PydanticPersistence


class EngineConfig(BaseModel):
    """Tunables for the transform context and the dynamic theme engine."""

    # Registry
    registry_capacity: int = Field(
        default=1000, ge=1, description="Maximum registered colors before LRU eviction"
    )

    # Inline processing
    inline_chunk_size: int = Field(
        default=200, ge=1, description="Inline-style targets processed per animation frame"
    )

    # Loop guard
    loop_window_ms: float = Field(
        default=500.0,
        gt=0,
        description="Mutations closer together than this count toward a loop",
    )
    max_loop_cycles: int = Field(
        default=4, ge=1, description="Cycle count at which a node is skipped"
    )
    loop_warning_interval_ms: float = Field(
        default=5000.0, ge=0, description="Minimum time between loop warnings per node"
    )

    # SVG
    small_svg_px: float = Field(
        default=32.0, gt=0, description="Logos up to this width and height are inverted"
    )

    # Contrast repair
    default_min_contrast: float = Field(
        default=4.5, gt=1, description="Contrast ratio used when a theme sets none"
    )
    contrast_step: int = Field(
        default=15, ge=1, le=255, description="Per-channel step for text contrast repair"
    )
    contrast_max_iterations: int = Field(
        default=20, ge=1, description="Maximum contrast repair steps"
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "EngineConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.retint/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = Path.home() / ".retint" / "config.json"

        return PydanticPersistence.load_json_or_default(path, cls)
