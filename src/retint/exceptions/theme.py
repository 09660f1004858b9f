"""Theme catalog exceptions."""

from .base import RetintError


class ThemeError(RetintError):
    """Base class for theme lookup and catalog errors."""
    pass


class ThemeNotFoundError(ThemeError):
    """Requested theme id is not in the catalog."""

    def __init__(self, theme_id: str, available: list[str] | None = None):
        """
        Initialize theme not found error.

        Args:
            theme_id: The unknown theme id
            available: Theme ids that do exist (for the hint)
        """
        hint = "Run 'retint themes' to see available themes"
        if available:
            hint = f"Available themes: {', '.join(available)}"

        super().__init__(
            user_message=f"Unknown theme '{theme_id}'",
            technical_message=f"Theme id {theme_id!r} not present in catalog",
            recoverable=True,
            recovery_hint=hint,
        )
        self.theme_id = theme_id
        self.available = available or []


class CatalogInvalidError(ThemeError):
    """Theme catalog data failed to load or validate."""

    def __init__(self, source: str, reason: str):
        """
        Initialize catalog invalid error.

        Args:
            source: Where the catalog was loaded from
            reason: Why loading failed
        """
        super().__init__(
            user_message="Theme catalog is invalid",
            technical_message=f"Failed to load theme catalog from {source}: {reason}",
            recoverable=False,
            recovery_hint=f"Check the catalog file: {source}",
        )
        self.source = source
        self.reason = reason
