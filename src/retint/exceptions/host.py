"""Exceptions raised by the document host."""

from .base import RetintError


class SecurityError(RetintError):
    """Access to a resource was refused by the host (e.g. cross-origin sheet rules)."""

    def __init__(self, resource: str):
        """
        Initialize security error.

        Args:
            resource: Description of the refused resource
        """
        super().__init__(
            user_message=f"Access to {resource} is not allowed",
            technical_message=f"SecurityError: cannot access {resource}",
            recoverable=True,
        )
        self.resource = resource


class StylesheetAccessError(RetintError):
    """A stylesheet could not be read."""

    def __init__(self, source: str, original_error: str | None = None):
        """
        Initialize stylesheet access error.

        Args:
            source: Path or href of the stylesheet
            original_error: Underlying error message, if any
        """
        technical = f"Failed to read stylesheet {source}"
        if original_error:
            technical += f": {original_error}"

        super().__init__(
            user_message=f"Could not read stylesheet {source}",
            technical_message=technical,
            recoverable=True,
            recovery_hint="Check that the file exists and is readable",
        )
        self.source = source
        self.original_error = original_error
