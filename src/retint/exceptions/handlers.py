"""
Centralized error handling utilities.

The core engine never raises for bad page input; it degrades to "no
transformation". `PageErrorGuard` marks those boundaries (one style rule,
one stylesheet, one inline style). The remaining helpers serve the outer
layers (catalog loading, config files, CLI), which translate low-level
errors into RetintError subclasses carrying user messages and recovery
hints.

## Handling Patterns

| Pattern | Code |
|---------|------|
| Try multiple ops, collect errors | `collector = collect_errors("rewrite sheets"); with collector.try_operation(...): ...` |
| Skip one bad unit of page input | `with PageErrorGuard(f"rule {selector!r}") as guard: ...` |

## Converting Pydantic Errors

```python
from retint.exceptions import wrap_pydantic_error

try:
    config = EngineConfig.model_validate_json(path.read_text())
except ValidationError as e:
    raise wrap_pydantic_error(e, str(path)) from e
```
"""

import logging

from .base import RetintError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


class PageErrorGuard:
    """
    Contain a failure inside one unit of page work.

    Anything raised inside the block is logged and suppressed, so one
    malformed rule or style attribute only loses its own transformation.
    Interrupts and other non-``Exception`` exits are never caught.

    Example:
        ```python
        with PageErrorGuard(f"stylesheet {href}") as guard:
            css = process_stylesheet(sheet, theme)
        if guard.failed:
            css = ""
        ```
    """

    def __init__(self, operation: str, log_level: int = logging.DEBUG):
        self.operation = operation
        self.log_level = log_level
        self.error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __enter__(self) -> "PageErrorGuard":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None or not issubclass(exc_type, Exception):
            return False

        self.error = exc_val
        if isinstance(exc_val, RetintError):
            detail = exc_val.technical_message
        else:
            detail = f"{exc_type.__name__}: {exc_val}"
        logger.log(self.log_level, f"Skipped {self.operation}: {detail}")
        return True


def wrap_pydantic_error(error: Exception, file_path: str) -> RetintError:
    """
    Convert Pydantic validation errors to retint exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", ("unknown",)))
            return ConfigValidationError(
                field=field,
                value=first_error.get("input"),
                error_msg=first_error.get("msg", "validation failed"),
                file_path=file_path,
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get("loc", ("unknown",)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            combined_msg = f"{len(errors)} validation errors:\n" + "\n".join(error_lines)
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=combined_msg,
                file_path=file_path,
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, str | None]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, RetintError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Example:
        ```python
        collector = collect_errors("rewrite stylesheets")

        for path in paths:
            with collector.try_operation(f"rewrite {path}"):
                rewrite(path)

        if collector.has_errors:
            print(collector.get_summary())
        ```
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def try_operation(self, sub_operation: str) -> "ErrorCollector._OperationContext":
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation
        """
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """Get a multi-line summary of collected errors."""
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        total = self.error_count + self.success_count
        summary = f"Failed {self.error_count} of {total} operations:\n"
        for sub_op, error in self.errors:
            if isinstance(error, RetintError):
                summary += f"  - {sub_op}: {error.user_message}\n"
            else:
                summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            logger.debug(f"{self.collector.operation}: {self.sub_operation} failed: {exc_val}")
            self.collector.errors.append((self.sub_operation, exc_val))
            return True
