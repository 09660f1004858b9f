"""
Custom exception hierarchy for retint.

## Exception Hierarchy

```
RetintError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── ThemeError
│   ├── ThemeNotFoundError
│   └── CatalogInvalidError
├── SecurityError
└── StylesheetAccessError
```

All custom exceptions inherit from `RetintError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

The engine core catches `SecurityError` from the host and treats the sheet
as unreadable, and contains any other page-input failure with
`PageErrorGuard`; everything else here is raised by the outer layers.

See `retint.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import RetintError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorCollector,
    PageErrorGuard,
    collect_errors,
    format_error_for_display,
    wrap_pydantic_error,
)
from .host import SecurityError, StylesheetAccessError
from .theme import CatalogInvalidError, ThemeError, ThemeNotFoundError

__all__ = [
    # Theme
    "CatalogInvalidError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    "ErrorCollector",
    "PageErrorGuard",
    # Base
    "RetintError",
    # Host
    "SecurityError",
    "StylesheetAccessError",
    "ThemeError",
    "ThemeNotFoundError",
    "collect_errors",
    "format_error_for_display",
    # Handlers
    "wrap_pydantic_error",
]
