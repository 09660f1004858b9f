"""Command-line interface for retint."""

from .main import cli, setup_logging

__all__ = ["cli", "setup_logging"]
