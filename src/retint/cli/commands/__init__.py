"""CLI commands for retint."""

from .color import transform
from .css import base_css, css
from .themes import matrix, themes

__all__ = ["base_css", "css", "matrix", "themes", "transform"]
