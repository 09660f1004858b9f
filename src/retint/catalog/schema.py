"""Pydantic models for the theme catalog schema.

This module defines the structure of the themes.json catalog file using
Pydantic v2 for type safety and validation.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from retint.models import ThemeProfile


class ThemeCatalogSchema(BaseModel):
    """Root schema for the themes.json catalog file."""

    version: int = Field(default=1, ge=1, description="Catalog format version")
    themes: list[ThemeProfile] = Field(min_length=1, description="Theme presets in display order")

    @field_validator("themes")
    @classmethod
    def validate_unique_ids(cls, v: list[ThemeProfile]) -> list[ThemeProfile]:
        """Reject catalogs that define the same theme id twice."""
        seen: set[str] = set()
        for profile in v:
            if profile.id in seen:
                raise ValueError(f"Duplicate theme id: {profile.id}")
            seen.add(profile.id)
        return v

    @classmethod
    def from_json_file(cls, path: Path) -> "ThemeCatalogSchema":
        """Load catalog from JSON file with validation."""
        with open(path, encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
