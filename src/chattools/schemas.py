"""Pydantic schemas for YAML filter configuration files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .colors import TextColor, resolve_color
from .components import TextDecoration


class FilterConfigSchema(BaseModel):
    """Schema for a filter configuration YAML file.

    Example::

        gradients: false
        legacy_colors: true
        blocked_decorations: [obfuscated]
        blocked_colors: [black, "#101010"]
        block_close_hex: true
        luminance_threshold: 16
    """

    gradients: bool = True
    hex_colors: bool = True
    standard_colors: bool = True
    legacy_colors: bool = False
    advanced_transformations: bool = False
    blocked_decorations: list[TextDecoration] = Field(default_factory=list[TextDecoration])
    blocked_colors: list[TextColor] = Field(default_factory=list[TextColor])
    block_close_hex: bool = False
    luminance_threshold: int = Field(default=0, ge=0, le=255)

    @field_validator("blocked_decorations", mode="before")
    @classmethod
    def parse_decorations(cls, v: Any) -> list[TextDecoration]:
        """Accept decoration names and aliases (e.g. 'b', 'em')."""
        if v is None:
            return []
        names = v if isinstance(v, list) else [v]
        decorations: list[TextDecoration] = []
        for name in names:  # type: ignore[union-attr]
            decoration = TextDecoration.from_name(str(name))
            if decoration is None:
                raise ValueError(f"Unknown text decoration: '{name}'")
            decorations.append(decoration)
        return decorations

    @field_validator("blocked_colors", mode="before")
    @classmethod
    def parse_colors(cls, v: Any) -> list[TextColor]:
        """Accept color names, CSS names and hex values."""
        if v is None:
            return []
        values = v if isinstance(v, list) else [v]
        colors: list[TextColor] = []
        for value in values:  # type: ignore[union-attr]
            color = value if isinstance(value, TextColor) else resolve_color(str(value))
            if color is None:
                raise ValueError(f"Unknown color: '{value}'")
            colors.append(color)
        return colors
