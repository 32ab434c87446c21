"""Pydantic schemas for AI color scheme generation.

Defines the generation request body, the caller preferences, the typed
ColorScheme used by strict validation, and the response envelope.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brandshift.schemas.brand import BrandPayload

# #RGB, #RRGGBB or #RRGGBBAA
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

REQUIRED_COLOR_KEYS = ("primary", "secondary", "accent", "background", "text")


class Preferences(BaseModel):
    """Optional style/mood hints that steer generation."""

    style: str | None = Field(None, description="Desired visual style")
    mood: str | None = Field(None, description="Desired mood")


class GenerateColorSchemeRequest(BaseModel):
    """Request body for POST /api/ai/generate-color-scheme.

    ``brand`` is declared optional so a missing brand can be rejected with
    a 400 by the endpoint rather than a 422 from request validation.
    """

    brand: BrandPayload | None = Field(None, description="Brand to rebrand")
    preferences: Preferences | None = Field(None, description="Style/mood hints")


class ColorScheme(BaseModel):
    """Typed color scheme with hex-format validation."""

    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    additional_colors: list[str] = Field(default_factory=list, alias="additionalColors")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("primary", "secondary", "accent", "background", "text")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        """Validate a single color is a hex code."""
        if not HEX_COLOR_PATTERN.match(v):
            raise ValueError(f"'{v}' is not a hex color code")
        return v

    @field_validator("additional_colors")
    @classmethod
    def validate_additional_hex(cls, v: list[str]) -> list[str]:
        """Validate every additional color is a hex code."""
        invalid = [color for color in v if not HEX_COLOR_PATTERN.match(color)]
        if invalid:
            raise ValueError(f"Not hex color codes: {', '.join(invalid)}")
        return v


class GenerateColorSchemeResponse(BaseModel):
    """Envelope returned by the generation endpoint.

    In the default (lenient) mode ``data`` is the parsed JSON object exactly
    as the model returned it, which may be empty or missing keys.
    """

    success: bool = Field(..., description="Whether generation completed")
    data: dict[str, Any] | None = Field(None, description="Generated color scheme")
    message: str | None = Field(None, description="Failure message")
