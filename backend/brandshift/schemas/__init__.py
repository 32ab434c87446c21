"""Schemas layer - Pydantic request/response models."""

from brandshift.schemas.brand import BrandPayload, BrandResponse
from brandshift.schemas.color_scheme import (
    ColorScheme,
    GenerateColorSchemeRequest,
    GenerateColorSchemeResponse,
    Preferences,
)
from brandshift.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)

__all__ = [
    "BrandPayload",
    "BrandResponse",
    "ColorScheme",
    "GenerateColorSchemeRequest",
    "GenerateColorSchemeResponse",
    "Preferences",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectUpdate",
]
