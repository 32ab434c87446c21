"""Pydantic schemas for Project validation.

Defines request/response models for Project API endpoints with validation rules.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brandshift.schemas.color_scheme import Preferences

VALID_PROJECT_STATUSES = frozenset({"draft", "in_progress", "completed", "archived"})


def _validate_status(v: str) -> str:
    if v not in VALID_PROJECT_STATUSES:
        raise ValueError(
            f"Invalid status '{v}'. Must be one of: {', '.join(sorted(VALID_PROJECT_STATUSES))}"
        )
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a new rebranding project."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project name",
    )
    brand_id: str = Field(..., min_length=1, description="Brand being rebranded")
    user_id: str | None = Field(None, description="Owning user")
    status: str = Field(default="draft", description="Project status")
    preferences: Preferences = Field(
        default_factory=Preferences,
        description="Style/mood preferences for generation",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and normalize project name."""
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _validate_status(v)


class ProjectUpdate(BaseModel):
    """Schema for a partial project update. Only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    status: str | None = Field(None)
    preferences: Preferences | None = Field(None)
    color_scheme: dict[str, Any] | None = Field(
        None, description="Color scheme chosen for the project"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _validate_status(v)


class ProjectResponse(BaseModel):
    """Schema for project responses."""

    id: str
    name: str
    user_id: str | None
    brand_id: str
    status: str
    color_scheme: dict[str, Any]
    preferences: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectListResponse(BaseModel):
    """Schema for a paginated project list."""

    items: list[ProjectResponse]
    total: int
    limit: int
    offset: int
