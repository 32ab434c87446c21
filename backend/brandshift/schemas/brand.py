"""Pydantic schemas for Brand responses and payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BrandResponse(BaseModel):
    """Schema for a brand returned by the catalog endpoints."""

    id: str = Field(..., description="Brand UUID")
    name: str = Field(..., description="Brand name")
    industry: str = Field(..., description="Industry the brand operates in")
    primary_color: str | None = Field(None, description="Current primary hex color")
    background_color: str | None = Field(
        None, description="Current background hex color"
    )
    website: str | None = Field(None, description="Brand website URL")
    category: str | None = Field(None, description="Catalog category")
    description: str | None = Field(None, description="Short description")
    logo_url: str | None = Field(None, description="Current logo URL")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class BrandPayload(BaseModel):
    """Brand data sent by the client with a generation request.

    Accepts both snake_case and camelCase keys (``primary_color`` or
    ``primaryColor``) since the frontend forwards the catalog record as-is.
    """

    id: str | int | None = Field(None, description="Brand identifier")
    name: str = Field(..., min_length=1, description="Brand name")
    industry: str = Field(..., min_length=1, description="Brand industry")
    primary_color: str | None = Field(None, description="Current primary hex color")
    background_color: str | None = Field(
        None, description="Current background hex color"
    )
    website: str | None = Field(None, description="Brand website URL")
    category: str | None = Field(None, description="Catalog category")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
