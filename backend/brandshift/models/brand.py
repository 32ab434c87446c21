"""Brand model for the rebranding catalog.

Brands are reference data: seeded externally (see scripts/seed_brands.py)
and read-only to the color scheme generation flow.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brandshift.core.database import Base

if TYPE_CHECKING:
    from brandshift.models.project import Project


class Brand(Base):
    """Catalog entry for a company or product that can be rebranded.

    Attributes:
        id: UUID primary key
        name: Brand display name
        industry: Industry the brand operates in
        primary_color: Current primary color as a hex string, if known
        background_color: Current background color as a hex string, if known
        website: Brand website URL
        category: Catalog category used by the list filter
        description: Short free-text description
        logo_url: URL of the current logo
        created_at: Timestamp when the brand was created
        updated_at: Timestamp when the brand was last updated
    """

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    industry: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    primary_color: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )

    background_color: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )

    website: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
    )

    category: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    logo_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
        onupdate=lambda: datetime.now(UTC),
    )

    projects: Mapped[list["Project"]] = relationship(
        "Project",
        back_populates="brand",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Brand(id={self.id!r}, name={self.name!r}, category={self.category!r})>"
