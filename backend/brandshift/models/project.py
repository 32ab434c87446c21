"""Project model for in-progress rebrandings.

A Project ties a user to the brand being rebranded and keeps the
generated assets chosen so far (currently the color scheme).
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brandshift.core.database import Base

if TYPE_CHECKING:
    from brandshift.models.brand import Brand
    from brandshift.models.user import User


class Project(Base):
    """Rebranding project.

    Attributes:
        id: UUID primary key
        name: Project name
        user_id: Owning user (nullable, kept when the user is deleted)
        brand_id: Brand being rebranded
        status: One of 'draft', 'in_progress', 'completed', 'archived'
        color_scheme: JSONB color scheme saved for the project
        preferences: JSONB style/mood preferences used for generation
        created_at: Timestamp when project was created
        updated_at: Timestamp when project was last updated

    Example color_scheme structure:
        {
            "primary": "#1A73E8",
            "secondary": "#34A853",
            "accent": "#FBBC05",
            "background": "#FFFFFF",
            "text": "#202124",
            "additionalColors": ["#EA4335"]
        }
    """

    __tablename__ = "projects"

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

    user_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    brand_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("brands.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="draft",
        server_default=text("'draft'"),
        index=True,
    )

    color_scheme: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        server_default=text("'{}'::jsonb"),
    )

    preferences: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        default=dict,
        server_default=text("'{}'::jsonb"),
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

    # Relationships
    brand: Mapped["Brand"] = relationship(
        "Brand",
        back_populates="projects",
    )

    user: Mapped["User | None"] = relationship(
        "User",
        back_populates="projects",
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id!r}, name={self.name!r}, status={self.status!r})>"
