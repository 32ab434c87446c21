"""Brand catalog lookups.

Provides business logic for Brand reads, separating concerns from API routes.
A missing brand is reported as BrandNotFoundError so endpoints can map it
to a 404 outcome.
"""

import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.logging import get_logger
from brandshift.models.brand import Brand
from brandshift.repositories.brand import BrandRepository

logger = get_logger(__name__)


def is_valid_id(value: str) -> bool:
    """Check that an identifier is a UUID before it reaches the database.

    Primary keys are PostgreSQL UUID columns, and asyncpg rejects any
    other string with a DataError instead of matching no rows.
    """
    try:
        uuid.UUID(value)
    except (TypeError, ValueError):
        return False
    return True


class BrandServiceError(Exception):
    """Base exception for BrandService errors."""

    pass


class BrandNotFoundError(BrandServiceError):
    """Raised when a brand does not exist."""

    def __init__(self, brand_id: str):
        self.brand_id = brand_id
        super().__init__(f"Brand not found: {brand_id}")


class BrandService:
    """Service for browsing the brand catalog."""

    def __init__(self, session: AsyncSession) -> None:
        self.repository = BrandRepository(session)

    async def list_brands(self, category: str | None = None) -> Sequence[Brand]:
        """List brands ordered by name, filtered by category when given."""
        return await self.repository.list_brands(category=category)

    async def get_brand(self, brand_id: str) -> Brand:
        """Get a brand by ID.

        Raises:
            BrandNotFoundError: If no brand has this ID
        """
        if not is_valid_id(brand_id):
            logger.info("Malformed brand ID", extra={"brand_id": brand_id})
            raise BrandNotFoundError(brand_id)
        brand = await self.repository.get_by_id(brand_id)
        if brand is None:
            logger.info("Brand not found", extra={"brand_id": brand_id})
            raise BrandNotFoundError(brand_id)
        return brand
