"""BrandRepository with read operations.

Handles all database reads for Brand entities. Brands are reference data,
so the repository exposes lookups only. Queries slower than a second are
logged through db_logger; failures are logged with the brand ID and re-raised.
"""

import time
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.logging import db_logger, get_logger
from brandshift.models.brand import Brand

logger = get_logger(__name__)


class BrandRepository:
    """Repository for Brand lookups."""

    TABLE_NAME = "brands"
    SLOW_OPERATION_THRESHOLD_MS = 1000

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        self.session = session

    async def list_brands(self, category: str | None = None) -> Sequence[Brand]:
        """List brands ordered by name, optionally filtered by category.

        Args:
            category: Exact category to filter on; all brands when None

        Returns:
            Brands ordered by name

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug("Listing brands", extra={"category": category})

        try:
            stmt = select(Brand).order_by(Brand.name.asc(), Brand.id.asc())
            if category:
                stmt = stmt.where(Brand.category == category)
            result = await self.session.execute(stmt)
            brands = result.scalars().all()

            duration_ms = (time.monotonic() - start_time) * 1000
            logger.debug(
                "Brand list completed",
                extra={
                    "category": category,
                    "count": len(brands),
                    "duration_ms": round(duration_ms, 2),
                },
            )

            if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
                db_logger.slow_query(
                    query=f"SELECT FROM brands WHERE category={category}",
                    duration_ms=duration_ms,
                    table=self.TABLE_NAME,
                )

            return brands

        except SQLAlchemyError as e:
            logger.error(
                "Failed to list brands",
                extra={
                    "category": category,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

    async def get_by_id(self, brand_id: str) -> Brand | None:
        """Get a brand by ID.

        Args:
            brand_id: UUID of the brand

        Returns:
            Brand instance if found, None otherwise

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug("Fetching brand by ID", extra={"brand_id": brand_id})

        try:
            result = await self.session.execute(
                select(Brand).where(Brand.id == brand_id)
            )
            brand = result.scalar_one_or_none()

            duration_ms = (time.monotonic() - start_time) * 1000
            logger.debug(
                "Brand fetch completed",
                extra={
                    "brand_id": brand_id,
                    "found": brand is not None,
                    "duration_ms": round(duration_ms, 2),
                },
            )

            if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
                db_logger.slow_query(
                    query=f"SELECT FROM brands WHERE id={brand_id}",
                    duration_ms=duration_ms,
                    table=self.TABLE_NAME,
                )

            return brand

        except SQLAlchemyError as e:
            logger.error(
                "Failed to fetch brand by ID",
                extra={
                    "brand_id": brand_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise
