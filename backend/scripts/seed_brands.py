#!/usr/bin/env python3
"""Seed the brand catalog.

Usage:
    1. Set DATABASE_URL in backend/.env (or the environment)
    2. Apply migrations: cd backend && alembic upgrade head
    3. Run: cd backend && python scripts/seed_brands.py

Brands that already exist (matched by name) are left untouched, so the
script can be re-run safely.
"""

import asyncio
import sys
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import select  # noqa: E402

from brandshift.core.database import db_manager, transaction  # noqa: E402
from brandshift.core.logging import get_logger, setup_logging  # noqa: E402
from brandshift.models import Brand  # noqa: E402

setup_logging()
logger = get_logger("seed_brands")

CATALOG: list[dict[str, str]] = [
    {
        "name": "Coca-Cola",
        "industry": "Beverages",
        "primary_color": "#F40009",
        "background_color": "#FFFFFF",
        "website": "https://www.coca-cola.com",
        "category": "food-beverage",
    },
    {
        "name": "Starbucks",
        "industry": "Coffee & Restaurants",
        "primary_color": "#00704A",
        "background_color": "#FFFFFF",
        "website": "https://www.starbucks.com",
        "category": "food-beverage",
    },
    {
        "name": "Spotify",
        "industry": "Music Streaming",
        "primary_color": "#1DB954",
        "background_color": "#191414",
        "website": "https://www.spotify.com",
        "category": "technology",
    },
    {
        "name": "Airbnb",
        "industry": "Travel & Hospitality",
        "primary_color": "#FF5A5F",
        "background_color": "#FFFFFF",
        "website": "https://www.airbnb.com",
        "category": "travel",
    },
    {
        "name": "Slack",
        "industry": "Workplace Software",
        "primary_color": "#4A154B",
        "background_color": "#FFFFFF",
        "website": "https://slack.com",
        "category": "technology",
    },
    {
        "name": "IKEA",
        "industry": "Home Furnishings",
        "primary_color": "#0058A3",
        "background_color": "#FFDB00",
        "website": "https://www.ikea.com",
        "category": "retail",
    },
    {
        "name": "Patagonia",
        "industry": "Outdoor Apparel",
        "primary_color": "#000000",
        "background_color": "#FFFFFF",
        "website": "https://www.patagonia.com",
        "category": "retail",
    },
    {
        "name": "Duolingo",
        "industry": "Education",
        "primary_color": "#58CC02",
        "background_color": "#FFFFFF",
        "website": "https://www.duolingo.com",
        "category": "education",
    },
]


async def seed_brands() -> int:
    """Insert catalog brands that are not in the database yet.

    Returns:
        Number of brands inserted
    """
    db_manager.init_db()
    try:
        async with db_manager.session_factory() as session:
            result = await session.execute(select(Brand.name))
            existing = set(result.scalars().all())

            new_brands = [
                Brand(**entry) for entry in CATALOG if entry["name"] not in existing
            ]
            async with transaction(session, table="brands"):
                session.add_all(new_brands)

        logger.info(
            "Brand catalog seeded",
            extra={
                "inserted": len(new_brands),
                "skipped": len(CATALOG) - len(new_brands),
            },
        )
        return len(new_brands)
    finally:
        await db_manager.close()


if __name__ == "__main__":
    asyncio.run(seed_brands())
