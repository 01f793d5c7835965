"""Startup work that runs once, after the first successful store connection."""

import logging

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from bookstore.config import settings
from bookstore.database import CATALOGS, COUPONS, PRODUCTS, USERS
from bookstore.seed.planner import seed_if_empty

logger = logging.getLogger(__name__)

# (collection, field) pairs that must stay unique.
UNIQUE_KEYS: tuple[tuple[str, str], ...] = (
    (USERS, "email"),
    (PRODUCTS, "isbn"),
    (CATALOGS, "code"),
    (COUPONS, "code"),
)


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Create the unique indexes the API relies on.  Safe to repeat."""
    for collection, key in UNIQUE_KEYS:
        await db[collection].create_index(key, unique=True)


async def bootstrap(db: AsyncDatabase) -> None:
    """Seed an empty store, ensure indexes, and log the outcome.  Never raises store errors."""
    try:
        report = await seed_if_empty(db, password=settings.seed_user_password)
        await ensure_indexes(db)
    except PyMongoError:
        logger.exception("Database initialization error")
        return

    if report.skipped:
        logger.info("Existing data found, sample data not created")
    elif report.failed_stage is not None:
        logger.error(
            "Database initialized with partial sample data (failed at %s)", report.failed_stage
        )
    else:
        logger.info("Database initialized successfully")
