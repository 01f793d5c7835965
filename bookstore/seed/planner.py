"""Seed planner: fill an empty store with interlinked sample documents.

Stages run strictly in order because each one consumes what the previous
stage inserted::

    catalogs -> products -> users -> orders -> invoices -> coupons -> reviews

Inserts are not transactional.  If a stage fails, the stages before it stay
in the store and the emptiness check will skip every later run.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from bookstore.database import (
    CATALOGS,
    COUPONS,
    INVOICES,
    ORDERS,
    PRODUCTS,
    REVIEWS,
    TRACKED_COLLECTIONS,
    USERS,
)
from bookstore.seed import data
from bookstore.services.auth import hash_password
from bookstore.services.orders import build_invoice, build_order

logger = logging.getLogger(__name__)


class SeedDataError(ValueError):
    """Raised when the sample data references something that does not exist."""


@dataclass
class SeedReport:
    """Outcome of one :func:`seed_if_empty` call."""

    skipped: bool = False
    completed: list[str] = field(default_factory=list)
    inserted: dict[str, int] = field(default_factory=dict)
    failed_stage: str | None = None

    @property
    def succeeded(self) -> bool:
        return not self.skipped and self.failed_stage is None

    def record(self, stage: str, count: int) -> None:
        self.completed.append(stage)
        self.inserted[stage] = count
        logger.info("Sample %s created (%d)", stage, count)


# ---------------------------------------------------------------------------
# Emptiness check
# ---------------------------------------------------------------------------


async def count_documents(db: AsyncDatabase) -> dict[str, int]:
    """Count every tracked collection concurrently."""
    counts = await asyncio.gather(
        *(db[name].count_documents({}) for name in TRACKED_COLLECTIONS)
    )
    return dict(zip(TRACKED_COLLECTIONS, counts, strict=True))


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


async def insert_catalogs(db: AsyncDatabase) -> list[str]:
    """Insert the sample catalogs and return their codes."""
    docs = [dict(catalog) for catalog in data.CATALOGS]
    await db[CATALOGS].insert_many(docs)
    return [doc["code"] for doc in docs]


async def insert_products(db: AsyncDatabase, catalog_codes: list[str]) -> list[dict[str, Any]]:
    """Insert the sample products and return them with their ``_id``."""
    docs = [dict(product) for product in data.PRODUCTS]
    for doc in docs:
        if doc["catalog"] not in catalog_codes:
            raise SeedDataError(f"Product {doc['isbn']} references unknown catalog {doc['catalog']!r}")
    await db[PRODUCTS].insert_many(docs)
    return docs


async def insert_users(db: AsyncDatabase, password_hash: str) -> list[dict[str, Any]]:
    """Insert the sample users, all sharing *password_hash*."""
    now = datetime.now(UTC)
    docs = [
        {**user, "password_hash": password_hash, "created_at": now} for user in data.USERS
    ]
    await db[USERS].insert_many(docs)
    return docs


def pick_order_placers(users: list[dict[str, Any]]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the second and third users, falling back to the first."""
    if not users:
        raise SeedDataError("At least one user is required to place sample orders")
    first = users[1] if len(users) > 1 else users[0]
    second = users[2] if len(users) > 2 else users[0]
    return first, second


def plan_orders(
    products: list[dict[str, Any]],
    placers: tuple[dict[str, Any], dict[str, Any]],
    now: datetime,
) -> list[dict[str, Any]]:
    """Build one order per placer from ``data.ORDER_PLAN``."""
    orders = []
    for placer, plan in zip(placers, data.ORDER_PLAN, strict=True):
        lines = [(products[index], quantity) for index, quantity in plan["lines"]]
        orders.append(
            build_order(
                placer,
                lines,
                payment_method=plan["payment_method"],
                status=plan["status"],
                now=now,
            )
        )
    return orders


def plan_invoices(
    orders: list[dict[str, Any]],
    placers: tuple[dict[str, Any], dict[str, Any]],
) -> list[dict[str, Any]]:
    """Derive exactly one invoice per order; only the first gets a discount."""
    return [
        build_invoice(
            order,
            placer,
            discount_amount=data.FIRST_INVOICE_DISCOUNT if index == 0 else 0,
        )
        for index, (order, placer) in enumerate(zip(orders, placers, strict=True))
    ]


async def insert_coupons(db: AsyncDatabase) -> list[dict[str, Any]]:
    docs = [dict(coupon) for coupon in data.COUPONS]
    await db[COUPONS].insert_many(docs)
    return docs


async def insert_reviews(
    db: AsyncDatabase, products: list[dict[str, Any]], now: datetime
) -> list[dict[str, Any]]:
    """Insert the sample reviews, keyed by product ISBN rather than ``_id``."""
    docs = [
        {
            "rating": review["rating"],
            "comment": review["comment"],
            "book_id": products[review["product"]]["isbn"],
            "created_at": now,
        }
        for review in data.REVIEWS
    ]
    await db[REVIEWS].insert_many(docs)
    return docs


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


async def seed_if_empty(
    db: AsyncDatabase,
    *,
    password: str,
    now: datetime | None = None,
) -> SeedReport:
    """Insert the sample data set if, and only if, every tracked collection is empty.

    Store errors are logged and reported, never raised, once inserting has
    started.  Errors from the emptiness check itself propagate.
    """
    counts = await count_documents(db)
    total = sum(counts.values())
    if total:
        logger.info("Store already holds %d documents, skipping sample data", total)
        return SeedReport(skipped=True)

    now = now or datetime.now(UTC)
    report = SeedReport()
    stage = CATALOGS
    try:
        catalog_codes = await insert_catalogs(db)
        report.record(CATALOGS, len(catalog_codes))

        stage = PRODUCTS
        products = await insert_products(db, catalog_codes)
        report.record(PRODUCTS, len(products))

        stage = USERS
        # One hash for every seeded account; bcrypt runs off the event loop.
        password_hash = await asyncio.to_thread(hash_password, password)
        users = await insert_users(db, password_hash)
        report.record(USERS, len(users))

        stage = ORDERS
        placers = pick_order_placers(users)
        orders = plan_orders(products, placers, now)
        await db[ORDERS].insert_many(orders)
        report.record(ORDERS, len(orders))

        stage = INVOICES
        invoices = plan_invoices(orders, placers)
        await db[INVOICES].insert_many(invoices)
        report.record(INVOICES, len(invoices))

        stage = COUPONS
        coupons = await insert_coupons(db)
        report.record(COUPONS, len(coupons))

        stage = REVIEWS
        reviews = await insert_reviews(db, products, now)
        report.record(REVIEWS, len(reviews))
    except (PyMongoError, SeedDataError):
        report.failed_stage = stage
        logger.exception("Sample data seeding failed at stage %r", stage)
        return report

    logger.info("Sample data seeded")
    return report
