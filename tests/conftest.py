"""Shared pytest fixtures for the bookstore API test suite.

The module-level environment setup runs at collection time, before any
``bookstore.*`` module is imported, so pydantic-settings never needs a real
``.env`` file.

Fixture scopes
--------------
* ``db``: function: an empty in-memory database.
* ``async_client``: function: httpx client wrapping the full FastAPI app,
  with ``app.state.store`` pointing at ``db``.
* ``admin`` / ``customer``: function: user documents inserted into ``db``.
* ``admin_headers`` / ``auth_headers``: function: Bearer headers for them.
* ``books``: function: the sample catalogs and books inserted into ``db``.
* ``reset_rate_limiter``: function, autouse: prevent cross-test counter bleed.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing")
os.environ.pop("MONGODB_URI", None)
os.environ.pop("SERVER_URI_MONGODB", None)

from tests.fakes import FakeDatabase, StaticStore  # noqa: E402
from tests.helpers import bearer_for, insert_user  # noqa: E402

# ---------------------------------------------------------------------------
# Rate-limiter reset
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> None:
    """Reset the in-memory rate-limit storage before every test.

    Without this, low-limit endpoints (register: 5/minute) exhaust their
    quota part-way through the run.
    """
    from bookstore.middleware.rate_limit import limiter

    limiter._storage.reset()


# ---------------------------------------------------------------------------
# Store and HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
async def async_client(db: FakeDatabase) -> AsyncGenerator[AsyncClient]:
    """httpx.AsyncClient that drives the full FastAPI app in-process.

    ASGITransport does not run the lifespan, so the store is attached to
    ``app.state`` directly.
    """
    from bookstore.main import app

    app.state.store = StaticStore(db)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture
async def admin(db: FakeDatabase) -> dict[str, Any]:
    return await insert_user(db, "admin@timsachnhabe.com", role="admin")


@pytest.fixture
async def customer(db: FakeDatabase) -> dict[str, Any]:
    return await insert_user(db, "user1@timsachnhabe.com", full_name="Người Dùng 1")


@pytest.fixture
def admin_headers(admin: dict[str, Any]) -> dict[str, str]:
    return bearer_for(admin)


@pytest.fixture
def auth_headers(customer: dict[str, Any]) -> dict[str, str]:
    return bearer_for(customer)


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------


@pytest.fixture
async def books(db: FakeDatabase) -> list[dict[str, Any]]:
    """Insert the sample catalogs and books; return the books with their ``_id``."""
    from bookstore.seed import data

    await db["catalogs"].insert_many([dict(c) for c in data.CATALOGS])
    products = [dict(p) for p in data.PRODUCTS]
    await db["products"].insert_many(products)
    return products
