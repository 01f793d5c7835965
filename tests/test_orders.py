"""Tests for /api/orders."""

from typing import Any

import pytest
from bson import ObjectId
from httpx import AsyncClient

from tests.fakes import FakeDatabase
from tests.helpers import bearer_for, insert_user


def _lines(books: list[dict[str, Any]], *quantities: int) -> list[dict[str, Any]]:
    return [
        {"product_id": str(book["_id"]), "quantity": qty}
        for book, qty in zip(books, quantities, strict=False)
        if qty
    ]


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_order_computes_total_server_side(
    async_client: AsyncClient,
    customer: dict[str, Any],
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    resp = await async_client.post(
        "/api/orders",
        json={"items": _lines(books, 1, 2), "payment_method": "COD", "total_amount": 1},
        headers=auth_headers,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["total_amount"] == 240000
    assert body["user_id"] == str(customer["_id"])
    assert body["status"] == "pending"
    assert body["shipping_address"] == customer["address"]
    assert body["items"][1] == {"product_id": str(books[1]["_id"]), "quantity": 2}


@pytest.mark.asyncio
async def test_create_order_updates_stock_and_sales(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    await async_client.post(
        "/api/orders", json={"items": _lines(books, 0, 3)}, headers=auth_headers
    )

    product = await db["products"].find_one({"_id": books[1]["_id"]})
    assert product["stock"] == 77
    assert product["sold_count"] == 3


@pytest.mark.asyncio
async def test_create_order_insufficient_stock_returns_400(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    resp = await async_client.post(
        "/api/orders", json={"items": _lines(books, 101)}, headers=auth_headers
    )
    assert resp.status_code == 400
    assert db["orders"].docs == []
    assert (await db["products"].find_one({"_id": books[0]["_id"]}))["stock"] == 100


@pytest.mark.asyncio
async def test_create_order_repeated_product_cannot_exceed_stock(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    line = {"product_id": str(books[2]["_id"]), "quantity": 60}
    resp = await async_client.post(
        "/api/orders", json={"items": [line, line]}, headers=auth_headers
    )

    assert resp.status_code == 400
    assert db["orders"].docs == []
    product = await db["products"].find_one({"_id": books[2]["_id"]})
    assert product["stock"] == 60
    assert product["sold_count"] == 0


@pytest.mark.asyncio
async def test_create_order_merges_repeated_product_lines(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    line = {"product_id": str(books[2]["_id"]), "quantity": 30}
    resp = await async_client.post(
        "/api/orders", json={"items": [line, line]}, headers=auth_headers
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["items"] == [{"product_id": str(books[2]["_id"]), "quantity": 60}]
    assert body["total_amount"] == 60 * 85000
    assert (await db["products"].find_one({"_id": books[2]["_id"]}))["stock"] == 0


@pytest.mark.asyncio
async def test_create_order_failure_releases_earlier_lines(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    resp = await async_client.post(
        "/api/orders", json={"items": _lines(books, 5, 81)}, headers=auth_headers
    )

    assert resp.status_code == 400
    first = await db["products"].find_one({"_id": books[0]["_id"]})
    assert first["stock"] == 100
    assert first["sold_count"] == 0


@pytest.mark.asyncio
async def test_create_order_stock_taken_after_lookup_returns_400(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> None:
    # Another order drains the stock between the product lookup and the decrement.
    products = db["products"]
    original_find_one = products.find_one

    async def find_then_drain(query: dict[str, Any] | None = None) -> dict[str, Any] | None:
        found = await original_find_one(query)
        await products.update_one({"_id": books[0]["_id"]}, {"$set": {"stock": 0}})
        return found

    products.find_one = find_then_drain
    resp = await async_client.post(
        "/api/orders", json={"items": _lines(books, 1)}, headers=auth_headers
    )

    assert resp.status_code == 400
    assert db["orders"].docs == []
    assert (await original_find_one({"_id": books[0]["_id"]}))["stock"] == 0


@pytest.mark.asyncio
async def test_create_order_unknown_product_returns_400(
    async_client: AsyncClient, auth_headers: dict[str, str], books: list[dict[str, Any]]
) -> None:
    resp = await async_client.post(
        "/api/orders",
        json={"items": [{"product_id": str(ObjectId()), "quantity": 1}]},
        headers=auth_headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_create_order_malformed_product_id_returns_400(
    async_client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/orders",
        json={"items": [{"product_id": "not-an-id", "quantity": 1}]},
        headers=auth_headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"items": []},
        {"items": [{"product_id": "x", "quantity": 0}]},
        {"items": [{"product_id": "x", "quantity": 1}], "payment_method": "CASH"},
    ],
)
async def test_create_order_validation(
    async_client: AsyncClient, auth_headers: dict[str, str], payload: dict[str, Any]
) -> None:
    resp = await async_client.post("/api/orders", json=payload, headers=auth_headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_order_requires_auth(async_client: AsyncClient) -> None:
    resp = await async_client.post("/api/orders", json={"items": []})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


@pytest.fixture
async def two_orders(
    async_client: AsyncClient,
    db: FakeDatabase,
    auth_headers: dict[str, str],
    books: list[dict[str, Any]],
) -> dict[str, Any]:
    other = await insert_user(db, "user2@timsachnhabe.com")
    mine = await async_client.post(
        "/api/orders", json={"items": _lines(books, 1)}, headers=auth_headers
    )
    theirs = await async_client.post(
        "/api/orders", json={"items": _lines(books, 0, 0, 1)}, headers=bearer_for(other)
    )
    return {"mine": mine.json(), "theirs": theirs.json()}


@pytest.mark.asyncio
async def test_user_lists_only_own_orders(
    async_client: AsyncClient, auth_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    resp = await async_client.get("/api/orders", headers=auth_headers)
    assert [o["id"] for o in resp.json()["data"]] == [two_orders["mine"]["id"]]


@pytest.mark.asyncio
async def test_admin_lists_all_orders(
    async_client: AsyncClient, admin_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    resp = await async_client.get("/api/orders", headers=admin_headers)
    assert resp.json()["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_user_cannot_read_foreign_order(
    async_client: AsyncClient, auth_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    resp = await async_client.get(f"/api/orders/{two_orders['theirs']['id']}", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_user_reads_own_order(
    async_client: AsyncClient, auth_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    resp = await async_client.get(f"/api/orders/{two_orders['mine']['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["total_amount"] == 60000


@pytest.mark.asyncio
async def test_admin_reads_any_order(
    async_client: AsyncClient, admin_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    resp = await async_client.get(f"/api/orders/{two_orders['theirs']['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["total_amount"] == 85000


@pytest.mark.asyncio
async def test_get_malformed_order_id_returns_404(
    async_client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    resp = await async_client.get("/api/orders/xyz", headers=admin_headers)
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Status updates
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_admin_updates_status(
    async_client: AsyncClient, admin_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    order_id = two_orders["mine"]["id"]
    resp = await async_client.patch(
        f"/api/orders/{order_id}/status", json={"status": "shipping"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "shipping"


@pytest.mark.asyncio
async def test_user_cannot_update_status(
    async_client: AsyncClient, auth_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    order_id = two_orders["mine"]["id"]
    resp = await async_client.patch(
        f"/api/orders/{order_id}/status", json={"status": "completed"}, headers=auth_headers
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_invalid_status_returns_422(
    async_client: AsyncClient, admin_headers: dict[str, str], two_orders: dict[str, Any]
) -> None:
    order_id = two_orders["mine"]["id"]
    resp = await async_client.patch(
        f"/api/orders/{order_id}/status", json={"status": "lost"}, headers=admin_headers
    )
    assert resp.status_code == 422
