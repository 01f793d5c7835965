"""Tests for /api/products."""

from typing import Any

import pytest
from httpx import AsyncClient

from tests.fakes import FakeDatabase

_NEW_BOOK = {
    "isbn": 9786041111111,
    "title": "Số Đỏ",
    "publisher": "NXB Văn Học",
    "author": "Vũ Trọng Phụng",
    "page_count": 240,
    "price": 70000,
    "catalog": "FIC",
    "stock": 30,
}


# ---------------------------------------------------------------------------
# Listing and search
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_products(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products")
    assert resp.status_code == 200
    titles = [p["title"] for p in resp.json()["data"]]
    assert titles == sorted(titles)
    assert resp.json()["pagination"]["total"] == 3


@pytest.mark.asyncio
async def test_filter_by_catalog(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products", params={"catalog": "KID"})
    data = resp.json()["data"]
    assert [p["isbn"] for p in data] == [9786041234567]


@pytest.mark.asyncio
async def test_search_title_case_insensitive(
    async_client: AsyncClient, books: list[dict[str, Any]]
) -> None:
    resp = await async_client.get("/api/products", params={"search": "nhà giả"})
    assert [p["title"] for p in resp.json()["data"]] == ["Nhà Giả Kim"]


@pytest.mark.asyncio
async def test_search_matches_author(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products", params={"search": "coelho"})
    assert len(resp.json()["data"]) == 1


@pytest.mark.asyncio
async def test_search_escapes_regex(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products", params={"search": ".*"})
    assert resp.json()["data"] == []


@pytest.mark.asyncio
async def test_pagination(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products", params={"per_page": 2, "page": 2})
    body = resp.json()
    assert len(body["data"]) == 1
    assert body["pagination"] == {"page": 2, "per_page": 2, "total": 3, "total_pages": 2}


# ---------------------------------------------------------------------------
# Single product
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_product_by_isbn(async_client: AsyncClient, books: list[dict[str, Any]]) -> None:
    resp = await async_client.get("/api/products/9786049999999")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Nhà Giả Kim"
    assert body["id"] == str(books[2]["_id"])
    assert body["price"] == 85000


@pytest.mark.asyncio
async def test_get_unknown_product_returns_404(async_client: AsyncClient) -> None:
    resp = await async_client.get("/api/products/9780000000000")
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Product not found"


# ---------------------------------------------------------------------------
# Admin writes
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_product(
    async_client: AsyncClient,
    db: FakeDatabase,
    books: list[dict[str, Any]],
    admin_headers: dict[str, str],
) -> None:
    resp = await async_client.post("/api/products", json=_NEW_BOOK, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["sold_count"] == 0
    assert len(db["products"].docs) == 4


@pytest.mark.asyncio
async def test_create_product_unknown_catalog_returns_400(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/products", json={**_NEW_BOOK, "catalog": "NOPE"}, headers=admin_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_create_product_duplicate_isbn_returns_409(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/products", json={**_NEW_BOOK, "isbn": 9786041234567}, headers=admin_headers
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_create_product_requires_admin(
    async_client: AsyncClient, books: list[dict[str, Any]], auth_headers: dict[str, str]
) -> None:
    resp = await async_client.post("/api/products", json=_NEW_BOOK, headers=auth_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_create_product_negative_price_returns_422(
    async_client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/products", json={**_NEW_BOOK, "price": -1}, headers=admin_headers
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_product_partial(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.put(
        "/api/products/9786041234567", json={"price": 55000}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["price"] == 55000
    assert resp.json()["title"] == "Dế Mèn Phiêu Lưu Ký"


@pytest.mark.asyncio
async def test_update_product_unknown_catalog_returns_400(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.put(
        "/api/products/9786041234567", json={"catalog": "NOPE"}, headers=admin_headers
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_unknown_product_returns_404(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.put(
        "/api/products/9780000000000", json={"price": 1}, headers=admin_headers
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_product(
    async_client: AsyncClient,
    db: FakeDatabase,
    books: list[dict[str, Any]],
    admin_headers: dict[str, str],
) -> None:
    resp = await async_client.delete("/api/products/9786041234567", headers=admin_headers)
    assert resp.status_code == 204
    assert len(db["products"].docs) == 2

    again = await async_client.delete("/api/products/9786041234567", headers=admin_headers)
    assert again.status_code == 404
