"""Tests for /api/catalog."""

from typing import Any

import pytest
from httpx import AsyncClient

from tests.fakes import FakeDatabase


@pytest.mark.asyncio
async def test_list_catalogs_sorted_by_code(
    async_client: AsyncClient, books: list[dict[str, Any]]
) -> None:
    resp = await async_client.get("/api/catalog")
    assert resp.status_code == 200
    body = resp.json()
    assert [c["code"] for c in body["data"]] == ["EDU", "FIC", "KID"]
    assert body["pagination"] == {"page": 1, "per_page": 20, "total": 3, "total_pages": 1}


@pytest.mark.asyncio
async def test_list_catalogs_empty(async_client: AsyncClient) -> None:
    resp = await async_client.get("/api/catalog")
    assert resp.json()["data"] == []
    assert resp.json()["pagination"]["total_pages"] == 1


@pytest.mark.asyncio
async def test_create_catalog_as_admin(
    async_client: AsyncClient, db: FakeDatabase, admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/catalog", json={"code": "SCI", "name": "Khoa học"}, headers=admin_headers
    )
    assert resp.status_code == 201
    assert resp.json()["code"] == "SCI"
    assert db["catalogs"].docs[0]["name"] == "Khoa học"


@pytest.mark.asyncio
async def test_create_catalog_requires_admin(
    async_client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/catalog", json={"code": "SCI", "name": "Khoa học"}, headers=auth_headers
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_create_catalog_requires_auth(async_client: AsyncClient) -> None:
    resp = await async_client.post("/api/catalog", json={"code": "SCI", "name": "Khoa học"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_duplicate_catalog_returns_409(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/catalog", json={"code": "FIC", "name": "Tiểu thuyết"}, headers=admin_headers
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_create_catalog_rejects_lowercase_code(
    async_client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    resp = await async_client.post(
        "/api/catalog", json={"code": "sci", "name": "Khoa học"}, headers=admin_headers
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_delete_catalog_in_use_returns_400(
    async_client: AsyncClient, books: list[dict[str, Any]], admin_headers: dict[str, str]
) -> None:
    resp = await async_client.delete("/api/catalog/FIC", headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_unused_catalog(
    async_client: AsyncClient, db: FakeDatabase, admin_headers: dict[str, str]
) -> None:
    await db["catalogs"].insert_one({"code": "SCI", "name": "Khoa học"})
    resp = await async_client.delete("/api/catalog/SCI", headers=admin_headers)
    assert resp.status_code == 204
    assert db["catalogs"].docs == []


@pytest.mark.asyncio
async def test_delete_unknown_catalog_returns_404(
    async_client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    resp = await async_client.delete("/api/catalog/NOPE", headers=admin_headers)
    assert resp.status_code == 404
