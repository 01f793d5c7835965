"""Catalog endpoints: list, create and delete book genres."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import CATALOGS, PRODUCTS
from bookstore.dependencies import get_db, require_admin
from bookstore.schemas.catalog import CatalogCreate, CatalogResponse
from bookstore.schemas.common import PaginatedResponse
from bookstore.utils.documents import to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/catalog", tags=["Catalog"])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Catalog not found",
)


@router.get("", response_model=PaginatedResponse[CatalogResponse])
async def list_catalogs(
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> PaginatedResponse[CatalogResponse]:
    """Return catalogs ordered by code."""
    return await paginate(db[CATALOGS], {}, page, per_page, CatalogResponse, sort=[("code", 1)])


@router.post("", response_model=CatalogResponse, status_code=status.HTTP_201_CREATED)
async def create_catalog(
    body: CatalogCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> CatalogResponse:
    """Create a catalog.  Admin only.  Returns 409 if the code is taken."""
    if await db[CATALOGS].find_one({"code": body.code}) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Catalog code already exists",
        )
    doc = body.model_dump()
    await db[CATALOGS].insert_one(doc)
    return CatalogResponse.model_validate(to_str_id(doc))


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_catalog(
    code: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> None:
    """Delete a catalog.  Admin only.

    Returns 400 while any product is still tagged with this code.
    """
    if await db[CATALOGS].find_one({"code": code}) is None:
        raise _NOT_FOUND
    if await db[PRODUCTS].count_documents({"catalog": code}) > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete catalog: it still has products assigned to it",
        )
    await db[CATALOGS].delete_one({"code": code})
