"""Product (book) endpoints with catalog filter and title/author search."""

import re
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import CATALOGS, PRODUCTS
from bookstore.dependencies import get_db, require_admin
from bookstore.schemas.common import PaginatedResponse
from bookstore.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from bookstore.utils.documents import to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/products", tags=["Products"])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Product not found",
)

_UNKNOWN_CATALOG = HTTPException(
    status_code=status.HTTP_400_BAD_REQUEST,
    detail="Invalid catalog: referenced catalog does not exist",
)


async def _require_catalog(db: AsyncDatabase, code: str) -> None:
    if await db[CATALOGS].find_one({"code": code}) is None:
        raise _UNKNOWN_CATALOG


@router.get("", response_model=PaginatedResponse[ProductResponse])
async def list_products(
    catalog: str | None = Query(None, description="Catalog code filter"),  # noqa: B008
    search: str | None = Query(None, max_length=100),  # noqa: B008
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> PaginatedResponse[ProductResponse]:
    """Return products ordered by title.

    ``search`` is a case-insensitive substring match on title or author.
    """
    query: dict[str, Any] = {}
    if catalog is not None:
        query["catalog"] = catalog
    if search:
        pattern = {"$regex": re.escape(search), "$options": "i"}
        query["$or"] = [{"title": pattern}, {"author": pattern}]
    return await paginate(db[PRODUCTS], query, page, per_page, ProductResponse, sort=[("title", 1)])


@router.get("/{isbn}", response_model=ProductResponse)
async def get_product(
    isbn: int,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> ProductResponse:
    product = await db[PRODUCTS].find_one({"isbn": isbn})
    if product is None:
        raise _NOT_FOUND
    return ProductResponse.model_validate(to_str_id(product))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> ProductResponse:
    """Create a product.  Admin only.

    Returns 400 if ``catalog`` is not a known catalog code and 409 if the ISBN
    is already in use.
    """
    await _require_catalog(db, body.catalog)
    if await db[PRODUCTS].find_one({"isbn": body.isbn}) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A product with this ISBN already exists",
        )
    doc = {**body.model_dump(), "sold_count": 0}
    await db[PRODUCTS].insert_one(doc)
    return ProductResponse.model_validate(to_str_id(doc))


@router.put("/{isbn}", response_model=ProductResponse)
async def update_product(
    isbn: int,
    body: ProductUpdate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> ProductResponse:
    """Update a product.  Admin only.  Only fields present in the body change."""
    changes = body.model_dump(exclude_unset=True)
    if "catalog" in changes:
        await _require_catalog(db, changes["catalog"])

    if changes:
        product = await db[PRODUCTS].find_one_and_update(
            {"isbn": isbn},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    else:
        product = await db[PRODUCTS].find_one({"isbn": isbn})
    if product is None:
        raise _NOT_FOUND
    return ProductResponse.model_validate(to_str_id(product))


@router.delete("/{isbn}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    isbn: int,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> None:
    """Delete a product.  Admin only."""
    result = await db[PRODUCTS].delete_one({"isbn": isbn})
    if result.deleted_count == 0:
        raise _NOT_FOUND
