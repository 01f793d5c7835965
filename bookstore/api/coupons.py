"""Coupon endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import COUPONS
from bookstore.dependencies import get_db, require_admin
from bookstore.schemas.common import PaginatedResponse
from bookstore.schemas.coupon import CouponCreate, CouponResponse
from bookstore.utils.documents import to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/coupons", tags=["Coupons"])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Coupon not found",
)


@router.get("", response_model=PaginatedResponse[CouponResponse])
async def list_coupons(
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> PaginatedResponse[CouponResponse]:
    return await paginate(db[COUPONS], {}, page, per_page, CouponResponse, sort=[("code", 1)])


@router.get("/{code}", response_model=CouponResponse)
async def get_coupon(
    code: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> CouponResponse:
    coupon = await db[COUPONS].find_one({"code": code})
    if coupon is None:
        raise _NOT_FOUND
    return CouponResponse.model_validate(to_str_id(coupon))


@router.post("", response_model=CouponResponse, status_code=status.HTTP_201_CREATED)
async def create_coupon(
    body: CouponCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> CouponResponse:
    """Create a coupon.  Admin only.  Returns 409 if the code is taken."""
    if await db[COUPONS].find_one({"code": body.code}) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Coupon code already exists",
        )
    doc = body.model_dump()
    await db[COUPONS].insert_one(doc)
    return CouponResponse.model_validate(to_str_id(doc))


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coupon(
    code: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> None:
    result = await db[COUPONS].delete_one({"code": code})
    if result.deleted_count == 0:
        raise _NOT_FOUND
