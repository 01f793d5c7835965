"""Invoice endpoints.  Every route requires the admin role."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import COUPONS, INVOICES, ORDERS, USERS
from bookstore.dependencies import get_db, require_admin
from bookstore.schemas.common import PaginatedResponse
from bookstore.schemas.invoice import InvoiceCreate, InvoiceResponse
from bookstore.services.orders import CouponNotApplicableError, build_invoice, coupon_discount
from bookstore.utils.documents import oid, to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/invoices", tags=["Invoices"], dependencies=[Depends(require_admin)])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Invoice not found",
)


@router.get("", response_model=PaginatedResponse[InvoiceResponse])
async def list_invoices(
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> PaginatedResponse[InvoiceResponse]:
    return await paginate(
        db[INVOICES], {}, page, per_page, InvoiceResponse, sort=[("payment_date", -1)]
    )


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> InvoiceResponse:
    key = oid(invoice_id)
    invoice = await db[INVOICES].find_one({"_id": key}) if key is not None else None
    if invoice is None:
        raise _NOT_FOUND
    return InvoiceResponse.model_validate(to_str_id(invoice))


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    body: InvoiceCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> InvoiceResponse:
    """Issue the invoice for an order, optionally applying a coupon.

    Returns 404 for an unknown order, 409 if the order already has an invoice,
    and 400 for an unknown or expired coupon.
    """
    key = oid(body.order_id)
    order = await db[ORDERS].find_one({"_id": key}) if key is not None else None
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )
    if await db[INVOICES].find_one({"order_id": str(order["_id"])}) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Order already has an invoice",
        )
    customer = await db[USERS].find_one({"_id": order["user_id"]})
    if customer is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order belongs to a user that no longer exists",
        )

    now = datetime.now(UTC)
    discount = 0
    if body.coupon_code is not None:
        coupon = await db[COUPONS].find_one({"code": body.coupon_code})
        if coupon is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Coupon {body.coupon_code} does not exist",
            )
        try:
            discount = coupon_discount(coupon, order["total_amount"], now)
        except CouponNotApplicableError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc

    invoice = build_invoice(order, customer, discount_amount=discount, payment_date=now)
    await db[INVOICES].insert_one(invoice)
    return InvoiceResponse.model_validate(to_str_id(invoice))
