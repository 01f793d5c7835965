"""Order endpoints.

Totals are always computed server-side from the current product prices; the
client only sends product ids and quantities.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from bookstore.database import ORDERS, PRODUCTS
from bookstore.dependencies import get_current_user, get_db, require_admin
from bookstore.schemas.common import PaginatedResponse
from bookstore.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from bookstore.services.orders import build_order
from bookstore.utils.documents import oid, to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/orders", tags=["Orders"])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="Order not found",
)


def _is_admin(user: dict[str, Any]) -> bool:
    return user.get("role") == "admin"


@router.get("", response_model=PaginatedResponse[OrderResponse])
async def list_orders(
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> PaginatedResponse[OrderResponse]:
    """Return orders, newest first.  Admins see every order, users their own."""
    query: dict[str, Any] = {} if _is_admin(current_user) else {"user_id": current_user["_id"]}
    return await paginate(
        db[ORDERS], query, page, per_page, OrderResponse, sort=[("order_date", -1)]
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> OrderResponse:
    """Return one order.  Non-admins get 404 for orders they do not own."""
    key = oid(order_id)
    if key is None:
        raise _NOT_FOUND
    order = await db[ORDERS].find_one({"_id": key})
    if order is None:
        raise _NOT_FOUND
    if not _is_admin(current_user) and order["user_id"] != current_user["_id"]:
        raise _NOT_FOUND
    return OrderResponse.model_validate(to_str_id(order))


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> OrderResponse:
    """Place an order for the current user.

    Lines naming the same product are merged into one.  Returns 400 if a
    product id is unknown or a line asks for more than the product has in
    stock.  On success each product's ``stock`` is decremented and
    ``sold_count`` incremented by the ordered quantity.
    """
    quantities: dict[str, int] = {}
    for item in body.items:
        quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

    lines: list[tuple[dict[str, Any], int]] = []
    for product_id, quantity in quantities.items():
        key = oid(product_id)
        product = await db[PRODUCTS].find_one({"_id": key}) if key is not None else None
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Product {product_id} does not exist",
            )
        lines.append((product, quantity))

    reserved: list[tuple[dict[str, Any], int]] = []
    try:
        for product, quantity in lines:
            # Matches only while stock still covers the quantity.
            result = await db[PRODUCTS].update_one(
                {"_id": product["_id"], "stock": {"$gte": quantity}},
                {"$inc": {"stock": -quantity, "sold_count": quantity}},
            )
            if result.matched_count == 0:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Insufficient stock for '{product['title']}'",
                )
            reserved.append((product, quantity))

        order = build_order(
            current_user,
            lines,
            payment_method=body.payment_method,
            shipping_address=body.shipping_address,
        )
        await db[ORDERS].insert_one(order)
    except (HTTPException, PyMongoError):
        await _release_stock(db, reserved)
        raise
    return OrderResponse.model_validate(to_str_id(order))


async def _release_stock(db: AsyncDatabase, lines: list[tuple[dict[str, Any], int]]) -> None:
    for product, quantity in lines:
        await db[PRODUCTS].update_one(
            {"_id": product["_id"]},
            {"$inc": {"stock": quantity, "sold_count": -quantity}},
        )


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> OrderResponse:
    """Move an order to a new status.  Admin only."""
    key = oid(order_id)
    if key is None:
        raise _NOT_FOUND
    order = await db[ORDERS].find_one_and_update(
        {"_id": key},
        {"$set": {"status": body.status, "updated_at": datetime.now(UTC)}},
        return_document=ReturnDocument.AFTER,
    )
    if order is None:
        raise _NOT_FOUND
    return OrderResponse.model_validate(to_str_id(order))
