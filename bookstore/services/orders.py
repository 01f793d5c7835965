"""Order pricing and invoice derivation.

Shared by the seed planner and the orders/invoices API so that seeded and
user-created documents obey the same monetary rules:

* ``total_amount`` is the exact sum of ``price * quantity`` over the lines,
  using prices read at order-creation time.
* ``final_amount`` is ``product_total - discount_amount`` and never negative.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any


class CouponNotApplicableError(ValueError):
    """Raised when a coupon is outside its validity window."""


def compute_order_total(lines: Iterable[tuple[int, int]]) -> int:
    """Return the sum of ``price * quantity`` over ``(price, quantity)`` pairs."""
    return sum(price * quantity for price, quantity in lines)


def build_order(
    user: Mapping[str, Any],
    lines: Iterable[tuple[Mapping[str, Any], int]],
    *,
    payment_method: str,
    status: str = "pending",
    shipping_address: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Return an order document for *user* from ``(product, quantity)`` lines.

    Each product must already carry its store ``_id`` and ``price``.  The
    shipping address is copied from the user unless given explicitly.
    """
    when = now or datetime.now(UTC)
    lines = list(lines)
    return {
        "user_id": user["_id"],
        "items": [
            {"product_id": product["_id"], "quantity": quantity} for product, quantity in lines
        ],
        "total_amount": compute_order_total(
            (product["price"], quantity) for product, quantity in lines
        ),
        "order_date": when,
        "payment_method": payment_method,
        "shipping_address": shipping_address or user.get("address", ""),
        "status": status,
        "created_at": when,
        "updated_at": when,
    }


def build_invoice(
    order: Mapping[str, Any],
    customer: Mapping[str, Any],
    *,
    discount_amount: int = 0,
    payment_date: datetime | None = None,
) -> dict[str, Any]:
    """Return the invoice document derived from *order*.

    Amounts come from the order alone.  The discount is clamped to the
    product total so ``final_amount`` cannot go negative.
    """
    if discount_amount < 0:
        raise ValueError("discount_amount must be >= 0")
    product_total: int = order["total_amount"]
    discount = min(discount_amount, product_total)
    return {
        "order_id": str(order["_id"]),
        "order_date": order["order_date"],
        "payment_date": payment_date or order["order_date"],
        "full_name": customer["full_name"],
        "email": customer["email"],
        "product_total": product_total,
        "discount_amount": discount,
        "final_amount": product_total - discount,
        "payment_method": order["payment_method"],
    }


def coupon_discount(coupon: Mapping[str, Any], product_total: int, at: datetime) -> int:
    """Return the discount *coupon* grants on *product_total* at time *at*.

    ``percent`` coupons take ``amount`` percent (rounded down), ``fixed``
    coupons take ``amount`` outright, ``shipping`` coupons do not touch the
    product total.  Raises :exc:`CouponNotApplicableError` outside the
    validity window.
    """
    start: datetime = coupon["start_date"]
    end: datetime = coupon["end_date"]
    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    if end.tzinfo is None:
        end = end.replace(tzinfo=UTC)
    if not start <= at <= end:
        raise CouponNotApplicableError(f"Coupon {coupon['code']} is not valid at this time")

    amount: int = coupon["amount"]
    if coupon["type"] == "percent":
        return product_total * amount // 100
    if coupon["type"] == "fixed":
        return min(amount, product_total)
    return 0
