from bookstore.services.auth import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from bookstore.services.orders import (
    CouponNotApplicableError,
    build_invoice,
    build_order,
    compute_order_total,
    coupon_discount,
)

__all__ = [
    # auth
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "hash_password",
    "verify_password",
    # orders
    "CouponNotApplicableError",
    "build_invoice",
    "build_order",
    "compute_order_total",
    "coupon_discount",
]
