from .auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from .catalog import CatalogCreate, CatalogResponse
from .common import ErrorCode, ErrorDetail, ErrorResponse, PaginatedResponse, Pagination
from .coupon import CouponCreate, CouponResponse
from .health import HealthResponse, ServiceInfo
from .invoice import InvoiceCreate, InvoiceResponse
from .order import OrderCreate, OrderItem, OrderResponse, OrderStatusUpdate
from .product import ProductCreate, ProductResponse, ProductUpdate
from .review import ReviewCreate, ReviewResponse

__all__ = [
    # auth
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "RefreshRequest",
    "UserResponse",
    # catalog
    "CatalogCreate",
    "CatalogResponse",
    # common
    "Pagination",
    "PaginatedResponse",
    "ErrorDetail",
    "ErrorCode",
    "ErrorResponse",
    # coupon
    "CouponCreate",
    "CouponResponse",
    # health
    "HealthResponse",
    "ServiceInfo",
    # invoice
    "InvoiceCreate",
    "InvoiceResponse",
    # order
    "OrderCreate",
    "OrderItem",
    "OrderResponse",
    "OrderStatusUpdate",
    # product
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    # review
    "ReviewCreate",
    "ReviewResponse",
]
