"""Main API router: mounts all sub-routers under /api."""

from fastapi import APIRouter

from bookstore.api.auth import router as auth_router
from bookstore.api.catalog import router as catalog_router
from bookstore.api.coupons import router as coupons_router
from bookstore.api.health import router as health_router
from bookstore.api.invoices import router as invoices_router
from bookstore.api.orders import router as orders_router
from bookstore.api.products import router as products_router
from bookstore.api.reviews import router as reviews_router
from bookstore.api.users import router as users_router

api_router = APIRouter(prefix="/api")
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(catalog_router)
api_router.include_router(reviews_router)
api_router.include_router(orders_router)
api_router.include_router(products_router)
api_router.include_router(invoices_router)
api_router.include_router(coupons_router)
api_router.include_router(users_router)
