from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import DuplicateKeyError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

from bookstore.api.root import root_router
from bookstore.api.router import api_router
from bookstore.bootstrap import bootstrap
from bookstore.config import settings
from bookstore.database import ConnectionManager
from bookstore.middleware.access_log import AccessLogMiddleware
from bookstore.middleware.error_handler import (
    duplicate_key_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from bookstore.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from bookstore.middleware.request_id import RequestIdMiddleware

_OPENAPI_TAGS = [
    {"name": "Health", "description": "Health check endpoints"},
    {"name": "Auth", "description": "Registration, login and token refresh"},
    {"name": "Catalog", "description": "Book genre management"},
    {"name": "Products", "description": "Book management"},
    {"name": "Reviews", "description": "Book reviews"},
    {"name": "Orders", "description": "Customer orders"},
    {"name": "Invoices", "description": "Invoices derived from orders"},
    {"name": "Coupons", "description": "Discount coupons"},
    {"name": "Users", "description": "User administration"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    # Startup: connect in the background so the API serves while the store is down
    store = ConnectionManager.from_settings(on_first_connect=bootstrap)
    app.state.store = store
    store.start()
    yield
    # Shutdown: cancel pending retries and release the client
    await store.close()


app = FastAPI(
    title=settings.app_name,
    description="REST API for the Tim Sach Nha Be online bookstore",
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=_OPENAPI_TAGS,
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(DuplicateKeyError, duplicate_key_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

# ---------------------------------------------------------------------------
# Middleware (Starlette LIFO: last add_middleware call runs outermost)
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Reads REQUEST_ID_CTX, so it must sit inside RequestIdMiddleware.
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIdMiddleware)

app.include_router(root_router)
app.include_router(api_router)
