"""Authentication endpoints: register, login, refresh tokens, and current-user profile."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from jose import JWTError
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from bookstore.config import settings
from bookstore.database import USERS
from bookstore.dependencies import get_current_user, get_db
from bookstore.middleware.rate_limit import get_user_key, limiter
from bookstore.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from bookstore.schemas.common import ErrorResponse
from bookstore.services.auth import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from bookstore.utils.documents import oid, to_str_id

router = APIRouter(prefix="/auth", tags=["Auth"])

_INVALID_CREDENTIALS = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid email or password",
    headers={"WWW-Authenticate": "Bearer"},
)

_INVALID_REFRESH = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired refresh token",
    headers={"WWW-Authenticate": "Bearer"},
)

_EMAIL_TAKEN = HTTPException(
    status_code=status.HTTP_409_CONFLICT,
    detail="Email already registered",
)


def _tokens_for(user: dict[str, Any]) -> TokenResponse:
    user_id = str(user["_id"])
    return TokenResponse(
        access_token=create_access_token(user_id, user["email"], user["role"]),
        refresh_token=create_refresh_token(user_id),
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"model": ErrorResponse, "description": "Request validation failed"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
@limiter.limit("5/minute")
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> UserResponse:
    """Register a new customer account with the ``user`` role.

    Returns 409 if the email address is already registered.
    Rate limited: 5 requests per minute per IP address.
    """
    email = body.email.lower()
    if await db[USERS].find_one({"email": email}) is not None:
        raise _EMAIL_TAKEN

    user = {
        "full_name": body.full_name,
        "email": email,
        "password_hash": hash_password(body.password),
        "phone_number": body.phone_number,
        "address": body.address,
        "role": "user",
        "created_at": datetime.now(UTC),
    }
    try:
        await db[USERS].insert_one(user)
    except DuplicateKeyError:
        raise _EMAIL_TAKEN from None
    return UserResponse.model_validate(to_str_id(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        422: {"model": ErrorResponse, "description": "Request validation failed"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
@limiter.limit("10/minute")
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> TokenResponse:
    """Authenticate with email and password.

    Returns a JWT access token and a refresh token on success.
    Rate limited: 10 requests per minute per IP address.
    """
    user: dict[str, Any] | None = await db[USERS].find_one({"email": body.email.lower()})
    if user is None or not verify_password(body.password, user["password_hash"]):
        raise _INVALID_CREDENTIALS
    return _tokens_for(user)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
@limiter.limit("30/minute")
async def refresh(
    request: Request,
    response: Response,
    body: RefreshRequest,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> TokenResponse:
    """Exchange a valid refresh token for a new access/refresh pair."""
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        raise _INVALID_REFRESH from None

    if payload.get("type") != "refresh":
        raise _INVALID_REFRESH

    user_id = oid(payload.get("sub"))
    if user_id is None:
        raise _INVALID_REFRESH

    user: dict[str, Any] | None = await db[USERS].find_one({"_id": user_id})
    if user is None:
        raise _INVALID_REFRESH
    return _tokens_for(user)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    },
)
@limiter.limit("100/minute", key_func=get_user_key)
async def me(
    request: Request,
    response: Response,
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(to_str_id(current_user))
