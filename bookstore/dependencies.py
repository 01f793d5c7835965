"""FastAPI dependencies: database handle, current-user extraction, and role guards."""

from typing import Any

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import USERS, get_db
from bookstore.services.auth import decode_token
from bookstore.utils.documents import oid

__all__ = ["get_db", "get_current_user", "require_admin"]

# Registered in the OpenAPI schema so Swagger UI shows the "Authorize" button.
_bearer_scheme = HTTPBearer(
    scheme_name="BearerAuth",
    description="JWT access token. Obtain one via **POST /api/auth/login**, then paste the `access_token` value here.",
    auto_error=False,
)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    bearer: HTTPAuthorizationCredentials | None = Security(_bearer_scheme),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> dict[str, Any]:
    """Return the authenticated user document from a Bearer access token.

    Raises ``HTTP 401`` if the token is missing, invalid, expired, a refresh
    token, or names a user that no longer exists.
    """
    if bearer is None:
        raise _CREDENTIALS_EXCEPTION

    try:
        payload = decode_token(bearer.credentials)
    except JWTError:
        raise _CREDENTIALS_EXCEPTION from None

    if payload.get("type") != "access":
        raise _CREDENTIALS_EXCEPTION

    user_id = oid(payload.get("sub"))
    if user_id is None:
        raise _CREDENTIALS_EXCEPTION

    user: dict[str, Any] | None = await db[USERS].find_one({"_id": user_id})
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    return user


async def require_admin(
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> dict[str, Any]:
    """Require the ``admin`` role.  Raises ``HTTP 403`` for non-admin users."""
    if current_user.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
