"""Rate limiting with slowapi.

Key functions
-------------
``get_remote_address`` (re-exported from slowapi)
    IP-based key for unauthenticated endpoints (register, login, refresh).

``get_user_key``
    ``"user:<id>"`` from the Bearer JWT ``sub`` claim, falling back to the
    client IP.  Expiry is not checked here; auth dependencies do that.

Limits on the auth router
-------------------------

+---------------------+---------------+---------------------+
| Endpoint            | Limit         | Key function        |
+=====================+===============+=====================+
| POST /auth/register | 5/minute      | IP (remote address) |
+---------------------+---------------+---------------------+
| POST /auth/login    | 10/minute     | IP (remote address) |
+---------------------+---------------+---------------------+
| POST /auth/refresh  | 30/minute     | IP (remote address) |
+---------------------+---------------+---------------------+
| GET  /auth/me       | 100/minute    | user based          |
+---------------------+---------------+---------------------+

Decorated endpoints must accept ``request: Request`` and ``response: Response``
so slowapi can inject the ``X-RateLimit-*`` headers.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from jose import JWTError
from jose import jwt as _jose_jwt
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import Response

from bookstore.config import settings
from bookstore.schemas.common import ErrorCode, ErrorResponse

__all__ = [
    "limiter",
    "get_remote_address",
    "get_user_key",
    "rate_limit_exceeded_handler",
]


def get_user_key(request: Request) -> str:
    """Return ``"user:<id>"`` for a Bearer JWT with a ``sub`` claim, else the client IP."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:]
        try:
            payload: dict[str, Any] = _jose_jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
                options={"verify_exp": False},
            )
            user_id = payload.get("sub")
            if isinstance(user_id, str) and user_id:
                return f"user:{user_id}"
        except JWTError:
            pass

    return get_remote_address(request)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> Response:
    """Return 429 with the standard error envelope plus slowapi's rate-limit headers."""
    body = ErrorResponse(
        error=ErrorCode(
            code="RATE_LIMITED",
            message="Rate limit exceeded. Please try again later.",
        )
    )
    resp: Response = JSONResponse(
        status_code=429,
        content=body.model_dump(),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    app_limiter: Limiter | None = getattr(request.app.state, "limiter", None)
    if view_rate_limit is not None and app_limiter is not None:
        resp = app_limiter._inject_headers(resp, view_rate_limit)
    return resp


#: Shared in-memory limiter; counters reset when the process restarts.
limiter: Limiter = Limiter(key_func=get_remote_address, headers_enabled=True)
