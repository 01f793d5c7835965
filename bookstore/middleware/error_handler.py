"""Global exception handlers that return consistent JSON error envelopes.

Register these with ``app.add_exception_handler``.  Every response follows the
``ErrorResponse`` schema from ``bookstore.schemas.common``.
"""

import logging
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException

from bookstore.schemas.common import ErrorCode, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"

# Stable error code strings used in the response envelope.
_STATUS_TO_CODE: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    429: "RATE_LIMITED",
    500: "INTERNAL_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def _code_for_status(status_code: int) -> str:
    """Return the error code string for *status_code*, falling back to ``HTTP_{code}``."""
    return _STATUS_TO_CODE.get(status_code, f"HTTP_{status_code}")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Convert ``HTTPException`` to the standard error envelope.

    ``exc.detail`` becomes ``error.message`` and the status code maps to a
    stable ``error.code`` (404 → ``NOT_FOUND``).  Headers on the exception,
    such as ``WWW-Authenticate``, are forwarded.
    """
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    body = ErrorResponse(
        error=ErrorCode(
            code=_code_for_status(exc.status_code),
            message=detail,
        )
    )
    headers = dict(exc.headers) if exc.headers else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert ``RequestValidationError`` to a 422 envelope with one detail per field."""
    details: list[ErrorDetail] = []
    for error in exc.errors():
        # Drop the leading "body" / "query" / "path" segment of ``loc``.
        loc = error["loc"]
        field_parts = [str(part) for part in loc if part not in ("body", "query", "path")]
        field = ".".join(field_parts) if field_parts else str(loc[-1]) if loc else "unknown"
        details.append(ErrorDetail(field=field, message=error["msg"]))

    body = ErrorResponse(
        error=ErrorCode(
            code="UNPROCESSABLE_ENTITY",
            message="Request validation failed",
            details=details,
        )
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(),
    )


async def duplicate_key_error_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    """Convert a unique-index violation to 409 ``ALREADY_EXISTS``."""
    body = ErrorResponse(
        error=ErrorCode(
            code="ALREADY_EXISTS",
            message="A resource with the given identifier already exists",
        )
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=body.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for anything no other handler matched.

    Store outages land here too.  The traceback is logged at ERROR; the client
    only ever sees the generic message.
    """
    logger.error(
        "Unhandled %s on %s %s\n%s",
        type(exc).__name__,
        request.method,
        request.url.path,
        "".join(traceback.format_exception(exc)),
    )
    body = ErrorResponse(
        error=ErrorCode(
            code="INTERNAL_ERROR",
            message=GENERIC_ERROR_MESSAGE,
        )
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )
