"""Request ID middleware.

Every request gets an ID exposed through the ``X-Request-Id`` response header.
A well-formed UUID sent by the client in ``X-Request-Id`` is reused so calls
can be traced across services; anything else is replaced by a fresh UUID4.
The ID is also stored in a ``ContextVar`` for logging.

Add this middleware *last* so it runs outermost.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

# Defaults to "" so consumers never receive ``None``.
REQUEST_ID_CTX: ContextVar[str] = ContextVar("request_id", default="")


def _inbound_id(request: Request) -> str | None:
    raw = request.headers.get(REQUEST_ID_HEADER)
    if not raw:
        return None
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return None


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach an ``X-Request-Id`` header to every HTTP response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _inbound_id(request) or str(uuid.uuid4())
        token = REQUEST_ID_CTX.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            REQUEST_ID_CTX.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
