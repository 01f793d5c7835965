"""One JSON log line per bookstore API request.

Besides the request basics, each line records the MongoDB connection state
seen while the request was served.  The API keeps answering while the store
reconnects, so a burst of 500s can be matched to ``"store": "connecting"``
without cross-referencing the connection manager's own log.

Wire it inside :class:`~bookstore.middleware.request_id.RequestIdMiddleware`
so ``request_id`` is already set.
"""

import json
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookstore.middleware.request_id import REQUEST_ID_CTX

logger = logging.getLogger(__name__)


def _store_state(request: Request) -> str | None:
    store = getattr(request.app.state, "store", None)
    return store.state.value if store is not None else None


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response: Response = await call_next(request)
        record = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "client": request.client.host if request.client else None,
            "store": _store_state(request),
            "request_id": REQUEST_ID_CTX.get(),
        }
        # Vietnamese titles and paths stay readable in the log.
        logger.info(json.dumps(record, ensure_ascii=False))
        return response
