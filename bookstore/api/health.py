"""Health check endpoint: always returns HTTP 200."""

from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError

from bookstore.config import settings
from bookstore.database import ConnectionManager, ConnectionState, get_store
from bookstore.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health(store: ConnectionManager = Depends(get_store)) -> HealthResponse:  # noqa: B008
    """Return application health.

    ``database`` is the connection manager's state.  When it claims to be
    connected, a ``ping`` confirms it.  The API stays up while the store is
    down, so this never returns a non-200 status.
    """
    db_status = store.state.value
    if store.state is ConnectionState.CONNECTED:
        try:
            await store.database.command("ping")
        except PyMongoError:
            db_status = ConnectionState.DISCONNECTED.value

    return HealthResponse(
        status="ok" if db_status == ConnectionState.CONNECTED else "degraded",
        database=db_status,
        version=settings.version,
        service=settings.app_name,
    )
