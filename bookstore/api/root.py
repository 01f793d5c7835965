"""Service information at the site root."""

from fastapi import APIRouter

from bookstore.config import settings
from bookstore.schemas.health import ServiceInfo

root_router = APIRouter()


@root_router.get("/", response_model=ServiceInfo, include_in_schema=False)
async def service_info() -> ServiceInfo:
    """Return the service name, its public URL and where the API docs live."""
    base_url = settings.base_url
    return ServiceInfo(
        message=settings.app_name,
        server_url=base_url,
        api_docs=f"{base_url}/docs",
    )
