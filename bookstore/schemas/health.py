from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "database": "connected",
                "version": "1.0.0",
                "service": "Tim Sach Nha Be API",
            }
        }
    )

    status: str  # "ok" | "degraded"
    database: str  # "connected" | "connecting" | "disconnected"
    version: str
    service: str


class ServiceInfo(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Tim Sach Nha Be API",
                "server_url": "http://localhost:3000",
                "api_docs": "http://localhost:3000/docs",
            }
        }
    )

    message: str
    server_url: str
    api_docs: str
